"""
中奖记录服务
"""
import logging
from typing import Any, List, Optional

from wedding_lottery.config import Config
from wedding_lottery.exceptions import StorageUnavailable
from wedding_lottery.models import AppendResult, ResetResult, WinnerSnapshot
from wedding_lottery.services.storage import KVStore, get_store
from wedding_lottery.utils.names import clean_names, decode_name_list, encode_name_list, now_iso

logger = logging.getLogger(__name__)


class WinnerLedger:
    """
    中奖名单：只追加（自动去重），仅能通过 reset 整体清空
    """

    def __init__(self, store: Optional[KVStore] = None, key: Optional[str] = None):
        self._store = store
        self.key = key or Config.WINNERS_KEY

    @property
    def updated_key(self) -> str:
        return f"{self.key}_updated"

    @property
    def reset_key(self) -> str:
        return f"{self.key}_reset"

    def _kv(self) -> KVStore:
        return self._store if self._store is not None else get_store()

    def load(self) -> List[str]:
        """读取中奖名单，出错时返回空列表"""
        return self.snapshot().winners

    def current(self) -> List[str]:
        """
        读出当前中奖名单用于抽奖

        Raises:
            StorageUnavailable: 读取失败
        """
        return decode_name_list(self._kv().get(self.key)) or []

    def snapshot(self) -> WinnerSnapshot:
        try:
            winners = decode_name_list(self._kv().get(self.key)) or []
        except StorageUnavailable as e:
            logger.error(f"[Winners] 读取中奖记录失败: {e.message}, details={e.details}")
            return WinnerSnapshot(winners=[], source="error", message="读取中奖记录失败")

        if winners:
            logger.info(f"[Winners] 读取到 {len(winners)} 位中奖者")
            return WinnerSnapshot(winners=winners, source="persisted", message=f"共有 {len(winners)} 位中奖者")
        return WinnerSnapshot(winners=[], source="persisted", message="暂无中奖记录")

    def append(self, new_winners: Any) -> AppendResult:
        """
        合并新的中奖者（已存在的名字会被忽略）

        Raises:
            InvalidInput: 参数不是列表或没有有效名字
            StorageUnavailable: 读写存储失败
        """
        valid_winners = clean_names(new_winners, "Winners")

        kv = self._kv()
        existing = decode_name_list(kv.get(self.key)) or []
        existing_set = set(existing)

        added = [name for name in valid_winners if name not in existing_set]
        merged = existing + added

        kv.set(self.key, encode_name_list(merged))
        kv.set(self.updated_key, now_iso())

        logger.info(f"[Winners] 新增 {len(added)} 位中奖者，总计 {len(merged)} 位")
        return AppendResult(winners=merged, new_count=len(added), total_count=len(merged))

    def reset(self) -> ResetResult:
        """
        清空中奖记录

        Raises:
            StorageUnavailable: 存储不可达（与"本来就没有记录"区分开）
        """
        kv = self._kv()
        cleared = len(decode_name_list(kv.get(self.key)) or [])
        existed = kv.delete(self.key)
        kv.set(self.reset_key, now_iso())

        if existed:
            logger.info(f"[Winners] 已清空 {cleared} 条中奖记录")
            return ResetResult(cleared=cleared, message="中奖记录已重置")
        logger.info("[Winners] 中奖记录本来为空，无需清空")
        return ResetResult(cleared=0, message="暂无中奖记录，无需重置")
