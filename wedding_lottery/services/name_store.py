"""
名单存储服务
"""
import logging
from typing import Any, List, Optional

from wedding_lottery.config import Config
from wedding_lottery.exceptions import StorageUnavailable
from wedding_lottery.models import NamePool
from wedding_lottery.services.storage import KVStore, get_store
from wedding_lottery.utils.names import clean_names, decode_name_list, encode_name_list, now_iso

logger = logging.getLogger(__name__)

# 默认名单（存储中没有数据时使用）
DEFAULT_NAMES = [
    "张三", "李四", "王五", "赵六", "钱七", "孙八", "周九", "吴十",
    "郑十一", "王十二", "冯十三", "陈十四", "褚十五", "卫十六",
    "蒋十七", "沈十八", "韩十九", "杨二十", "朱二十一", "秦二十二",
]


class NameStore:
    """
    名单的读取与整体覆盖

    增删改需要调用方读出完整名单、修改后再整体 save。
    """

    def __init__(self, store: Optional[KVStore] = None, key: Optional[str] = None):
        self._store = store
        self.key = key or Config.NAMES_KEY

    @property
    def updated_key(self) -> str:
        return f"{self.key}_updated"

    def _kv(self) -> KVStore:
        return self._store if self._store is not None else get_store()

    def current(self) -> List[str]:
        """
        读出当前名单用于修改或抽奖，没有保存过时返回默认名单

        Raises:
            StorageUnavailable: 读取失败（不能用默认名单覆盖真实名单）
        """
        names = decode_name_list(self._kv().get(self.key))
        return names if names else list(DEFAULT_NAMES)

    def load(self) -> NamePool:
        """读取名单；存储不可用或没有数据时返回默认名单（不写回存储）"""
        try:
            names = decode_name_list(self._kv().get(self.key))
        except StorageUnavailable as e:
            logger.error(f"[Names] 读取名单失败: {e.message}, details={e.details}")
            return NamePool(names=list(DEFAULT_NAMES), source="default", message="读取失败，使用默认名单")

        if names:
            logger.info(f"[Names] 从存储读取 {len(names)} 个名字")
            return NamePool(names=names, source="persisted", message="数据来源：存储")

        logger.info("[Names] 存储中没有名单，使用默认名单")
        return NamePool(names=list(DEFAULT_NAMES), source="default", message="数据来源：默认名单")

    def save(self, names: Any) -> int:
        """
        整体覆盖保存名单

        Returns:
            实际保存的名字数量

        Raises:
            InvalidInput: 名单格式不对或没有有效名字
            StorageUnavailable: 写入失败
        """
        valid_names = clean_names(names, "Names")

        kv = self._kv()
        kv.set(self.key, encode_name_list(valid_names))
        kv.set(self.updated_key, now_iso())

        logger.info(f"[Names] 成功保存 {len(valid_names)} 个名字")
        return len(valid_names)

    def names(self) -> List[str]:
        return self.load().names
