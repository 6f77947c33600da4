"""
抽奖引擎

每次抽取两位不同的中奖者，已中奖的人不会再次被抽中。
引擎本身不保存状态，名单和中奖记录都在调用时从存储读取。
"""
import logging
import random
from datetime import datetime
from typing import List, Optional, Sequence

from wedding_lottery.exceptions import DrawRejected, EmptyPool, InsufficientRemaining, PoolExhausted, StorageUnavailable
from wedding_lottery.models import DrawResult
from wedding_lottery.services.name_store import NameStore
from wedding_lottery.services.winner_ledger import WinnerLedger

logger = logging.getLogger(__name__)

PAIR_SIZE = 2


def compute_eligible(pool: Sequence[str], winners: Sequence[str]) -> List[str]:
    """名单中尚未中奖的人，保持名单原有顺序"""
    won = set(winners)
    return [name for name in pool if name not in won]


def check_drawable(pool: Sequence[str], eligible: Sequence[str]) -> None:
    """
    检查是否还能抽奖

    Raises:
        EmptyPool: 名单为空
        PoolExhausted: 名单里的人都已经中过奖
        InsufficientRemaining: 只剩一个人
    """
    if len(eligible) == 0:
        if len(pool) == 0:
            raise EmptyPool()
        raise PoolExhausted()
    if len(eligible) < PAIR_SIZE:
        raise InsufficientRemaining()


class DrawEngine:
    """
    抽奖引擎

    Args:
        name_store: 名单存储
        ledger: 中奖记录
        rng: 随机数源，默认使用 SystemRandom；测试时可传入带种子的 random.Random
    """

    def __init__(
        self,
        name_store: NameStore,
        ledger: WinnerLedger,
        rng: Optional[random.Random] = None,
    ):
        self.name_store = name_store
        self.ledger = ledger
        self.rng = rng or random.SystemRandom()

    def pick_pair(self, pool: Sequence[str], winners: Sequence[str]) -> DrawResult:
        """从可抽名单中无放回地均匀抽取两人，不写入中奖记录"""
        eligible = compute_eligible(pool, winners)
        check_drawable(pool, eligible)
        names = self.rng.sample(eligible, PAIR_SIZE)
        return DrawResult(names=names, drawn_at=datetime.now(), remaining=len(eligible) - PAIR_SIZE)

    def eligible(self) -> List[str]:
        return compute_eligible(self.name_store.names(), self.ledger.load())

    def preview(self) -> List[str]:
        """前端滚动动画用的临时结果，不计入中奖记录"""
        return self.pick_pair(self.name_store.names(), self.ledger.load()).names

    def draw(self) -> DrawResult:
        """
        正式抽奖：抽取两人并写入中奖记录

        Raises:
            DrawRejected: 不满足抽奖条件，中奖记录不变
            StorageUnavailable: 名单或中奖记录读写失败
        """
        # 读取失败直接中止
        pool = self.name_store.current()
        winners = self.ledger.current()

        try:
            result = self.pick_pair(pool, winners)
        except DrawRejected as e:
            logger.info(f"[Draw] 抽奖被拒绝: reason={e.reason}, pool={len(pool)}, winners={len(winners)}")
            raise

        appended = self.ledger.append(result.names)
        if appended.new_count != PAIR_SIZE:
            logger.error(f"[Draw] 中奖记录已被其他操作修改，本次抽奖作废: new_count={appended.new_count}")
            raise StorageUnavailable("中奖记录写入不一致，请重新抽奖", details=f"expected {PAIR_SIZE} new winners, got {appended.new_count}")
        logger.info(
            f"[Draw] 抽中 {result.names[0]} 和 {result.names[1]}，"
            f"中奖总数 {appended.total_count}，剩余 {result.remaining}"
        )
        return result
