"""
抽奖服务的错误类型

- InvalidInput: 请求体不合法，调用方可自行修正
- StorageUnavailable: 存储不可达或配置错误
- DrawRejected: 抽奖被业务规则拒绝（名单为空 / 全部中奖 / 剩余不足）
- TTSProviderError: 语音合成接口失败（两种播报方式都失败时只记日志，不抛异常）
"""
from typing import Any, Dict, Optional

STORAGE_TROUBLESHOOTING: Dict[str, str] = {
    "step1": "检查环境变量 STORAGE_BACKEND / LOTTERY_DB_PATH 配置",
    "step2": "确认数据库文件所在目录可读写",
    "step3": "检查存储连接是否超时 (STORAGE_TIMEOUT)",
}


class LotteryError(Exception):
    """抽奖服务错误基类"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(LotteryError):
    pass


class StorageUnavailable(LotteryError):

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.details = details
        self.troubleshooting = dict(STORAGE_TROUBLESHOOTING)


class DrawRejected(LotteryError):
    """抽奖前置条件不满足，属于正常业务提示，不是程序错误"""

    reason = "draw_rejected"


class EmptyPool(DrawRejected):
    reason = "empty_pool"

    def __init__(self, message: str = "名字池为空，请先添加名字！"):
        super().__init__(message)


class PoolExhausted(DrawRejected):
    reason = "pool_exhausted"

    def __init__(self, message: str = "所有人员都已中奖！请重置中奖名单后再次抽奖。"):
        super().__init__(message)


class InsufficientRemaining(DrawRejected):
    reason = "insufficient_remaining"

    def __init__(self, message: str = "剩余人数不足，无法抽取两个人名！"):
        super().__init__(message)


class TTSProviderError(LotteryError):
    """语音合成接口调用失败或返回了非音频内容"""

    def __init__(self, message: str, details: Any = None, error_code: Optional[str] = None):
        super().__init__(message)
        self.details = details
        self.error_code = error_code

