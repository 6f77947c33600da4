from fastapi import APIRouter, Depends, Request
import logging

from wedding_lottery.api.deps import get_winner_ledger
from wedding_lottery.api.responses import (
    internal_error_response,
    invalid_input_response,
    read_json_body,
    storage_error_response,
)
from wedding_lottery.exceptions import InvalidInput, StorageUnavailable
from wedding_lottery.services.winner_ledger import WinnerLedger

logger = logging.getLogger(__name__)
winners_router = APIRouter(prefix="/api/winners", tags=["Winners"])


@winners_router.get("")
async def get_winners(ledger: WinnerLedger = Depends(get_winner_ledger)):
    """获取中奖者列表"""
    return ledger.snapshot().model_dump()


@winners_router.api_route("", methods=["PUT", "POST"])
async def add_winners(request: Request, ledger: WinnerLedger = Depends(get_winner_ledger)):
    """添加中奖者（与已有记录合并去重）"""
    winners = None
    try:
        body = await read_json_body(request)
        winners = body.get("winners")
        result = ledger.append(winners)
        return {
            "success": True,
            "winners": result.winners,
            "newCount": result.new_count,
            "totalCount": result.total_count,
            "message": f"成功添加 {result.new_count} 位新中奖者，总计 {result.total_count} 位",
        }
    except InvalidInput as e:
        logger.warning(f"[Winners] 中奖名单参数不合法: {e.message}")
        return invalid_input_response(e, winners if not isinstance(winners, list) else None)
    except StorageUnavailable as e:
        logger.error(f"[Winners] 保存中奖记录失败: {e.message}")
        return storage_error_response(e, "保存中奖记录失败")
    except Exception as e:
        logger.error(f"[Winners] 保存中奖记录出错: {e}", exc_info=True)
        return internal_error_response("保存中奖记录失败", e)


@winners_router.delete("")
async def reset_winners(ledger: WinnerLedger = Depends(get_winner_ledger)):
    """重置中奖者列表"""
    try:
        result = ledger.reset()
        return {"success": True, "cleared": result.cleared, "message": result.message}
    except StorageUnavailable as e:
        logger.error(f"[Winners] 重置中奖记录失败: {e.message}")
        return storage_error_response(e, "重置中奖记录失败")
