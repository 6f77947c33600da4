from fastapi import APIRouter, BackgroundTasks, Depends
import logging

from wedding_lottery.api.deps import get_dispatcher, get_draw_engine
from wedding_lottery.api.responses import draw_rejected_response, storage_error_response
from wedding_lottery.exceptions import DrawRejected, StorageUnavailable
from wedding_lottery.services.announcer import AnnouncementDispatcher
from wedding_lottery.services.draw_engine import DrawEngine, compute_eligible

logger = logging.getLogger(__name__)
draw_router = APIRouter(prefix="/api/draw", tags=["Draw"])


@draw_router.post("")
async def draw(
    background_tasks: BackgroundTasks,
    engine: DrawEngine = Depends(get_draw_engine),
    dispatcher: AnnouncementDispatcher = Depends(get_dispatcher),
):
    """
    抽取两位中奖者并写入中奖记录。
    结果立即返回，语音播报在后台进行。
    """
    try:
        result = engine.draw()
    except DrawRejected as e:
        return draw_rejected_response(e)
    except StorageUnavailable as e:
        logger.error(f"[Draw] 读写存储失败，本次抽奖作废: {e.message}")
        return storage_error_response(e, "抽奖失败，请重试")

    background_tasks.add_task(dispatcher.announce, list(result.names))

    return {
        "success": True,
        "winners": result.names,
        "drawnAt": result.drawn_at.isoformat(),
        "remaining": result.remaining,
    }


@draw_router.get("/eligible")
async def get_eligible(engine: DrawEngine = Depends(get_draw_engine)):
    """当前可参与抽奖的名单"""
    pool = engine.name_store.names()
    winners = engine.ledger.load()
    eligible = compute_eligible(pool, winners)
    return {
        "eligible": eligible,
        "eligibleCount": len(eligible),
        "poolCount": len(pool),
        "winnerCount": len(winners),
    }


@draw_router.get("/preview")
async def preview(engine: DrawEngine = Depends(get_draw_engine)):
    """滚动动画用的随机两人，不计入中奖记录"""
    try:
        return {"names": engine.preview()}
    except DrawRejected as e:
        return draw_rejected_response(e)
