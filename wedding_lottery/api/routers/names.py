from fastapi import APIRouter, Depends, Request
import logging

from wedding_lottery.api.deps import get_name_store
from wedding_lottery.api.responses import (
    internal_error_response,
    invalid_input_response,
    read_json_body,
    storage_error_response,
)
from wedding_lottery.exceptions import InvalidInput, StorageUnavailable
from wedding_lottery.services.name_store import NameStore

logger = logging.getLogger(__name__)
names_router = APIRouter(prefix="/api/names", tags=["Names"])


@names_router.get("")
async def get_names(store: NameStore = Depends(get_name_store)):
    """读取名单，存储不可用时返回默认名单"""
    return store.load().model_dump()


@names_router.api_route("", methods=["PUT", "POST"])
async def save_names(request: Request, store: NameStore = Depends(get_name_store)):
    """
    整体覆盖保存名单
    """
    names = None
    try:
        body = await read_json_body(request)
        names = body.get("names")
        count = store.save(names)
        return {
            "success": True,
            "count": count,
            "message": f"成功保存 {count} 个名字",
        }
    except InvalidInput as e:
        logger.warning(f"[Names] 名单参数不合法: {e.message}")
        return invalid_input_response(e, names if not isinstance(names, list) else None)
    except StorageUnavailable as e:
        logger.error(f"[Names] 保存名单失败: {e.message}")
        return storage_error_response(e, "保存名单失败")
    except Exception as e:
        logger.error(f"[Names] 保存名单出错: {e}", exc_info=True)
        return internal_error_response("保存名单失败", e)
