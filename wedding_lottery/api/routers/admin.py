"""
名单管理 API
"""
from typing import Optional
from fastapi import APIRouter, Depends, Request
import logging

from wedding_lottery.api.deps import get_name_editor
from wedding_lottery.api.responses import (
    invalid_input_response,
    read_json_body,
    storage_error_response,
)
from wedding_lottery.exceptions import InvalidInput, StorageUnavailable
from wedding_lottery.services.name_editor import NameEditor

logger = logging.getLogger(__name__)
admin_router = APIRouter(prefix="/api/admin/names", tags=["Admin"])


def _saved(names: list, message: str) -> dict:
    return {"success": True, "count": len(names), "names": names, "message": message}


@admin_router.get("")
async def list_names(search: Optional[str] = None, editor: NameEditor = Depends(get_name_editor)):
    """名单列表，支持按关键字搜索"""
    entries = editor.list(search)
    return {
        "names": [entry.model_dump() for entry in entries],
        "total": len(entries),
    }


@admin_router.post("")
async def add_name(request: Request, editor: NameEditor = Depends(get_name_editor)):
    """添加名字"""
    try:
        body = await read_json_body(request)
        names = editor.add(body.get("name"))
        return _saved(names, "名单已保存")
    except InvalidInput as e:
        return invalid_input_response(e)
    except StorageUnavailable as e:
        logger.error(f"[Admin] 添加名字失败: {e.message}")
        return storage_error_response(e, "保存失败，请重试")


@admin_router.post("/reset")
async def reset_names(editor: NameEditor = Depends(get_name_editor)):
    """恢复默认名单"""
    try:
        names = editor.reset_to_default()
        return _saved(names, "已恢复默认名单")
    except StorageUnavailable as e:
        logger.error(f"[Admin] 恢复默认名单失败: {e.message}")
        return storage_error_response(e, "保存失败，请重试")


@admin_router.put("/{index}")
async def edit_name(index: int, request: Request, editor: NameEditor = Depends(get_name_editor)):
    """修改名字"""
    try:
        body = await read_json_body(request)
        names = editor.edit(index, body.get("name"))
        return _saved(names, "名单已保存")
    except InvalidInput as e:
        return invalid_input_response(e)
    except StorageUnavailable as e:
        logger.error(f"[Admin] 修改名字失败: {e.message}")
        return storage_error_response(e, "保存失败，请重试")


@admin_router.delete("/{index}")
async def delete_name(index: int, editor: NameEditor = Depends(get_name_editor)):
    """删除名字"""
    try:
        names = editor.delete(index)
        return _saved(names, "名单已保存")
    except InvalidInput as e:
        return invalid_input_response(e)
    except StorageUnavailable as e:
        logger.error(f"[Admin] 删除名字失败: {e.message}")
        return storage_error_response(e, "保存失败，请重试")
