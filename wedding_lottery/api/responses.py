"""
路由共用的请求解析与错误响应
"""
import logging
from typing import Any, Dict

from fastapi import Request
from fastapi.responses import JSONResponse

from wedding_lottery.exceptions import DrawRejected, InvalidInput, StorageUnavailable

logger = logging.getLogger(__name__)


async def read_json_body(request: Request) -> Dict[str, Any]:
    """读取 JSON 对象请求体，格式不对时抛出 InvalidInput"""
    try:
        body = await request.json()
    except ValueError:
        raise InvalidInput("Request body must be valid JSON")
    if not isinstance(body, dict):
        raise InvalidInput("Request body must be a JSON object")
    return body


def invalid_input_response(e: InvalidInput, received: Any = None) -> JSONResponse:
    content: Dict[str, Any] = {"error": e.message}
    if received is not None:
        content["received"] = type(received).__name__
    return JSONResponse(status_code=400, content=content)


def storage_error_response(e: StorageUnavailable, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "error": error,
            "details": e.details or e.message,
            "troubleshooting": e.troubleshooting,
        },
    )


def draw_rejected_response(e: DrawRejected) -> JSONResponse:
    return JSONResponse(
        status_code=409,
        content={"success": False, "reason": e.reason, "message": e.message},
    )


def internal_error_response(error: str, e: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": error, "details": str(e)})
