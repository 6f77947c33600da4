"""
名单清洗工具
"""
import json
import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Any, List, Optional

from wedding_lottery.exceptions import InvalidInput

logger = logging.getLogger(__name__)


def clean_names(value: Any, label: str = "Names") -> List[str]:
    """
    校验并清洗客户端提交的名字列表

    非字符串和空白项会被丢弃，重复项只保留第一次出现的位置。

    Raises:
        InvalidInput: 不是序列（字符串不算）、序列为空、或清洗后没有有效名字
    """
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise InvalidInput(f"{label} must be an array")
    if len(value) == 0:
        raise InvalidInput(f"{label} array cannot be empty")

    cleaned: List[str] = []
    seen = set()
    for item in value:
        name = item.strip() if isinstance(item, str) else ""
        if name and name not in seen:
            seen.add(name)
            cleaned.append(name)

    if not cleaned:
        raise InvalidInput(f"No valid {label.lower()} provided")
    return cleaned


def decode_name_list(raw: Optional[str]) -> Optional[List[str]]:
    """解析存储中的 JSON 列表，格式不对时返回 None"""
    if raw is None:
        return None
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.warning(f"[Storage] 存储内容不是合法 JSON: {e}")
        return None
    if not isinstance(data, list):
        return None
    return [item for item in data if isinstance(item, str)]


def encode_name_list(names: List[str]) -> str:
    return json.dumps(names, ensure_ascii=False)


def now_iso() -> str:
    return datetime.now().isoformat()
