"""
名单管理（增删改查 / 恢复默认）

每个操作都是读出完整名单、修改、再整体写回，
并在服务端重新校验空白和重名，不依赖前端的检查。
"""
import logging
from typing import Any, List, Optional

from wedding_lottery.exceptions import InvalidInput
from wedding_lottery.models import NameEntry
from wedding_lottery.services.name_store import DEFAULT_NAMES, NameStore

logger = logging.getLogger(__name__)


def _clean_name(name: Any) -> str:
    cleaned = name.strip() if isinstance(name, str) else ""
    if not cleaned:
        raise InvalidInput("请输入有效的名字")
    return cleaned


class NameEditor:

    def __init__(self, name_store: NameStore):
        self.name_store = name_store

    def _check_index(self, names: List[str], index: int) -> None:
        if not isinstance(index, int) or index < 0 or index >= len(names):
            raise InvalidInput(f"序号超出范围: {index}")

    def list(self, search: Optional[str] = None) -> List[NameEntry]:
        """列出名单，search 不区分大小写做子串匹配；返回的 index 是在完整名单中的位置"""
        names = self.name_store.names()
        term = (search or "").strip().lower()
        return [
            NameEntry(index=i, name=name)
            for i, name in enumerate(names)
            if term in name.lower()
        ]

    def add(self, name: Any) -> List[str]:
        new_name = _clean_name(name)
        names = self.name_store.current()
        if new_name in names:
            raise InvalidInput("该名字已存在")

        updated = names + [new_name]
        self.name_store.save(updated)
        logger.info(f"[Admin] 添加名字: {new_name}")
        return updated

    def edit(self, index: int, name: Any) -> List[str]:
        new_name = _clean_name(name)
        names = self.name_store.current()
        self._check_index(names, index)
        if new_name != names[index] and new_name in names:
            raise InvalidInput("该名字已存在")

        updated = list(names)
        old_name, updated[index] = updated[index], new_name
        self.name_store.save(updated)
        logger.info(f"[Admin] 修改名字: {old_name} -> {new_name}")
        return updated

    def delete(self, index: int) -> List[str]:
        names = self.name_store.current()
        self._check_index(names, index)
        if len(names) == 1:
            raise InvalidInput("名单至少需要保留一个名字")

        updated = names[:index] + names[index + 1:]
        self.name_store.save(updated)
        logger.info(f"[Admin] 删除名字: {names[index]}")
        return updated

    def reset_to_default(self) -> List[str]:
        self.name_store.save(list(DEFAULT_NAMES))
        logger.info("[Admin] 名单已恢复默认")
        return list(DEFAULT_NAMES)
