"""
键值存储模块

名单与中奖记录都以 JSON 字符串的形式保存在一个简单的 key-value 表里。
提供 SQLite 与内存两种实现，所有存储异常统一转换为 StorageUnavailable。
"""
import logging
import os
import sqlite3
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Optional

from wedding_lottery.exceptions import StorageUnavailable

logger = logging.getLogger(__name__)


class KVStore(ABC):
    """
    键值存储接口
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """删除 key，返回删除前 key 是否存在"""
        pass


class MemoryKVStore(KVStore):
    """进程内存储，重启即丢失"""

    def __init__(self):
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._data.pop(key, None) is not None


class SqliteKVStore(KVStore):
    """
    SQLite 键值存储

    每次操作单独建立连接，并在退出时关闭。
    """

    def __init__(self, db_path: str, timeout: float = 5.0):
        self.db_path = db_path
        self.timeout = timeout

        db_dir = os.path.dirname(db_path)
        if db_dir and not os.path.exists(db_dir):
            os.makedirs(db_dir, exist_ok=True)

        with self._connection() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT DEFAULT CURRENT_TIMESTAMP
                )
                """
            )
            conn.commit()

    @contextmanager
    def _connection(self):
        """获取数据库连接 (Context Manager)"""
        try:
            conn = sqlite3.connect(self.db_path, timeout=self.timeout)
        except sqlite3.Error as e:
            logger.error(f"[Storage] 连接失败: path={self.db_path}, error={e}")
            raise StorageUnavailable("存储连接失败", details=str(e)) from e
        try:
            yield conn
        except sqlite3.Error as e:
            logger.error(f"[Storage] 操作失败: path={self.db_path}, error={e}")
            raise StorageUnavailable("存储操作失败", details=str(e)) from e
        finally:
            conn.close()

    def get(self, key: str) -> Optional[str]:
        with self._connection() as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
            return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP
                """,
                (key, value),
            )
            conn.commit()

    def delete(self, key: str) -> bool:
        with self._connection() as conn:
            cursor = conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
            return cursor.rowcount > 0


# 全局存储实例
_store: Optional[KVStore] = None


def init_store(backend: str = "sqlite", db_path: str = "data/lottery.db", timeout: float = 5.0) -> Optional[KVStore]:
    """
    初始化全局存储

    SQLite 初始化失败时不抛出异常，之后的读操作回退默认值，写操作报告 StorageUnavailable。
    """
    global _store

    if backend == "memory":
        _store = MemoryKVStore()
        logger.info("[Storage] 使用内存存储")
        return _store

    if backend != "sqlite":
        logger.error(f"[Storage] 未知的存储类型: {backend}，改用内存存储")
        _store = MemoryKVStore()
        return _store

    try:
        _store = SqliteKVStore(db_path, timeout=timeout)
        logger.info(f"[Storage] SQLite 存储路径: {db_path}")
    except (StorageUnavailable, OSError) as e:
        logger.error(f"[Storage] SQLite 初始化失败: {e}")
        _store = None
    return _store


def get_store() -> KVStore:
    if _store is None:
        raise StorageUnavailable("存储未初始化", details="init_store() failed or was never called")
    return _store
