import random

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from wedding_lottery.api import deps
from wedding_lottery.api.routers import (
    admin_router,
    announce_router,
    draw_router,
    names_router,
    winners_router,
)
from wedding_lottery.exceptions import StorageUnavailable
from wedding_lottery.services.draw_engine import DrawEngine
from wedding_lottery.services.name_store import NameStore
from wedding_lottery.services.storage import KVStore, MemoryKVStore
from wedding_lottery.services.winner_ledger import WinnerLedger


class BrokenKVStore(KVStore):
    """每次调用都失败的存储，模拟后端不可达"""

    def get(self, key):
        raise StorageUnavailable("存储连接失败", details="connection refused")

    def set(self, key, value):
        raise StorageUnavailable("存储连接失败", details="connection refused")

    def delete(self, key):
        raise StorageUnavailable("存储连接失败", details="connection refused")


class FlakyKVStore(MemoryKVStore):
    """内存存储，fail_next_get 次读取会失败，之后恢复正常"""

    def __init__(self):
        super().__init__()
        self.fail_next_get = 0

    def get(self, key):
        if self.fail_next_get > 0:
            self.fail_next_get -= 1
            raise StorageUnavailable("存储连接超时", details="timeout")
        return super().get(key)


class RecordingDispatcher:
    def __init__(self):
        self.calls = []

    def announce(self, names):
        self.calls.append(list(names))
        return "local"


@pytest.fixture
def kv():
    return MemoryKVStore()


@pytest.fixture
def broken_kv():
    return BrokenKVStore()


@pytest.fixture
def flaky_kv():
    return FlakyKVStore()


@pytest.fixture
def name_store(kv):
    return NameStore(kv)


@pytest.fixture
def ledger(kv):
    return WinnerLedger(kv)


@pytest.fixture
def engine(name_store, ledger):
    return DrawEngine(name_store, ledger, rng=random.Random(42))


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def app(name_store, ledger, dispatcher):
    app = FastAPI()
    for router in (names_router, winners_router, draw_router, announce_router, admin_router):
        app.include_router(router)
    app.dependency_overrides[deps.get_name_store] = lambda: name_store
    app.dependency_overrides[deps.get_winner_ledger] = lambda: ledger
    app.dependency_overrides[deps.get_dispatcher] = lambda: dispatcher
    return app


@pytest.fixture
def client(app):
    return TestClient(app)
