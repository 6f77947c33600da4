import pytest

from wedding_lottery.exceptions import StorageUnavailable
from wedding_lottery.services import storage
from wedding_lottery.services.storage import MemoryKVStore, SqliteKVStore, init_store


def test_sqlite_get_set_delete(tmp_path):
    store = SqliteKVStore(str(tmp_path / "lottery.db"))

    assert store.get("names") is None
    store.set("names", '["张三"]')
    store.set("names", '["李四"]')
    assert store.get("names") == '["李四"]'

    assert store.delete("names") is True
    assert store.delete("names") is False
    assert store.get("names") is None


def test_sqlite_creates_missing_directory(tmp_path):
    db_path = tmp_path / "nested" / "dir" / "lottery.db"
    SqliteKVStore(str(db_path))
    assert db_path.exists()


def test_sqlite_persists_across_instances(tmp_path):
    db_path = str(tmp_path / "lottery.db")
    SqliteKVStore(db_path).set("k", "v")
    assert SqliteKVStore(db_path).get("k") == "v"


def test_sqlite_unreachable_path_raises_storage_unavailable(tmp_path):
    # 目录位置被普通文件占用，无法打开数据库
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    with pytest.raises((StorageUnavailable, OSError)):
        SqliteKVStore(str(blocker / "lottery.db"))


def test_memory_store_delete_reports_existence():
    store = MemoryKVStore()
    store.set("a", "1")
    assert store.delete("a") is True
    assert store.delete("a") is False


def test_init_store_backends(tmp_path, monkeypatch):
    monkeypatch.setattr(storage, "_store", None)

    assert isinstance(init_store("memory"), MemoryKVStore)
    assert isinstance(init_store("sqlite", str(tmp_path / "a.db")), SqliteKVStore)
    assert isinstance(init_store("nosuchbackend"), MemoryKVStore)


def test_get_store_without_init_raises(monkeypatch):
    monkeypatch.setattr(storage, "_store", None)
    with pytest.raises(StorageUnavailable):
        storage.get_store()
