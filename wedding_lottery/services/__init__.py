"""
业务服务模块
"""

from .storage import KVStore, MemoryKVStore, SqliteKVStore, init_store, get_store
from .name_store import DEFAULT_NAMES, NameStore
from .winner_ledger import WinnerLedger
from .draw_engine import DrawEngine, compute_eligible, check_drawable
from .tts import YoudaoTTSClient
from .speech import LocalSpeechEngine
from .announcer import AnnouncementDispatcher, FileAudioSink, build_phrase
from .name_editor import NameEditor

__all__ = [
    "KVStore",
    "MemoryKVStore",
    "SqliteKVStore",
    "init_store",
    "get_store",
    "DEFAULT_NAMES",
    "NameStore",
    "WinnerLedger",
    "DrawEngine",
    "compute_eligible",
    "check_drawable",
    "YoudaoTTSClient",
    "LocalSpeechEngine",
    "AnnouncementDispatcher",
    "FileAudioSink",
    "build_phrase",
    "NameEditor",
]
