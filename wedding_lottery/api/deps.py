"""
路由依赖：服务实例

服务对象都不持有状态，存储通过 init_store() 在启动时初始化。
测试中可用 app.dependency_overrides 替换。
"""
from fastapi import Depends

from wedding_lottery.services.announcer import AnnouncementDispatcher, FileAudioSink
from wedding_lottery.services.draw_engine import DrawEngine
from wedding_lottery.services.name_editor import NameEditor
from wedding_lottery.services.name_store import NameStore
from wedding_lottery.services.tts import YoudaoTTSClient
from wedding_lottery.services.winner_ledger import WinnerLedger


def get_name_store() -> NameStore:
    return NameStore()


def get_winner_ledger() -> WinnerLedger:
    return WinnerLedger()


def get_draw_engine(
    name_store: NameStore = Depends(get_name_store),
    ledger: WinnerLedger = Depends(get_winner_ledger),
) -> DrawEngine:
    return DrawEngine(name_store, ledger)


def get_name_editor(name_store: NameStore = Depends(get_name_store)) -> NameEditor:
    return NameEditor(name_store)


def get_tts_client() -> YoudaoTTSClient:
    return YoudaoTTSClient()


def get_audio_sink() -> FileAudioSink:
    return FileAudioSink()


def get_dispatcher(
    tts_client: YoudaoTTSClient = Depends(get_tts_client),
    audio_sink: FileAudioSink = Depends(get_audio_sink),
) -> AnnouncementDispatcher:
    return AnnouncementDispatcher(tts_client=tts_client, audio_sink=audio_sink)
