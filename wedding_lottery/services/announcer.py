"""
中奖播报

播报顺序：有道语音合成 -> 本机语音合成 -> 放弃。
抽奖结果在播报之前就已经写入并返回，播报失败不影响抽奖状态。
"""
import logging
import os
from typing import Callable, Optional, Sequence

from wedding_lottery.config import Config
from wedding_lottery.services.speech import LocalSpeechEngine
from wedding_lottery.services.tts import YoudaoTTSClient

logger = logging.getLogger(__name__)

CHANNEL_PROVIDER = "provider"
CHANNEL_LOCAL = "local"


def build_phrase(names: Sequence[str]) -> str:
    """生成播报文案，两个人用"你们"，一个人用"你" """
    if not names:
        raise ValueError("names must not be empty")
    if len(names) >= 2:
        return f"让幸运之神为新人送上祝福。恭喜{names[0]}和{names[1]}中奖！愿你们幸福美满！"
    return f"让幸运之神为新人送上祝福。恭喜{names[0]}中奖！愿你幸福美满！"


class FileAudioSink:
    """把合成好的音频保存为 latest.mp3，供前端拉取播放"""

    def __init__(self, audio_dir: Optional[str] = None):
        self.audio_dir = audio_dir or Config.AUDIO_DIR

    @property
    def latest_path(self) -> str:
        return os.path.join(self.audio_dir, "latest.mp3")

    def __call__(self, audio: bytes) -> str:
        os.makedirs(self.audio_dir, exist_ok=True)
        tmp_path = self.latest_path + ".tmp"
        with open(tmp_path, "wb") as f:
            f.write(audio)
        os.replace(tmp_path, self.latest_path)
        logger.info(f"[Announce] 音频已保存: {self.latest_path} ({len(audio)} bytes)")
        return self.latest_path


class AnnouncementDispatcher:

    def __init__(
        self,
        tts_client: Optional[YoudaoTTSClient] = None,
        local_engine: Optional[LocalSpeechEngine] = None,
        audio_sink: Optional[Callable[[bytes], object]] = None,
    ):
        self.tts_client = tts_client or YoudaoTTSClient()
        self.local_engine = local_engine or LocalSpeechEngine()
        self.audio_sink = audio_sink or FileAudioSink()

    def announce(self, names: Sequence[str]) -> Optional[str]:
        """
        播报中奖者，永不抛出异常

        Returns:
            实际使用的播报方式: "provider" / "local"，全部失败时返回 None
        """
        try:
            text = build_phrase(names)
        except ValueError:
            logger.warning("[Announce] 没有中奖者，跳过播报")
            return None

        try:
            audio = self.tts_client.synthesize(text)
            self.audio_sink(audio)
            logger.info(f"[Announce] 有道语音播报成功: {', '.join(names)}")
            return CHANNEL_PROVIDER
        except Exception as e:
            logger.warning(f"[Announce] 有道语音不可用，改用本机语音: {e}")

        try:
            spoken = self.local_engine.speak(text)
        except Exception as e:
            logger.warning(f"[Announce] 本机语音播报出错: {e}")
            spoken = False

        if spoken:
            return CHANNEL_LOCAL
        logger.warning("[Announce] 有道语音与本机语音均不可用，已跳过播报")
        return None
