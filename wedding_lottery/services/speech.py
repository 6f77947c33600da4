"""
本机语音合成 (pyttsx3)

有道接口不可用时的兜底方案。任何失败都只记录日志，不向外抛出。
"""
import logging

logger = logging.getLogger(__name__)

LANGUAGE = "zh"
RATE_FACTOR = 0.8
PITCH_FACTOR = 1.2


class LocalSpeechEngine:

    def __init__(self, language: str = LANGUAGE, rate_factor: float = RATE_FACTOR, pitch_factor: float = PITCH_FACTOR):
        self.language = language
        self.rate_factor = rate_factor
        self.pitch_factor = pitch_factor

    def _select_voice(self, engine) -> None:
        for voice in engine.getProperty("voices") or []:
            languages = [
                lang.decode("utf-8", "ignore") if isinstance(lang, bytes) else str(lang)
                for lang in (getattr(voice, "languages", None) or [])
            ]
            tags = [voice.id or "", voice.name or ""] + languages
            if any(self.language in tag.lower() for tag in tags):
                engine.setProperty("voice", voice.id)
                return
        logger.info(f"[Speech] 没有找到 {self.language} 语音，使用系统默认语音")

    def _apply_pitch(self, engine) -> None:
        # 只有部分驱动 (espeak) 支持 pitch
        try:
            pitch = engine.getProperty("pitch")
            engine.setProperty("pitch", pitch * self.pitch_factor)
        except (KeyError, TypeError, AttributeError) as e:
            logger.debug(f"[Speech] 当前驱动不支持调整音调: {e}")

    def speak(self, text: str) -> bool:
        """
        朗读文本，成功返回 True；pyttsx3 未安装或驱动不可用时返回 False
        """
        try:
            # 延迟导入，没有音频设备的服务器上也能正常启动
            import pyttsx3
        except ImportError:
            logger.warning("[Speech] 未安装 pyttsx3，跳过本机播报")
            return False

        try:
            engine = pyttsx3.init()
            self._select_voice(engine)
            engine.setProperty("rate", int(engine.getProperty("rate") * self.rate_factor))
            self._apply_pitch(engine)
            engine.say(text)
            engine.runAndWait()
            logger.info(f"[Speech] 本机播报完成: len={len(text)}")
            return True
        except Exception as e:
            logger.error(f"[Speech] 本机播报失败: {e}")
            return False
