"""
共享的服务配置
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    # 存储
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "sqlite").lower()
    LOTTERY_DB_PATH = os.getenv("LOTTERY_DB_PATH", "data/lottery.db")
    STORAGE_TIMEOUT = float(os.getenv("STORAGE_TIMEOUT", "5"))

    NAMES_KEY = os.getenv("NAMES_KEY", "wedding-lottery-names")
    WINNERS_KEY = os.getenv("WINNERS_KEY", "wedding-lottery-winners")

    # 有道语音合成
    YOUDAO_APP_KEY = os.getenv("YOUDAO_APP_KEY", "")
    YOUDAO_APP_SECRET = os.getenv("YOUDAO_APP_SECRET", "")
    YOUDAO_TTS_URL = os.getenv("YOUDAO_TTS_URL", "https://openapi.youdao.com/ttsapi")
    TTS_VOICE_NAME = os.getenv("TTS_VOICE_NAME", "youxiaozhi")
    TTS_TIMEOUT = float(os.getenv("TTS_TIMEOUT", "5"))

    AUDIO_DIR = os.getenv("AUDIO_DIR", "data/announcements")

    # 服务
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "8000"))

    @classmethod
    def tts_configured(cls) -> bool:
        return bool(cls.YOUDAO_APP_KEY and cls.YOUDAO_APP_SECRET)
