"""
有道智云语音合成服务

文档: https://ai.youdao.com/DOCSIRMA/html/tts/api/yyhc/index.html
签名方式 v3: sha256(appKey + input + salt + curtime + appSecret)
"""
import hashlib
import logging
import time
import uuid
from typing import Dict, Optional

import requests

from wedding_lottery.config import Config
from wedding_lottery.exceptions import TTSProviderError

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


def truncate_input(q: str) -> str:
    """
    签名用的 input: 长度不超过 20 直接使用，
    否则取前 10 个字符 + 长度 + 后 10 个字符
    """
    if not q:
        return q
    size = len(q)
    if size <= 20:
        return q
    return q[:10] + str(size) + q[size - 10:]


def calculate_sign(app_key: str, app_secret: str, q: str, salt: str, curtime: str) -> str:
    raw = app_key + truncate_input(q) + salt + curtime + app_secret
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def add_auth_params(app_key: str, app_secret: str, params: Dict[str, str]) -> Dict[str, str]:
    """为请求参数补充 appKey / salt / curtime / sign"""
    salt = str(uuid.uuid4())
    curtime = str(int(time.time()))
    params["appKey"] = app_key
    params["salt"] = salt
    params["curtime"] = curtime
    params["signType"] = "v3"
    params["sign"] = calculate_sign(app_key, app_secret, params["q"], salt, curtime)
    return params


class YoudaoTTSClient:
    """有道语音合成客户端，返回 mp3 音频数据"""

    def __init__(
        self,
        app_key: Optional[str] = None,
        app_secret: Optional[str] = None,
        url: Optional[str] = None,
        voice_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.app_key = app_key if app_key is not None else Config.YOUDAO_APP_KEY
        self.app_secret = app_secret if app_secret is not None else Config.YOUDAO_APP_SECRET
        self.url = url or Config.YOUDAO_TTS_URL
        self.voice_name = voice_name or Config.TTS_VOICE_NAME
        self.timeout = timeout or Config.TTS_TIMEOUT

    @property
    def configured(self) -> bool:
        return bool(self.app_key and self.app_secret)

    def synthesize(self, text: str) -> bytes:
        """
        合成语音

        Raises:
            TTSProviderError: 未配置密钥、网络失败、接口报错或返回的不是音频
        """
        if not self.configured:
            raise TTSProviderError("TTS service not configured", details="YOUDAO_APP_KEY / YOUDAO_APP_SECRET missing")

        params = add_auth_params(self.app_key, self.app_secret, {
            "q": text,
            "voiceName": self.voice_name,
            "format": "mp3",
        })
        logger.info(f"[TTS] 请求有道语音合成: len={len(text)}, sign={params['sign'][:10]}...")

        try:
            response = requests.post(
                self.url,
                data=params,
                headers={"User-Agent": USER_AGENT},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"[TTS] 请求失败: {e}")
            raise TTSProviderError("TTS service unavailable", details=str(e)) from e

        if not response.ok:
            logger.error(f"[TTS] 接口返回错误 {response.status_code}: {response.text[:200]}")
            raise TTSProviderError(
                f"TTS API returned {response.status_code}",
                details=response.text,
            )

        content_type = response.headers.get("Content-Type", "")
        if "audio" in content_type:
            logger.info(f"[TTS] 合成成功: {len(response.content)} bytes")
            return response.content

        # 非音频响应即为接口错误，错误信息在 JSON 里
        try:
            error_data = response.json()
        except ValueError:
            logger.error(f"[TTS] 非音频响应: {response.text[:200]}")
            raise TTSProviderError("TTS service error", details=response.text)

        error_code = str(error_data.get("errorCode", "unknown")) if isinstance(error_data, dict) else "unknown"
        logger.error(f"[TTS] 有道返回错误: errorCode={error_code}")
        raise TTSProviderError("TTS service error", details=error_data, error_code=error_code)
