from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse, JSONResponse, Response
import logging
import os

from wedding_lottery.api.deps import get_audio_sink, get_tts_client
from wedding_lottery.api.responses import invalid_input_response, read_json_body
from wedding_lottery.exceptions import InvalidInput, TTSProviderError
from wedding_lottery.services.announcer import FileAudioSink
from wedding_lottery.services.tts import YoudaoTTSClient

logger = logging.getLogger(__name__)
announce_router = APIRouter(prefix="/api/announce", tags=["Announce"])


@announce_router.post("")
async def synthesize(request: Request, client: YoudaoTTSClient = Depends(get_tts_client)):
    """
    调用有道语音合成，成功返回 mp3 音频，失败返回 JSON 错误（前端据此改用本机语音）
    """
    try:
        body = await read_json_body(request)
        text = body.get("text")
        if not text or not isinstance(text, str):
            raise InvalidInput("Missing text parameter")
    except InvalidInput as e:
        return invalid_input_response(e)

    try:
        audio = client.synthesize(text)
    except TTSProviderError as e:
        content = {"error": e.message, "details": e.details}
        if e.error_code:
            content["youdaoError"] = e.error_code
        return JSONResponse(status_code=500, content=content)

    return Response(
        content=audio,
        media_type="audio/mpeg",
        headers={"Cache-Control": "public, max-age=3600"},
    )


@announce_router.get("/latest")
async def latest_audio(sink: FileAudioSink = Depends(get_audio_sink)):
    """最近一次抽奖播报的音频"""
    if not os.path.exists(sink.latest_path):
        return JSONResponse(status_code=404, content={"error": "暂无播报音频"})
    return FileResponse(sink.latest_path, media_type="audio/mpeg")
