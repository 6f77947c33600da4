"""
婚礼抽奖服务

主入口
"""
import logging
import uvicorn
from contextlib import asynccontextmanager
from dotenv import load_dotenv
from wedding_lottery.utils.logger import setup_logging

# 加载环境变量 (必须在日志配置前加载，以便读取 LOG_LEVEL_*)
load_dotenv()

setup_logging()
startup_logger = logging.getLogger("wedding_lottery.startup")

from wedding_lottery import __version__
from wedding_lottery.config import Config
from wedding_lottery.services.storage import init_store


@asynccontextmanager
async def lifespan(app):
    """应用生命周期管理"""
    store = init_store(
        backend=Config.STORAGE_BACKEND,
        db_path=Config.LOTTERY_DB_PATH,
        timeout=Config.STORAGE_TIMEOUT,
    )
    if store is None:
        startup_logger.error("Storage unavailable, reads fall back to defaults and writes will fail.")
    else:
        startup_logger.info(f"Storage initialized (backend: {Config.STORAGE_BACKEND})")

    if Config.tts_configured():
        startup_logger.info("Youdao TTS configured.")
    else:
        startup_logger.warning("Youdao TTS not configured, announcements use on-device speech.")
    yield


from fastapi import FastAPI
from scalar_fastapi import get_scalar_api_reference
from fastapi.middleware.cors import CORSMiddleware

app = FastAPI(
    title="Wedding Lottery",
    description="婚礼抽奖：名单管理、抽奖、中奖记录与语音播报",
    version=__version__,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

from wedding_lottery.api.routers import (
    admin_router,
    announce_router,
    draw_router,
    names_router,
    winners_router,
)

app.include_router(names_router)
app.include_router(winners_router)
app.include_router(draw_router)
app.include_router(announce_router)
app.include_router(admin_router)


@app.get("/")
async def root():
    """根路径"""
    return {"message": "Wedding Lottery is running", "version": __version__}


@app.get("/scalar", include_in_schema=False)
async def scalar_docs():
    """Scalar API 文档"""
    return get_scalar_api_reference(
        openapi_url=app.openapi_url,
        title=app.title,
    )


if __name__ == "__main__":
    uvicorn.run("main:app", host=Config.HOST, port=Config.PORT, reload=True)
