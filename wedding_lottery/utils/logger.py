import logging
import os
import sys
from typing import Dict

_OFF_VALUES = ["OFF", "DISABLE", "FALSE", "NO", "0", "NONE"]


def setup_logging():
    """
    配置全局和模块级日志系统

    环境变量命名规则: LOG_LEVEL_<MODULE_ALIAS>

    支持的 MODULE_ALIAS:
    - STORAGE  -> wedding_lottery.services.storage / utils.names
    - NAMES    -> wedding_lottery.services.name_store / name_editor
    - WINNERS  -> wedding_lottery.services.winner_ledger
    - DRAW     -> wedding_lottery.services.draw_engine
    - TTS      -> wedding_lottery.services.tts / speech / announcer
    - API      -> wedding_lottery.api

    特殊值:
    - OFF/DISABLE -> 关闭该模块日志
    """
    log_format = '%(asctime)s - %(levelname)s - [%(name)s] - %(message)s'
    date_format = '%Y-%m-%d %H:%M:%S'

    global_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    global_level = getattr(logging, global_level_str, logging.INFO)

    # force=True 覆盖 uvicorn 先行写入的配置
    logging.basicConfig(
        level=global_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True
    )

    # Key: Logger 前缀, Value: 环境变量后缀
    modules_map: Dict[str, str] = {
        "wedding_lottery.services.storage": "STORAGE",
        "wedding_lottery.utils.names": "STORAGE",
        "wedding_lottery.services.name_store": "NAMES",
        "wedding_lottery.services.name_editor": "NAMES",
        "wedding_lottery.services.winner_ledger": "WINNERS",
        "wedding_lottery.services.draw_engine": "DRAW",
        "wedding_lottery.services.tts": "TTS",
        "wedding_lottery.services.speech": "TTS",
        "wedding_lottery.services.announcer": "TTS",
        "wedding_lottery.api": "API",
        "wedding_lottery.startup": "STARTUP",

        # 第三方库控制
        "uvicorn": "UVICORN",
        "uvicorn.access": "ACCESS",
        "urllib3": "URLLIB3",
    }

    configured_modules = []

    for module_name, env_suffix in modules_map.items():
        env_var_name = f"LOG_LEVEL_{env_suffix}"
        level_str = os.getenv(env_var_name)

        # STARTUP 默认开启 (INFO)，除非显式关闭
        if env_suffix == "STARTUP" and not level_str:
            level_str = "INFO"

        if not level_str:
            continue

        level_str = level_str.upper()
        logger = logging.getLogger(module_name)

        if level_str in _OFF_VALUES:
            logger.setLevel(logging.CRITICAL + 1)
            configured_modules.append(f"{module_name}: OFF")
            continue

        level = getattr(logging, level_str, None)
        if isinstance(level, int):
            logger.setLevel(level)
            configured_modules.append(f"{module_name}: {level_str}")
        else:
            logging.warning(f"环境变量 {env_var_name} 的值 '{level_str}' 无效，已忽略。")

    logging.info(f"Log System Initialized. Global Level: {global_level_str}")
    if configured_modules:
        logging.info(f"Module Overrides: {', '.join(configured_modules)}")
