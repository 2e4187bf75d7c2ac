"""
日志配置模块

引擎本身只通过 logging.getLogger(__name__) 打日志，从不主动配置日志；
宿主程序（调用方）在启动时调用 setup_logging() 即可获得统一格式的输出。
"""

import logging
from logging.config import dictConfig
from pathlib import Path
from typing import Optional

from .config import Settings, get_settings

LOGGER_NAME = "novel_extraction"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def get_logging_config(config: Optional[Settings] = None) -> dict:
    """
    获取日志配置字典

    Args:
        config: 配置实例，默认使用全局配置

    Returns:
        日志配置字典，可直接传递给 dictConfig
    """
    config = config or get_settings()

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": "ext://sys.stdout",
        },
    }
    if config.log_file:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "filename": config.log_file,
            "mode": "a",
            "formatter": "default",
            "encoding": "utf-8",
        }
    handler_names = list(handlers)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": LOG_FORMAT,
            }
        },
        "handlers": handlers,
        "loggers": {
            LOGGER_NAME: {
                "level": config.logging_level,
                "handlers": handler_names,
                "propagate": False,
            },
        },
        "root": {
            "level": "WARNING",
            "handlers": handler_names,
        },
    }


def setup_logging(config: Optional[Settings] = None) -> None:
    """
    配置日志系统

    配置了日志文件时会先创建其所在目录。
    """
    config = config or get_settings()
    if config.log_file:
        Path(config.log_file).parent.mkdir(parents=True, exist_ok=True)
    dictConfig(get_logging_config(config))
    logging.getLogger(LOGGER_NAME).debug("日志系统已初始化，级别: %s", config.logging_level)
