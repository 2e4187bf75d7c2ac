"""
配置与日志设置测试
"""

import logging

import pytest
from pydantic import ValidationError

from novel_extraction.core import config as config_module
from novel_extraction.core.config import Settings, get_settings, reload_settings
from novel_extraction.core.logging_config import LOGGER_NAME, get_logging_config, setup_logging


@pytest.fixture
def restore_logging():
    """撤销 setup_logging 对全局日志状态的修改"""
    engine_logger = logging.getLogger(LOGGER_NAME)
    root_logger = logging.getLogger()
    saved_root_level = root_logger.level
    yield
    for handler in list(engine_logger.handlers):
        engine_logger.removeHandler(handler)
        root_logger.removeHandler(handler)
        handler.close()
    engine_logger.setLevel(logging.NOTSET)
    engine_logger.propagate = True
    root_logger.setLevel(saved_root_level)


# ============================================================
# Settings
# ============================================================

def test_defaults():
    settings = Settings()
    assert settings.logging_level == "INFO"
    assert settings.log_file is None
    assert settings.fallback_summary_min_length == 10
    assert settings.title_max_length == 100
    assert settings.description_max_length == 500
    assert settings.synopsis_max_length == 2000
    assert settings.character_text_max_length == 200
    assert settings.max_numbered_characters == 5
    assert settings.json_detection_max_length == 10000


def test_environment_override_and_reload(monkeypatch):
    monkeypatch.setenv("NOVEL_EXTRACTION_TITLE_MAX_LENGTH", "50")

    reloaded = reload_settings()

    assert reloaded.title_max_length == 50
    assert get_settings() is reloaded
    assert config_module.settings is reloaded


def test_logging_level_is_normalized():
    assert Settings(logging_level=" debug ").logging_level == "DEBUG"
    with pytest.raises(ValidationError):
        Settings(logging_level="verbose")


def test_blank_log_file_means_console_only():
    assert Settings(log_file="   ").log_file is None


@pytest.mark.parametrize(
    "field_name",
    ["fallback_summary_min_length", "title_max_length", "json_detection_max_length"],
)
def test_numeric_bounds(field_name):
    with pytest.raises(ValidationError):
        Settings(**{field_name: 0})


# ============================================================
# 日志
# ============================================================

def test_logging_config_console_only():
    logging_config = get_logging_config(Settings(logging_level="WARNING"))
    assert list(logging_config["handlers"]) == ["console"]
    assert logging_config["loggers"][LOGGER_NAME]["level"] == "WARNING"
    assert logging_config["root"]["level"] == "WARNING"


def test_logging_config_with_file(tmp_path):
    log_file = tmp_path / "engine.log"
    logging_config = get_logging_config(Settings(log_file=str(log_file)))
    assert logging_config["handlers"]["file"]["filename"] == str(log_file)
    assert logging_config["loggers"][LOGGER_NAME]["handlers"] == ["console", "file"]


def test_setup_logging_creates_log_directory(tmp_path, restore_logging):
    log_file = tmp_path / "logs" / "engine.log"

    setup_logging(Settings(logging_level="DEBUG", log_file=str(log_file)))
    logging.getLogger(f"{LOGGER_NAME}.test").info("テスト")
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        handler.flush()

    assert log_file.parent.is_dir()
    assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG
    assert "テスト" in log_file.read_text(encoding="utf-8")
