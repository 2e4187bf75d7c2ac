from functools import lru_cache
from typing import Optional
import sys

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """抽取引擎全局配置，所有可调参数集中于此，统一加载自环境变量。"""

    # -------------------- 日志配置 --------------------
    logging_level: str = Field(default="INFO", description="引擎日志级别")
    log_file: Optional[str] = Field(default=None, description="日志文件路径，未配置时只输出到控制台")

    # -------------------- 章节抽取 --------------------
    fallback_summary_min_length: int = Field(
        default=10,
        ge=1,
        description="未识别行被当作章节概要的最小长度（严格大于）",
    )

    # -------------------- 故事提案校验 --------------------
    title_max_length: int = Field(default=100, ge=1, description="标题长度上限")
    description_max_length: int = Field(default=500, ge=1, description="说明长度上限")
    synopsis_max_length: int = Field(default=2000, ge=1, description="梗概长度上限")

    # -------------------- 角色抽取 --------------------
    character_text_max_length: int = Field(
        default=200,
        ge=1,
        description="角色外貌/性格/背景等长文本字段的截断长度",
    )
    max_numbered_characters: int = Field(
        default=5,
        ge=1,
        description="编号角色段落（【キャラクターN】）的默认最大抽取数",
    )

    # -------------------- 格式自动识别 --------------------
    json_detection_max_length: int = Field(
        default=10000,
        ge=1,
        description="超过该长度的响应不再自动按JSON处理",
    )

    model_config = SettingsConfigDict(
        env_prefix="NOVEL_EXTRACTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("logging_level", mode="before")
    @classmethod
    def _normalize_logging_level(cls, value: Optional[str]) -> str:
        """规范日志级别配置。"""
        candidate = (value or "INFO").strip().upper()
        valid_levels = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}
        if candidate not in valid_levels:
            raise ValueError("LOGGING_LEVEL 仅支持 CRITICAL/ERROR/WARNING/INFO/DEBUG/NOTSET")
        return candidate

    @field_validator("log_file", mode="before")
    @classmethod
    def _normalize_log_file(cls, value: Optional[str]) -> Optional[str]:
        """空字符串视为未配置。"""
        return value.strip() if isinstance(value, str) and value.strip() else None


@lru_cache
def get_settings() -> Settings:
    """使用 LRU 缓存确保配置只初始化一次。"""
    return Settings()


def reload_settings() -> Settings:
    """重新加载配置，清除缓存并返回新的配置实例。

    环境变量或 .env 文件修改后调用，同时更新当前模块中的全局 settings 变量。
    """
    get_settings.cache_clear()
    new_settings = get_settings()

    current_module = sys.modules[__name__]
    setattr(current_module, 'settings', new_settings)

    return new_settings


settings = get_settings()
