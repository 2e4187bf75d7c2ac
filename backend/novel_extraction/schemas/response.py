from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ResponseFormat(str, Enum):
    """期望的响应格式"""
    JSON = "json"
    TEXT = "text"
    AUTO = "auto"


class ResponseKind(str, Enum):
    """解析后数据的种类"""
    JSON = "json"
    TEXT = "text"
    CHAPTERS = "chapters"
    CHARACTERS = "characters"
    PLOT = "plot"
    PROPOSAL = "proposal"


class ParsedResponse(BaseModel):
    """模型响应的通用解析结果"""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    success: bool
    kind: Optional[ResponseKind] = Field(default=None, description="data 的种类，失败时为空")
    data: Any = Field(default=None, description="解析得到的数据")
    raw_content: str = Field(default="", description="去除首尾空白后的原始响应")
    error: Optional[str] = Field(default=None, description="失败原因")
