from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ExtractedCharacter(BaseModel):
    """从模型输出中抽取出的角色设定"""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="角色名")
    role: Optional[str] = Field(default=None, description="角色定位")
    appearance: Optional[str] = Field(default=None, description="外貌")
    personality: Optional[str] = Field(default=None, description="性格")
    background: Optional[str] = Field(default=None, description="背景")
