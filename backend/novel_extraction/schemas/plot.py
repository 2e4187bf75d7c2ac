from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PlotOutline(BaseModel):
    """情节基础设定"""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    theme: Optional[str] = Field(default=None, description="主题")
    setting: Optional[str] = Field(default=None, description="舞台")
    hook: Optional[str] = Field(default=None, description="钩子")
    protagonist_goal: Optional[str] = Field(default=None, description="主角目标")
    main_obstacle: Optional[str] = Field(default=None, description="主要障碍")

    @property
    def is_empty(self) -> bool:
        return not any(self.model_dump().values())
