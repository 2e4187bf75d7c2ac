from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class StoryProposal(BaseModel):
    """由图片/音频/文本生成的故事项目提案

    字段本身不加约束：用户在界面上编辑后的提案同样要交给校验器，
    由 validate_story_proposal 统一给出违规列表。
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    title: str = Field(..., description="标题")
    theme: str = Field(..., description="主题")
    main_genre: str = Field(..., description="主类型")
    description: str = Field(..., description="项目说明")
    synopsis: str = Field(..., description="梗概")
    sub_genre: Optional[str] = Field(default=None, description="子类型")
    target_reader: Optional[str] = Field(default=None, description="目标读者")
    image_analysis: Optional[str] = Field(default=None, description="图片分析结果")
    audio_analysis: Optional[str] = Field(default=None, description="音频分析结果")
    integrated_analysis: Optional[str] = Field(default=None, description="综合分析结果")
    transcription: Optional[str] = Field(default=None, description="音频转写文本")


class ValidationResult(BaseModel):
    """提案校验结果，不修改被校验的对象"""

    model_config = ConfigDict(frozen=True)

    valid: bool
    errors: List[str] = Field(default_factory=list, description="按检查顺序排列的违规信息")


class ProposalExtraction(BaseModel):
    """提案抽取结果：proposal 为空时 diagnostic 说明原因"""

    model_config = ConfigDict(frozen=True)

    proposal: Optional[StoryProposal] = None
    diagnostic: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.proposal is not None
