from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel
from pydantic.alias_generators import to_camel


class ExtractedChapter(BaseModel):
    """从模型输出中抽取出的单个章节描述"""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    ordinal: int = Field(..., description="文本中声明的章节序号，仅供参考")
    title: str = Field(..., min_length=1, description="章节标题")
    summary: Optional[str] = Field(default=None, description="章节概要")
    setting: Optional[str] = Field(default=None, description="舞台/场所")
    mood: Optional[str] = Field(default=None, description="氛围")
    key_events: List[str] = Field(default_factory=list, description="重要事件")
    characters: List[str] = Field(default_factory=list, description="登场人物（原始名称）")

    @property
    def is_complete(self) -> bool:
        """是否已有概要；缺少概要的章节需要调用方提示用户手动补全"""
        return bool(self.summary)


class ExtractionResult(RootModel[List[ExtractedChapter]]):
    """章节抽取结果，顺序与章节在文本中出现的顺序一致"""

    model_config = ConfigDict(frozen=True)

    def __iter__(self):
        return iter(self.root)

    def __getitem__(self, item):
        return self.root[item]

    def __len__(self) -> int:
        return len(self.root)

    @property
    def chapters(self) -> List[ExtractedChapter]:
        return list(self.root)

    @property
    def count(self) -> int:
        return len(self.root)

    def incomplete(self) -> List[ExtractedChapter]:
        """返回缺少概要的章节"""
        return [chapter for chapter in self.root if not chapter.is_complete]
