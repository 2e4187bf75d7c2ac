"""
章节抽取流水线

对规范化后的文本做一次逐行扫描：
    - 命中章节标题：结束当前章节并开启新章节
    - 命中字段标签：写入当前章节（每个字段只接受第一次写入）
    - 都未命中：交给回退规则，至多一次把该行当作概要

唯一的可变状态是“当前打开的章节”，在遇到下一个标题或输入结束时固化为结果。
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ...core.constants import LIST_FIELD_KINDS, FieldKind
from ...exceptions import ParserInvariantError
from ...schemas.chapter import ExtractedChapter, ExtractionResult
from ...utils.text_utils import iter_content_lines, split_list_value
from .fields import ChapterParserConfig, FieldMatch
from .patterns import ChapterHeading, detect_chapter_heading

logger = logging.getLogger(__name__)


@dataclass
class _ChapterDraft:
    """扫描过程中正在构建的章节"""
    ordinal: int
    title: str
    summary: Optional[str] = None
    setting: Optional[str] = None
    mood: Optional[str] = None
    key_events: List[str] = field(default_factory=list)
    characters: List[str] = field(default_factory=list)

    def is_populated(self, kind: FieldKind) -> bool:
        return bool(getattr(self, kind.value))

    def finalize(self) -> ExtractedChapter:
        if not self.title:
            raise ParserInvariantError(f"第{self.ordinal}章在固化时标题为空")
        return ExtractedChapter(
            ordinal=self.ordinal,
            title=self.title,
            summary=self.summary,
            setting=self.setting,
            mood=self.mood,
            key_events=list(self.key_events),
            characters=list(self.characters),
        )


class ChapterExtractor:
    """章节抽取器，同一实例可以重复使用，调用之间不保留任何状态"""

    def __init__(self, config: Optional[ChapterParserConfig] = None):
        self.config = config or ChapterParserConfig.default()
        self._classifier = self.config.build_classifier()

    def extract(self, text: str) -> ExtractionResult:
        """
        从模型输出中抽取章节列表

        找不到任何章节标题时返回空结果，从不抛出格式相关的异常。
        """
        chapters: List[ExtractedChapter] = []
        current: Optional[_ChapterDraft] = None

        for line in iter_content_lines(text):
            heading = detect_chapter_heading(line, self.config.heading_patterns)
            if heading is not None:
                if current is not None:
                    chapters.append(current.finalize())
                current = self._open_chapter(heading)
                continue

            if current is None:
                # 第一个章节标题之前的内容（前言、说明文字）直接忽略
                continue

            match = self._classifier.classify(line)
            if match is not None:
                self._assign_field(current, match)
            else:
                self._apply_fallback(current, line)

        if current is not None:
            chapters.append(current.finalize())

        if chapters:
            logger.info("章节抽取完成: 共 %d 章", len(chapters))
        else:
            logger.info("未识别到任何章节标题")
        return ExtractionResult(chapters)

    @staticmethod
    def _open_chapter(heading: ChapterHeading) -> _ChapterDraft:
        return _ChapterDraft(ordinal=heading.ordinal, title=heading.title)

    @staticmethod
    def _assign_field(chapter: _ChapterDraft, match: FieldMatch) -> None:
        """写入字段；同一章节内重复出现的同名标签被忽略"""
        if chapter.is_populated(match.kind):
            logger.debug("第%d章字段 %s 已有值，忽略重复标签", chapter.ordinal, match.kind.value)
            return
        if match.kind in LIST_FIELD_KINDS:
            setattr(chapter, match.kind.value, split_list_value(match.value))
        elif match.value:
            setattr(chapter, match.kind.value, match.value)

    def _apply_fallback(self, chapter: _ChapterDraft, line: str) -> None:
        """
        未识别行的回退策略

        概要仍为空、不是保留前缀/小节标题、且长度超过阈值时，该行成为概要；
        每章至多触发一次，其余未识别行全部丢弃。
        """
        if chapter.summary:
            return
        if line.startswith(self.config.reserved_prefixes):
            return
        if any(bracket in line for bracket in self.config.section_brackets):
            return
        if len(line) <= self.config.fallback_min_length:
            return
        chapter.summary = line
        logger.debug("第%d章未找到概要标签，使用首个说明行作为概要", chapter.ordinal)


def extract_chapters(text: str, config: Optional[ChapterParserConfig] = None) -> ExtractionResult:
    """章节抽取入口"""
    return ChapterExtractor(config).extract(text)
