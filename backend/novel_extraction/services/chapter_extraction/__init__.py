"""
章节抽取模块

把模型返回的章节构成文本转换为 ExtractedChapter 列表。

模块结构：
    - patterns.py: 章节标题识别（有序模式，先命中者生效）
    - fields.py: 字段标签识别与解析配置对象
    - extractor.py: 逐行扫描流水线与回退规则

自定义标签：
    from novel_extraction.services.chapter_extraction import ChapterParserConfig, extract_chapters
    from novel_extraction.core.constants import FieldKind

    config = ChapterParserConfig.default().with_aliases(FieldKind.MOOD, ("空気感", "ムード"))
    result = extract_chapters(text, config)
"""

from .extractor import ChapterExtractor, extract_chapters
from .fields import (
    ChapterParserConfig,
    FieldClassifier,
    FieldMatch,
    build_label_pattern,
    compile_labels,
    match_labels,
)
from .patterns import (
    DEFAULT_HEADING_PATTERNS,
    ChapterHeading,
    HeadingPattern,
    cn_to_arabic,
    detect_chapter_heading,
)

__all__ = [
    # 流水线
    "ChapterExtractor",
    "extract_chapters",
    # 配置与字段识别
    "ChapterParserConfig",
    "FieldClassifier",
    "FieldMatch",
    "build_label_pattern",
    "compile_labels",
    "match_labels",
    # 章节标题识别
    "DEFAULT_HEADING_PATTERNS",
    "ChapterHeading",
    "HeadingPattern",
    "cn_to_arabic",
    "detect_chapter_heading",
]
