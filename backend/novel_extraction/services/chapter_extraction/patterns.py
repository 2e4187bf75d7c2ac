"""
章节边界识别

按固定顺序尝试一组章节标题正则，第一个命中的模式生效（不是最长匹配，也不是最具体匹配）：
部分模式是其他模式的子集，顺序本身就是识别策略的一部分，调整顺序会改变识别结果。
"""

import re
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ...exceptions import ExtractionConfigError

logger = logging.getLogger(__name__)

# 章节序号：阿拉伯数字（含全角）或汉字数字
_ORDINAL = r"([一二三四五六七八九十百千万零〇两\d]+)"
_DIGITS = r"(\d+)"

_HEADING_DECORATION = re.compile(r"^#{1,6}\s*")

# 汉字数字映射
CN_NUM_MAP = {
    '零': 0, '〇': 0,
    '一': 1, '二': 2, '两': 2, '三': 3, '四': 4,
    '五': 5, '六': 6, '七': 7, '八': 8, '九': 9,
    '十': 10, '百': 100, '千': 1000, '万': 10000,
}


def cn_to_arabic(cn_str: str) -> int:
    """
    汉字数字转阿拉伯数字

    示例：
        一 -> 1
        十二 -> 12
        二十 -> 20
        一百二十三 -> 123
    """
    if not cn_str:
        return 0

    if cn_str.isdigit():
        return int(cn_str)

    result = 0
    temp = 0

    for char in cn_str:
        value = CN_NUM_MAP.get(char)
        if value is None:
            if char.isdigit():
                temp = temp * 10 + int(char)
            continue
        if value == 10000:
            result = (result + temp) * value
            temp = 0
        elif value >= 10:
            # "十五" 省略了前面的 "一"
            result += (temp or 1) * value
            temp = 0
        else:
            temp = value

    return result + temp


@dataclass(frozen=True)
class HeadingPattern:
    """章节标题模式：name 仅用于日志/调试"""
    name: str
    regex: re.Pattern
    number_group: int = 1
    title_group: int = 2

    @classmethod
    def compile(
        cls,
        name: str,
        source: str,
        flags: int = 0,
        number_group: int = 1,
        title_group: int = 2,
    ) -> "HeadingPattern":
        try:
            regex = re.compile(source, flags)
        except re.error as exc:
            raise ExtractionConfigError(f"章节标题模式 {name} 无法编译: {exc}") from exc
        if regex.groups < max(number_group, title_group):
            raise ExtractionConfigError(f"章节标题模式 {name} 缺少序号或标题分组")
        return cls(name=name, regex=regex, number_group=number_group, title_group=title_group)


@dataclass(frozen=True)
class ChapterHeading:
    """识别出的章节标题"""
    ordinal: int
    title: str
    pattern_name: str


# 章节标题正则（按优先级排列，锚定在行首）
DEFAULT_HEADING_PATTERNS: Sequence[HeadingPattern] = (
    # 第1章: タイトル
    HeadingPattern.compile("jp_chapter", rf"^第{_ORDINAL}章\s*[：:]\s*(.+)$"),
    # 1. タイトル
    HeadingPattern.compile("numbered_dot", rf"^{_DIGITS}\.\s*(.+)$"),
    # 【第1章】 タイトル
    HeadingPattern.compile("bracket_chapter", rf"^【第{_ORDINAL}章】\s*(.+)$"),
    # Chapter 1: Title
    HeadingPattern.compile("en_chapter", rf"^Chapter\s*{_DIGITS}\s*[：:]\s*(.+)$", re.IGNORECASE),
    # 章1: タイトル
    HeadingPattern.compile("short_chapter", rf"^章{_DIGITS}\s*[：:]\s*(.+)$"),
    # 1．タイトル
    HeadingPattern.compile("numbered_period", rf"^{_DIGITS}\s*[．.]\s*(.+)$"),
    # 1-タイトル / 1－タイトル
    HeadingPattern.compile("numbered_hyphen", rf"^{_DIGITS}\s*[-－]\s*(.+)$"),
    # 第1章 タイトル
    HeadingPattern.compile("jp_chapter_spaced", rf"^第{_ORDINAL}章\s+(.+)$"),
)


def _strip_decoration(line: str) -> str:
    """去掉 Markdown 标题符号与加粗符号"""
    return _HEADING_DECORATION.sub("", line).replace("**", "").strip()


def _parse_ordinal(raw: str) -> int:
    if raw.isdigit():
        return int(raw)
    return cn_to_arabic(raw)


def detect_chapter_heading(
    line: str,
    patterns: Sequence[HeadingPattern] = DEFAULT_HEADING_PATTERNS,
) -> Optional[ChapterHeading]:
    """
    判断一行是否为章节标题

    Args:
        line: 已规范化的单行文本
        patterns: 有序的标题模式列表

    Returns:
        命中时返回 ChapterHeading（标题已去除首尾空白），否则返回 None。
        标题部分为空的匹配视为未命中，继续尝试后续模式。
    """
    if not line or not isinstance(line, str):
        return None

    candidate = _strip_decoration(line.strip())
    if not candidate:
        return None

    for pattern in patterns:
        match = pattern.regex.match(candidate)
        if not match:
            continue
        title = (match.group(pattern.title_group) or "").strip()
        if not title:
            continue
        ordinal = _parse_ordinal(match.group(pattern.number_group))
        logger.debug("识别到章节标题 [%s]: %d %s", pattern.name, ordinal, title)
        return ChapterHeading(ordinal=ordinal, title=title, pattern_name=pattern.name)

    return None
