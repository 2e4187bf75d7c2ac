"""
字段标签识别与章节解析配置

每种字段对应一组等价标签（别名组），例如 舞台 字段接受 "設定・場所:"、"舞台:"、"場所:"、"設定:"。
字段按 summary → setting → mood → key_events → characters 的固定优先级尝试，
组内按别名顺序尝试，第一个命中的标签生效。
"""

import re
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Optional, Sequence, Tuple

from ...core.config import get_settings
from ...core.constants import ChapterLabels, FallbackRules, FieldKind
from ...exceptions import ExtractionConfigError
from .patterns import DEFAULT_HEADING_PATTERNS, HeadingPattern

# 标签前允许的列表符号
_BULLET = r"(?:[-*・•]\s*)?"
_BOLD = r"(?:\*\*)?"
# 标签前允许的修饰语（如 "主な登場人物" 中的 "主な"），不能跨过分隔符
_LABEL_PREFIX = r"[^:：]{0,10}?"


def build_label_pattern(label: str) -> re.Pattern:
    """
    构造单个标签的匹配正则

    锚定在行首，允许前置列表符号、Markdown 加粗以及不超过 10 个字符的修饰语
    （"主な登場人物:"、"場面の雰囲気:"），分隔符为半角或全角冒号，捕获分隔符之后的全部内容。
    """
    if not label or not label.strip():
        raise ExtractionConfigError("字段标签不能为空")
    escaped = re.escape(label.strip()).replace("・", "[・･]")
    return re.compile(
        rf"^{_BULLET}{_BOLD}{_LABEL_PREFIX}{escaped}{_BOLD}\s*[：:]\s*{_BOLD}(.*)$",
        re.IGNORECASE,
    )


def compile_labels(labels: Iterable[str]) -> Tuple[re.Pattern, ...]:
    return tuple(build_label_pattern(label) for label in labels)


def match_labels(line: str, patterns: Sequence[re.Pattern]) -> Optional[str]:
    """按顺序尝试标签，命中时返回去除首尾空白的值（可能为空字符串）"""
    for pattern in patterns:
        match = pattern.match(line)
        if match:
            return match.group(1).replace("**", "").strip()
    return None


@dataclass(frozen=True)
class FieldMatch:
    """一次字段标签命中"""
    kind: FieldKind
    value: str


class FieldClassifier:
    """章节字段分类器"""

    def __init__(self, alias_groups: Sequence[Tuple[FieldKind, Sequence[str]]]):
        self._groups = tuple((kind, compile_labels(labels)) for kind, labels in alias_groups)

    def classify(self, line: str) -> Optional[FieldMatch]:
        """
        判断一行属于哪个字段

        Returns:
            FieldMatch；不是任何字段标签时返回 None。
        """
        for kind, patterns in self._groups:
            value = match_labels(line, patterns)
            if value is not None:
                return FieldMatch(kind=kind, value=value)
        return None


def _default_alias_groups() -> Tuple[Tuple[FieldKind, Tuple[str, ...]], ...]:
    return tuple(ChapterLabels.alias_groups().items())


@dataclass(frozen=True)
class ChapterParserConfig:
    """
    章节解析配置

    不同调用场景在标签集、回退阈值上的差异通过派生配置对象表达，而不是继承抽取器。
    """
    heading_patterns: Tuple[HeadingPattern, ...] = tuple(DEFAULT_HEADING_PATTERNS)
    alias_groups: Tuple[Tuple[FieldKind, Tuple[str, ...]], ...] = field(default_factory=_default_alias_groups)
    reserved_prefixes: Tuple[str, ...] = FallbackRules.RESERVED_PREFIXES
    section_brackets: Tuple[str, ...] = FallbackRules.SECTION_BRACKETS
    fallback_min_length: int = 10

    def __post_init__(self):
        if not self.heading_patterns:
            raise ExtractionConfigError("至少需要一个章节标题模式")
        seen = set()
        for kind, labels in self.alias_groups:
            if kind in seen:
                raise ExtractionConfigError(f"字段 {kind.value} 的别名组重复定义")
            if not labels:
                raise ExtractionConfigError(f"字段 {kind.value} 的别名组为空")
            seen.add(kind)
        if self.fallback_min_length < 0:
            raise ExtractionConfigError("fallback_min_length 不能为负数")

    @classmethod
    def default(cls) -> "ChapterParserConfig":
        """默认配置，回退阈值取自全局配置"""
        return cls(fallback_min_length=get_settings().fallback_summary_min_length)

    def aliases_for(self, kind: FieldKind) -> Tuple[str, ...]:
        return dict(self.alias_groups).get(kind, ())

    def with_aliases(self, kind: FieldKind, labels: Sequence[str]) -> "ChapterParserConfig":
        """替换某个字段的别名组，字段优先级保持不变；原先没有的字段追加到末尾"""
        groups: Dict[FieldKind, Tuple[str, ...]] = dict(self.alias_groups)
        groups[kind] = tuple(labels)
        return replace(self, alias_groups=tuple(groups.items()))

    def build_classifier(self) -> FieldClassifier:
        return FieldClassifier(self.alias_groups)
