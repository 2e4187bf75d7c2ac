"""
文本处理工具

提供模型输出的规范化（转义还原、换行整理）、列表值切分以及日志预览截断。
"""

import re
from typing import Any, Iterable, List, Optional

from ..core.constants import LIST_SEPARATORS

# 单次扫描识别转义序列，避免逐个 replace 时 "\\n" 被误还原成换行
_ESCAPE_PATTERN = re.compile(r"\\(u[0-9a-fA-F]{4}|[nrt\"'\\])")
_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    '"': '"',
    "'": "'",
    "\\": "\\",
}
_TRAILING_SPACES = re.compile(r"[ \t]+$", re.MULTILINE)
_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def _decode_escape(match: re.Match) -> str:
    token = match.group(1)
    if token[0] == "u":
        return chr(int(token[1:], 16))
    return _SIMPLE_ESCAPES[token]


def decode_json_escapes(text: Any) -> Any:
    """
    还原文本中字面出现的 JSON 转义序列

    模型有时把整段正文放进 JSON 字符串再返回，取出后会残留 \\n、\\t、\\uXXXX 等字面转义。
    非字符串或空字符串原样返回。
    """
    if not text or not isinstance(text, str):
        return text
    return _ESCAPE_PATTERN.sub(_decode_escape, text)


def normalize_line_breaks(text: Any) -> Any:
    """
    规范化换行

    - 统一 CRLF 为 LF
    - 去除每行行尾空白
    - 3 个及以上连续换行压缩为 2 个（保留段落分隔）
    - 去除首尾空行
    """
    if not text or not isinstance(text, str):
        return text

    normalized = text.replace("\r\n", "\n")
    normalized = _TRAILING_SPACES.sub("", normalized)
    normalized = _EXCESS_NEWLINES.sub("\n\n", normalized)
    return normalized.strip("\n")


def normalize_text(text: Any) -> Any:
    """
    行规范化入口：先还原转义，再整理换行

    不会抛异常，非字符串/空输入原样返回。
    """
    if not text or not isinstance(text, str):
        return text
    return normalize_line_breaks(decode_json_escapes(text))


def iter_content_lines(text: Any) -> Iterable[str]:
    """规范化后逐行产出去除首尾空白的非空行"""
    normalized = normalize_text(text)
    if not normalized or not isinstance(normalized, str):
        return
    for line in normalized.split("\n"):
        stripped = line.strip()
        if stripped:
            yield stripped


_LIST_SPLIT_PATTERN = re.compile("[" + re.escape("".join(LIST_SEPARATORS)) + "]")


def split_list_value(raw: Optional[str]) -> List[str]:
    """
    切分列表型字段的原始值

    Examples:
        >>> split_list_value("A, B、C")
        ['A', 'B', 'C']
        >>> split_list_value("")
        []
    """
    if not raw or not isinstance(raw, str):
        return []
    return [token.strip() for token in _LIST_SPLIT_PATTERN.split(raw) if token.strip()]


def truncate_preview(
    text: Optional[str],
    max_length: int = 100,
) -> str:
    """
    生成文本预览（日志专用）

    Examples:
        >>> truncate_preview("abcdef", 3)
        'abc...'
    """
    if not text:
        return ""

    text = text.strip()
    if len(text) <= max_length:
        return text

    return text[:max_length] + "..."
