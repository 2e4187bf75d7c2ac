"""
模型响应通用解析

网络调用方拿到模型输出后，只需把文本和“这次请求的内容类型”交给这里：
    - parse_content(): 调用方明确知道内容类型（chapters/characters/plot/proposal）时使用
    - parse_ai_response(): 不确定格式时，自动判断 JSON/文本，再按关键词分派到对应解析器
"""

import re
import logging
from typing import Any, Union

from ..core.config import get_settings
from ..exceptions import InvalidParameterError
from ..schemas.response import ParsedResponse, ResponseFormat, ResponseKind
from ..utils.json_utils import parse_llm_json_safe
from .chapter_extraction import extract_chapters
from .character_extraction import extract_character_sections
from .plot_extraction import extract_plot_outline
from .proposal_service import extract_story_proposal_with_diagnostic

logger = logging.getLogger(__name__)

INVALID_CONTENT_MESSAGE = "無効な応答内容"

# 看起来像 JSON 的特征
_JSON_INDICATORS = (
    re.compile(r"^\s*\{[\s\S]*\}\s*$"),
    re.compile(r"^\s*\[[\s\S]*\]\s*$"),
    re.compile(r"\"[\w\s]+\"\s*:\s*"),
)

# 文本格式的关键词分派（按顺序判断）
_CHAPTER_KEYWORDS = ("第", "章")
_CHARACTER_KEYWORDS = ("キャラクター", "登場人物")
_PLOT_KEYWORDS = ("プロット", "構成")


def _coerce_format(expected_format: Union[ResponseFormat, str]) -> ResponseFormat:
    try:
        return ResponseFormat(expected_format)
    except ValueError as exc:
        raise InvalidParameterError(
            f"不支持的响应格式: {expected_format}",
            parameter="expected_format",
        ) from exc


def _coerce_kind(content_type: Union[ResponseKind, str]) -> ResponseKind:
    supported = (ResponseKind.CHAPTERS, ResponseKind.CHARACTERS, ResponseKind.PLOT, ResponseKind.PROPOSAL)
    try:
        kind = ResponseKind(content_type)
    except ValueError:
        kind = None
    if kind not in supported:
        raise InvalidParameterError(
            f"不支持的内容类型: {content_type}",
            parameter="content_type",
        )
    return kind


def detect_response_format(content: str) -> ResponseFormat:
    """根据内容特征判断是 JSON 还是文本；过长的响应一律按文本处理"""
    looks_like_json = any(pattern.search(content) for pattern in _JSON_INDICATORS)
    if looks_like_json and len(content) < get_settings().json_detection_max_length:
        return ResponseFormat.JSON
    return ResponseFormat.TEXT


def _parse_json(content: str) -> ParsedResponse:
    data = parse_llm_json_safe(content)
    if data is None:
        logger.info("JSON解析失败，回退为文本解析")
        return _parse_text(content)
    return ParsedResponse(success=True, kind=ResponseKind.JSON, data=data, raw_content=content)


def _parse_text(content: str) -> ParsedResponse:
    if all(keyword in content for keyword in _CHAPTER_KEYWORDS):
        return ParsedResponse(
            success=True,
            kind=ResponseKind.CHAPTERS,
            data=extract_chapters(content),
            raw_content=content,
        )

    if any(keyword in content for keyword in _CHARACTER_KEYWORDS):
        return ParsedResponse(
            success=True,
            kind=ResponseKind.CHARACTERS,
            data=extract_character_sections(content),
            raw_content=content,
        )

    if any(keyword in content for keyword in _PLOT_KEYWORDS):
        return ParsedResponse(
            success=True,
            kind=ResponseKind.PLOT,
            data=extract_plot_outline(content),
            raw_content=content,
        )

    lines = [line for line in content.split("\n") if line.strip()]
    return ParsedResponse(
        success=True,
        kind=ResponseKind.TEXT,
        data={
            "content": content,
            "lines": lines,
            "word_count": len(content),
            "line_count": len(lines),
        },
        raw_content=content,
    )


def parse_ai_response(
    content: Any,
    expected_format: Union[ResponseFormat, str] = ResponseFormat.AUTO,
) -> ParsedResponse:
    """
    解析模型响应

    Args:
        content: 模型返回的原始文本
        expected_format: json / text / auto（自动判断）

    Returns:
        ParsedResponse；空响应时 success 为 False。JSON 解析失败会回退为文本解析。

    Raises:
        InvalidParameterError: expected_format 不是受支持的取值
    """
    response_format = _coerce_format(expected_format)

    if not isinstance(content, str) or not content.strip():
        return ParsedResponse(
            success=False,
            raw_content=content if isinstance(content, str) else "",
            error=INVALID_CONTENT_MESSAGE,
        )

    trimmed = content.strip()
    if response_format is ResponseFormat.AUTO:
        response_format = detect_response_format(trimmed)
        logger.debug("自动识别响应格式: %s", response_format.value)

    if response_format is ResponseFormat.JSON:
        return _parse_json(trimmed)
    return _parse_text(trimmed)


def parse_content(text: Any, content_type: Union[ResponseKind, str]) -> ParsedResponse:
    """
    按调用方声明的内容类型解析

    章节/角色/情节解析即使一无所获也算成功（返回空数据），由 validate_response 判断是否可用；
    提案抽取失败时 success 为 False，error 为诊断信息。

    Raises:
        InvalidParameterError: content_type 不是 chapters/characters/plot/proposal
    """
    kind = _coerce_kind(content_type)
    raw_content = text.strip() if isinstance(text, str) else ""

    if kind is ResponseKind.PROPOSAL:
        extraction = extract_story_proposal_with_diagnostic(text)
        return ParsedResponse(
            success=extraction.succeeded,
            kind=kind,
            data=extraction.proposal,
            raw_content=raw_content,
            error=extraction.diagnostic,
        )

    if kind is ResponseKind.CHAPTERS:
        data = extract_chapters(text)
    elif kind is ResponseKind.CHARACTERS:
        data = extract_character_sections(text)
    else:
        data = extract_plot_outline(text)
    return ParsedResponse(success=True, kind=kind, data=data, raw_content=raw_content)


def validate_response(response: ParsedResponse) -> bool:
    """判断解析结果是否可以直接交给界面使用"""
    if not response.success or response.data is None:
        return False

    if response.kind in (ResponseKind.CHAPTERS, ResponseKind.CHARACTERS):
        return len(response.data) > 0

    if response.kind is ResponseKind.PLOT:
        return not response.data.is_empty

    return True
