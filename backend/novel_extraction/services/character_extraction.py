"""
角色设定抽取

支持两种模型输出格式：
    1. 标题式：【名前】 或 ・名前 (役割) 开启一个角色，后续行用 役割/外見/性格/背景 标签描述
    2. 编号段落式：【キャラクター1】…【キャラクター5】，段落内用 名前/基本設定/外見/性格/背景 描述
"""

import re
import logging
from typing import List, Optional

from ..core.config import get_settings
from ..core.constants import CharacterLabels
from ..schemas.character import ExtractedCharacter
from ..utils.text_utils import iter_content_lines, normalize_text
from .chapter_extraction.fields import compile_labels, match_labels

logger = logging.getLogger(__name__)

_HEADING_PATTERNS = (
    re.compile(r"^【(.+)】"),
    re.compile(r"^・(.+?)\s*[（(]"),
)

_FIELD_PATTERNS = (
    ("role", compile_labels(CharacterLabels.ROLE)),
    ("appearance", compile_labels(CharacterLabels.APPEARANCE)),
    ("personality", compile_labels(CharacterLabels.PERSONALITY)),
    ("background", compile_labels(CharacterLabels.BACKGROUND)),
)

# 编号段落内的字段：单行字段取到行尾，长文本字段取到下一个标签
_NAME_PATTERN = re.compile(r"名前[：:]\s*([^\n]+)")
_BASIC_PATTERN = re.compile(r"基本設定[：:]\s*([^\n]+)")
_APPEARANCE_PATTERN = re.compile(r"外見[：:]\s*([\s\S]*?)(?=性格[：:]|\Z)")
_PERSONALITY_PATTERN = re.compile(r"性格[：:]\s*([\s\S]*?)(?=背景[：:]|\Z)")
_BACKGROUND_PATTERN = re.compile(r"背景[：:]\s*([\s\S]*?)\Z")


def _detect_character_heading(line: str) -> Optional[str]:
    for pattern in _HEADING_PATTERNS:
        match = pattern.match(line)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return None


def extract_character_sections(text: str) -> List[ExtractedCharacter]:
    """
    抽取标题式角色设定

    与章节抽取相同：每个字段只接受第一次写入，第一个标题之前的内容忽略。
    """
    characters: List[ExtractedCharacter] = []
    current: Optional[dict] = None

    for line in iter_content_lines(text):
        name = _detect_character_heading(line)
        if name is not None:
            if current is not None:
                characters.append(ExtractedCharacter(**current))
            current = {"name": name}
            continue

        if current is None:
            continue

        for field_name, patterns in _FIELD_PATTERNS:
            value = match_labels(line, patterns)
            if value is None:
                continue
            if value and field_name not in current:
                current[field_name] = value
            break

    if current is not None:
        characters.append(ExtractedCharacter(**current))

    logger.info("角色抽取完成: 共 %d 个角色", len(characters))
    return characters


def _search(pattern: re.Pattern, content: str) -> str:
    match = pattern.search(content)
    return match.group(1).strip() if match else ""


def extract_numbered_character(
    text: str,
    index: int,
    max_length: Optional[int] = None,
) -> Optional[ExtractedCharacter]:
    """
    抽取【キャラクターN】段落中的角色

    Args:
        text: 模型输出
        index: 段落编号（从1开始）
        max_length: 外見/性格/背景 的截断长度，默认取全局配置

    Returns:
        找不到该编号的段落时返回 None
    """
    normalized = normalize_text(text)
    if not normalized or not isinstance(normalized, str):
        return None

    heading = re.escape(CharacterLabels.NUMBERED_HEADING.format(index=index))
    next_heading = re.escape(CharacterLabels.NUMBERED_HEADING.format(index=index + 1))
    section = re.search(rf"{heading}\s*([\s\S]*?)(?={next_heading}|\Z)", normalized)
    if not section:
        return None

    content = section.group(1)
    limit = max_length or get_settings().character_text_max_length

    return ExtractedCharacter(
        name=_search(_NAME_PATTERN, content) or CharacterLabels.DEFAULT_NAME.format(index=index),
        role=_search(_BASIC_PATTERN, content) or CharacterLabels.DEFAULT_ROLE,
        appearance=_search(_APPEARANCE_PATTERN, content)[:limit] or None,
        personality=_search(_PERSONALITY_PATTERN, content)[:limit] or None,
        background=_search(_BACKGROUND_PATTERN, content)[:limit] or None,
    )


def extract_numbered_characters(
    text: str,
    max_characters: Optional[int] = None,
) -> List[ExtractedCharacter]:
    """依次抽取 1..max_characters 号角色段落，缺失的编号跳过"""
    count = max_characters or get_settings().max_numbered_characters
    characters = []
    for index in range(1, count + 1):
        character = extract_numbered_character(text, index)
        if character is not None:
            characters.append(character)
    logger.info("编号角色抽取完成: %d/%d", len(characters), count)
    return characters
