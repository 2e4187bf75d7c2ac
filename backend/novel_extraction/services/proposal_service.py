"""
故事提案抽取与校验

“从音频/图片/文本创建项目”流程使用：模型返回一段可能夹杂说明文字或代码块的 JSON，
这里把它转换为 StoryProposal，并按界面上的长度指引给出违规列表。
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic.alias_generators import to_snake

from ..core.config import Settings, get_settings
from ..core.constants import ProposalKeys
from ..schemas.proposal import ProposalExtraction, StoryProposal, ValidationResult
from ..utils.json_utils import parse_json_envelope
from ..utils.text_utils import truncate_preview

logger = logging.getLogger(__name__)

# JSON 键名 -> StoryProposal 字段名
_FIELD_NAMES: Dict[str, str] = {
    key: to_snake(key) for key in ProposalKeys.REQUIRED + ProposalKeys.OPTIONAL
}

_REQUIRED_LABELS = (
    ("title", "タイトル"),
    ("theme", "テーマ"),
    ("main_genre", "メインジャンル"),
    ("description", "説明"),
    ("synopsis", "あらすじ"),
)


def _read_string(data: Mapping[str, Any], key: str) -> Optional[str]:
    """按 camelCase 或 snake_case 读取字符串值，去除首尾空白后为空视为缺失"""
    for candidate in (key, _FIELD_NAMES[key]):
        value = data.get(candidate)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def extract_story_proposal_with_diagnostic(text: str) -> ProposalExtraction:
    """
    从模型输出中抽取故事提案，并附带失败原因

    Returns:
        ProposalExtraction：成功时 proposal 为完整的提案，失败时 proposal 为 None、
        diagnostic 说明原因。从不抛出格式相关的异常。
    """
    data, error = parse_json_envelope(text)
    if error is None and not isinstance(data, dict):
        error = "JSONの最上位がオブジェクトではありません"

    if error is not None:
        preview = truncate_preview(text, 200) if isinstance(text, str) else ""
        logger.warning("故事提案抽取失败: %s, 响应预览: %s", error, preview)
        return ProposalExtraction(diagnostic=error)

    values = {key: _read_string(data, key) for key in _FIELD_NAMES}

    missing = [key for key in ProposalKeys.REQUIRED if values[key] is None]
    if missing:
        diagnostic = f"必須フィールドが不足しています: {', '.join(missing)}"
        logger.warning("故事提案缺少必填字段: %s", ", ".join(missing))
        return ProposalExtraction(diagnostic=diagnostic)

    ignored = sorted(
        key for key in data
        if key not in _FIELD_NAMES and key not in _FIELD_NAMES.values()
    )
    if ignored:
        logger.debug("故事提案中未识别的字段已忽略: %s", ", ".join(ignored))

    proposal = StoryProposal(
        **{_FIELD_NAMES[key]: value for key, value in values.items() if value is not None}
    )
    logger.info("故事提案抽取成功: %s", proposal.title)
    return ProposalExtraction(proposal=proposal)


def extract_story_proposal(text: str) -> Optional[StoryProposal]:
    """从模型输出中抽取故事提案，无法得到完整提案时返回 None"""
    return extract_story_proposal_with_diagnostic(text).proposal


def _field_value(proposal: Union[StoryProposal, Mapping[str, Any]], field_name: str) -> str:
    if isinstance(proposal, StoryProposal):
        value = getattr(proposal, field_name)
    else:
        camel_key = next(key for key, name in _FIELD_NAMES.items() if name == field_name)
        value = proposal.get(camel_key, proposal.get(field_name))
    return value if isinstance(value, str) else ""


def validate_story_proposal(
    proposal: Union[StoryProposal, Mapping[str, Any]],
    config: Optional[Settings] = None,
) -> ValidationResult:
    """
    校验故事提案

    先检查必填字段，再检查长度上限（已报告为缺失的字段不再检查长度）；
    收集全部违规而不是遇到第一个就返回。
    只报告，不截断、不修改数据。

    Args:
        proposal: StoryProposal 或界面表单数据（camelCase/snake_case 键均可）
        config: 配置实例，默认使用全局配置
    """
    config = config or get_settings()
    errors: List[str] = []

    missing = set()
    for field_name, label in _REQUIRED_LABELS:
        if not _field_value(proposal, field_name).strip():
            missing.add(field_name)
            errors.append(f"{label}は必須です")

    ceilings = (
        ("title", "タイトル", config.title_max_length),
        ("description", "説明", config.description_max_length),
        ("synopsis", "あらすじ", config.synopsis_max_length),
    )
    for field_name, label, limit in ceilings:
        if field_name in missing:
            continue
        if len(_field_value(proposal, field_name)) > limit:
            errors.append(f"{label}は{limit}文字以内で入力してください")

    return ValidationResult(valid=not errors, errors=errors)
