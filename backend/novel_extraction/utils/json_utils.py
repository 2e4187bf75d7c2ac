import re
import json
import logging
from typing import Any, Optional, Tuple

from .text_utils import truncate_preview

logger = logging.getLogger(__name__)

_FENCE_PATTERN = re.compile(r"```(?:json|JSON)?\s*(.*?)\s*```", re.DOTALL)


def find_json_envelope(raw_text: Any) -> Optional[str]:
    """
    定位文本中的 JSON 对象外壳

    取第一个 "{" 到最后一个 "}" 之间的内容（贪婪外边界，不做括号配对）。
    JSON 前后的说明文字中若含有无关的花括号，会导致截取范围偏大而解析失败；
    这是已知的简化，调用方依赖其对 JSON 之后附带说明文字的容忍度。
    """
    if not raw_text or not isinstance(raw_text, str):
        return None
    start_idx = raw_text.find("{")
    end_idx = raw_text.rfind("}")
    if start_idx == -1 or end_idx <= start_idx:
        return None
    return raw_text[start_idx : end_idx + 1]


def parse_json_envelope(raw_text: Any) -> Tuple[Optional[Any], Optional[str]]:
    """
    从任意文本中取出 JSON 对象外壳并解析

    Returns:
        (解析结果, 失败原因)；成功时失败原因为 None，失败时解析结果为 None。
        从不抛出异常。
    """
    if not raw_text or not isinstance(raw_text, str) or not raw_text.strip():
        return None, "AIからの応答が空です"

    candidate = find_json_envelope(raw_text)
    if candidate is None:
        return None, "JSON形式が見つかりませんでした"

    try:
        return json.loads(candidate), None
    except json.JSONDecodeError as exc:
        logger.debug(
            "JSON外壳解析失败: %s (行%d 列%d), 预览: %s",
            exc.msg,
            exc.lineno,
            exc.colno,
            truncate_preview(candidate, 200),
        )
        return None, f"JSONの解析に失敗しました: {exc.msg} (行{exc.lineno} 列{exc.colno})"
    except (ValueError, RecursionError) as exc:
        # 超长整数字面量、嵌套过深等 json 模块在语法错误之外抛出的异常
        logger.debug("JSON外壳解析失败: %s: %s", type(exc).__name__, exc)
        return None, f"JSONの解析に失敗しました: {type(exc).__name__}"


def unwrap_markdown_json(raw_text: str) -> str:
    """从 Markdown 代码块或普通文本中提取 JSON 字符串（对象或数组）。"""
    if not raw_text:
        return raw_text

    trimmed = raw_text.strip()

    fence_match = _FENCE_PATTERN.search(trimmed)
    if fence_match:
        candidate = fence_match.group(1).strip()
        if candidate:
            return candidate

    start_candidates = [idx for idx in (trimmed.find("{"), trimmed.find("[")) if idx != -1]
    if start_candidates:
        start_idx = min(start_candidates)
        end_idx = max(trimmed.rfind("}"), trimmed.rfind("]"))
        if end_idx > start_idx:
            return trimmed[start_idx : end_idx + 1].strip()

    return trimmed


def parse_llm_json_safe(raw_text: Any) -> Optional[Any]:
    """
    安全解析模型返回的 JSON，失败返回 None（不抛异常）

    支持代码块包装与前后附带说明文字的情况，结果可能是对象也可能是数组。
    """
    if not raw_text or not isinstance(raw_text, str):
        return None

    normalized = unwrap_markdown_json(raw_text)
    try:
        return json.loads(normalized)
    except json.JSONDecodeError as exc:
        logger.warning(
            "JSON解析失败: %s, 位置: %d, 原文长度: %d, 预处理后长度: %d",
            exc.msg,
            exc.pos,
            len(raw_text),
            len(normalized),
        )
        return None
    except (ValueError, RecursionError) as exc:
        logger.warning(
            "JSON解析失败: %s, 原文长度: %d",
            type(exc).__name__,
            len(raw_text),
        )
        return None
