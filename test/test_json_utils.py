"""
JSON 外壳提取测试
"""

import sys

import pytest

from novel_extraction.utils.json_utils import (
    find_json_envelope,
    parse_json_envelope,
    parse_llm_json_safe,
    unwrap_markdown_json,
)


def test_find_json_envelope_uses_outer_bounds():
    text = '以下が提案です。\n{"title": "星の海", "meta": {"a": 1}}\nご確認ください。'
    assert find_json_envelope(text) == '{"title": "星の海", "meta": {"a": 1}}'


@pytest.mark.parametrize("text", [None, "", "括弧なし", "} 逆順 {"])
def test_find_json_envelope_returns_none_without_object(text):
    assert find_json_envelope(text) is None


def test_parse_json_envelope_inside_code_fence():
    text = '```json\n{"title": "星の海"}\n```'
    data, error = parse_json_envelope(text)
    assert error is None
    assert data == {"title": "星の海"}


@pytest.mark.parametrize(
    "text, expected_error",
    [
        ("", "AIからの応答が空です"),
        ("   ", "AIからの応答が空です"),
        (None, "AIからの応答が空です"),
        ("JSONはありません", "JSON形式が見つかりませんでした"),
    ],
)
def test_parse_json_envelope_reports_missing_input(text, expected_error):
    assert parse_json_envelope(text) == (None, expected_error)


def test_parse_json_envelope_reports_syntax_error_with_position():
    data, error = parse_json_envelope('{"title": }')
    assert data is None
    assert error.startswith("JSONの解析に失敗しました")
    assert "行1" in error


def test_parse_json_envelope_stray_braces_in_prose_break_extraction():
    """外壳取第一个 { 到最后一个 }，说明文字中的花括号会扩大截取范围"""
    text = '{"title": "星の海"}\n補足: {注意}'
    data, error = parse_json_envelope(text)
    assert data is None
    assert error is not None


def test_unwrap_markdown_json_prefers_fenced_block():
    assert unwrap_markdown_json("説明\n```json\n[1, 2]\n```\n以上") == "[1, 2]"
    assert unwrap_markdown_json('前置き {"a": 1} 後書き') == '{"a": 1}'
    assert unwrap_markdown_json("") == ""


def test_parse_llm_json_safe():
    assert parse_llm_json_safe('説明\n```json\n{"a": [1]}\n```') == {"a": [1]}
    assert parse_llm_json_safe("[1, 2, 3]") == [1, 2, 3]
    assert parse_llm_json_safe("{壊れた") is None
    assert parse_llm_json_safe(None) is None


# ============================================================
# json 模块在语法错误之外抛出的异常
# ============================================================

DEEPLY_NESTED = '{"title": ' + "[" * 5000 + "]" * 5000 + "}"
HUGE_INTEGER = '{"title": ' + "1" * 5000 + "}"

requires_int_digit_limit = pytest.mark.skipif(
    not hasattr(sys, "get_int_max_str_digits"),
    reason="解释器没有整数字符串长度限制",
)


def test_deeply_nested_json_is_a_parse_failure():
    data, error = parse_json_envelope(DEEPLY_NESTED)
    assert data is None
    assert error == "JSONの解析に失敗しました: RecursionError"
    assert parse_llm_json_safe(DEEPLY_NESTED) is None


@requires_int_digit_limit
def test_oversized_integer_literal_is_a_parse_failure():
    data, error = parse_json_envelope(HUGE_INTEGER)
    assert data is None
    assert error == "JSONの解析に失敗しました: ValueError"
    assert parse_llm_json_safe(HUGE_INTEGER) is None
