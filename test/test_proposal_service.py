"""
故事提案抽取与校验测试
"""

import json
import logging

import pytest

from novel_extraction import (
    StoryProposal,
    extract_story_proposal,
    extract_story_proposal_with_diagnostic,
    validate_story_proposal,
)
from novel_extraction.core.config import Settings

PROPOSAL_DATA = {
    "title": "星の海",
    "theme": "再生",
    "mainGenre": "SF",
    "description": "滅びかけた宇宙船で目覚めた少女の物語",
    "synopsis": "冷凍睡眠から目覚めたミナは、船が漂流していることを知る。",
    "subGenre": "冒険",
    "imageAnalysis": "青い光に満ちた船内",
    "unknownKey": "無視される",
}


def _valid_form(**overrides):
    form = {
        "title": "星の海",
        "theme": "再生",
        "mainGenre": "SF",
        "description": "説明",
        "synopsis": "あらすじ",
    }
    form.update(overrides)
    return form


# ============================================================
# 抽取
# ============================================================

def test_prose_wrapped_json_equals_direct_parse():
    payload = json.dumps(PROPOSAL_DATA, ensure_ascii=False)
    wrapped = f"以下が提案です。\n```json\n{payload}\n```\nご確認ください。"

    proposal = extract_story_proposal(wrapped)

    assert proposal is not None
    assert proposal == extract_story_proposal(payload)
    assert proposal.title == "星の海"
    assert proposal.main_genre == "SF"
    assert proposal.sub_genre == "冒険"
    assert proposal.image_analysis == "青い光に満ちた船内"
    assert proposal.target_reader is None


def test_values_are_trimmed():
    data = dict(PROPOSAL_DATA, title="  星の海  ", targetReader="   ")
    proposal = extract_story_proposal(json.dumps(data, ensure_ascii=False))
    assert proposal.title == "星の海"
    assert proposal.target_reader is None


def test_snake_case_keys_are_accepted():
    data = {
        "title": "星の海",
        "theme": "再生",
        "main_genre": "SF",
        "description": "説明",
        "synopsis": "あらすじ",
        "target_reader": "十代",
    }
    proposal = extract_story_proposal(json.dumps(data, ensure_ascii=False))
    assert proposal.main_genre == "SF"
    assert proposal.target_reader == "十代"


def test_missing_synopsis_returns_none_with_diagnostic(caplog):
    data = {key: value for key, value in PROPOSAL_DATA.items() if key != "synopsis"}

    with caplog.at_level(logging.WARNING, logger="novel_extraction"):
        extraction = extract_story_proposal_with_diagnostic(json.dumps(data, ensure_ascii=False))

    assert extraction.proposal is None
    assert not extraction.succeeded
    assert extraction.diagnostic == "必須フィールドが不足しています: synopsis"
    assert "synopsis" in caplog.text
    assert extract_story_proposal(json.dumps(data, ensure_ascii=False)) is None


def test_blank_and_non_string_required_values_count_as_missing():
    data = dict(PROPOSAL_DATA, title="   ", theme=123)
    extraction = extract_story_proposal_with_diagnostic(json.dumps(data, ensure_ascii=False))
    assert extraction.diagnostic == "必須フィールドが不足しています: title, theme"


@pytest.mark.parametrize(
    "text, diagnostic",
    [
        ("", "AIからの応答が空です"),
        (None, "AIからの応答が空です"),
        ("申し訳ありませんが、提案を作成できませんでした。", "JSON形式が見つかりませんでした"),
    ],
)
def test_unusable_response_diagnostics(text, diagnostic):
    extraction = extract_story_proposal_with_diagnostic(text)
    assert extraction.proposal is None
    assert extraction.diagnostic == diagnostic


def test_broken_json_reports_parse_error(caplog):
    with caplog.at_level(logging.WARNING, logger="novel_extraction"):
        extraction = extract_story_proposal_with_diagnostic('提案: {"title": "星の海",}')

    assert extraction.proposal is None
    assert extraction.diagnostic.startswith("JSONの解析に失敗しました")
    assert "提案" in caplog.text


# ============================================================
# 校验
# ============================================================

def test_valid_proposal_has_no_errors():
    proposal = extract_story_proposal(json.dumps(PROPOSAL_DATA, ensure_ascii=False))
    result = validate_story_proposal(proposal)
    assert result.valid
    assert result.errors == []


def test_title_of_101_characters_is_the_only_violation():
    proposal = StoryProposal(**{**_valid_form(), "title": "あ" * 101})
    result = validate_story_proposal(proposal)
    assert not result.valid
    assert result.errors == ["タイトルは100文字以内で入力してください"]


def test_length_ceilings_are_inclusive():
    form = _valid_form(title="あ" * 100, description="い" * 500, synopsis="う" * 2000)
    assert validate_story_proposal(form).valid


def test_all_violations_are_collected_presence_first():
    form = _valid_form(title="", description="説" * 501, synopsis="  ")
    result = validate_story_proposal(form)
    assert result.errors == [
        "タイトルは必須です",
        "あらすじは必須です",
        "説明は500文字以内で入力してください",
    ]


def test_missing_keys_in_form_data():
    result = validate_story_proposal({"main_genre": "SF"})
    assert result.errors == [
        "タイトルは必須です",
        "テーマは必須です",
        "説明は必須です",
        "あらすじは必須です",
    ]


def test_validation_does_not_modify_input():
    form = _valid_form(synopsis="う" * 2001)
    snapshot = dict(form)
    result = validate_story_proposal(form)
    assert result.errors == ["あらすじは2000文字以内で入力してください"]
    assert form == snapshot


def test_custom_limits():
    config = Settings(title_max_length=3)
    result = validate_story_proposal(_valid_form(title="星の海へ"), config)
    assert result.errors == ["タイトルは3文字以内で入力してください"]


@pytest.mark.parametrize(
    "text",
    [
        '{"title": ' + "[" * 5000 + "]" * 5000 + "}",
        '{"title": ' + "1" * 5000 + "}",
    ],
)
def test_pathological_json_never_raises(text):
    extraction = extract_story_proposal_with_diagnostic(text)
    assert extraction.proposal is None
    assert extraction.diagnostic is not None
    assert extract_story_proposal(text) is None


def test_blank_overlong_title_reports_only_presence():
    result = validate_story_proposal(_valid_form(title=" " * 101))
    assert result.errors == ["タイトルは必須です"]
