"""
角色设定抽取测试
"""

from novel_extraction import (
    extract_character_sections,
    extract_numbered_character,
    extract_numbered_characters,
)

SECTION_TEXT = """登場人物の設定です。
【佐藤花子】
役割: ヒロイン
外見: 黒髪の少女
性格: 明るい
性格: 暗い
背景: 東京出身
・山田太郎 (ライバル)
- 役割：敵役
"""

NUMBERED_TEXT = """【キャラクター1】
名前: 佐藤花子
基本設定: ヒロイン
外見: 黒髪の少女
いつも赤いリボンをつけている
性格: 明るく前向き
背景: 東京出身

【キャラクター2】
外見: 長身
"""


def test_extract_character_sections():
    characters = extract_character_sections(SECTION_TEXT)

    assert [character.name for character in characters] == ["佐藤花子", "山田太郎"]
    heroine, rival = characters
    assert heroine.role == "ヒロイン"
    assert heroine.appearance == "黒髪の少女"
    assert heroine.personality == "明るい"
    assert heroine.background == "東京出身"
    assert rival.role == "敵役"
    assert rival.appearance is None


def test_extract_character_sections_without_headings():
    assert extract_character_sections("役割: ヒロイン") == []
    assert extract_character_sections(None) == []


def test_extract_numbered_character():
    character = extract_numbered_character(NUMBERED_TEXT, 1)

    assert character.name == "佐藤花子"
    assert character.role == "ヒロイン"
    assert character.appearance == "黒髪の少女\nいつも赤いリボンをつけている"
    assert character.personality == "明るく前向き"
    assert character.background == "東京出身"


def test_numbered_character_defaults():
    character = extract_numbered_character(NUMBERED_TEXT, 2)

    assert character.name == "AI生成キャラクター2"
    assert character.role == "主要キャラクター"
    assert character.appearance == "長身"
    assert character.personality is None
    assert character.background is None


def test_numbered_character_truncation():
    character = extract_numbered_character(NUMBERED_TEXT, 1, max_length=3)
    assert character.appearance == "黒髪の"
    assert character.background == "東京出"


def test_missing_numbered_sections_are_skipped():
    assert extract_numbered_character(NUMBERED_TEXT, 3) is None
    assert extract_numbered_character("", 1) is None
    assert len(extract_numbered_characters(NUMBERED_TEXT)) == 2
    assert len(extract_numbered_characters(NUMBERED_TEXT, max_characters=1)) == 1
