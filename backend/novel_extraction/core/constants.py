"""
常量定义模块

集中管理字段标签别名、保留前缀等解析用常量，避免散落在各个解析器中各自维护。
"""

from enum import Enum


class FieldKind(str, Enum):
    """章节字段类型

    定义顺序即字段分类的优先级顺序。
    继承str使其可以直接与字符串比较。
    """
    SUMMARY = "summary"
    SETTING = "setting"
    MOOD = "mood"
    KEY_EVENTS = "key_events"
    CHARACTERS = "characters"


# 列表型字段：赋值前需要经过列表切分
LIST_FIELD_KINDS = frozenset({FieldKind.KEY_EVENTS, FieldKind.CHARACTERS})


class ChapterLabels:
    """章节字段标签别名组（组内按顺序尝试，先命中者生效）"""

    SUMMARY = ("概要", "あらすじ", "内容", "要約", "Summary")
    SETTING = ("設定・場所", "舞台", "場所", "設定", "Setting", "Location")
    MOOD = ("雰囲気・ムード", "ムード", "雰囲気", "トーン", "Mood", "Tone")
    KEY_EVENTS = ("重要な出来事", "キーイベント", "出来事", "イベント", "Key Events", "Events")
    CHARACTERS = ("登場キャラクター", "登場人物", "キャラクター", "人物", "Characters")

    @classmethod
    def alias_groups(cls) -> dict:
        """按字段优先级返回 {FieldKind: 别名元组}"""
        return {
            FieldKind.SUMMARY: cls.SUMMARY,
            FieldKind.SETTING: cls.SETTING,
            FieldKind.MOOD: cls.MOOD,
            FieldKind.KEY_EVENTS: cls.KEY_EVENTS,
            FieldKind.CHARACTERS: cls.CHARACTERS,
        }


class FallbackRules:
    """未识别行回退为概要时的排除规则"""

    # 以这些前缀开头的行属于段落标记，不作为概要
    RESERVED_PREFIXES = ("役割:", "役割：", "ペース:", "ペース：")
    # 含有这些括号的行视为小节标题
    SECTION_BRACKETS = ("【", "】")


# 列表值分隔符：半角逗号、全角顿号、全角逗号、半角/全角分号
LIST_SEPARATORS = (",", "、", "，", ";", "；")


class CharacterLabels:
    """角色设定字段标签"""

    ROLE = ("役割",)
    APPEARANCE = ("外見",)
    PERSONALITY = ("性格",)
    BACKGROUND = ("背景",)

    # 编号角色段落
    NUMBERED_HEADING = "【キャラクター{index}】"
    DEFAULT_NAME = "AI生成キャラクター{index}"
    DEFAULT_ROLE = "主要キャラクター"


class PlotLabels:
    """情节设定字段标签"""

    THEME = ("テーマ",)
    SETTING = ("舞台",)
    HOOK = ("フック",)
    PROTAGONIST_GOAL = ("主人公の目標",)
    MAIN_OBSTACLE = ("主要な障害",)


class ProposalKeys:
    """故事提案 JSON 字段"""

    REQUIRED = ("title", "theme", "mainGenre", "description", "synopsis")
    OPTIONAL = (
        "subGenre",
        "targetReader",
        "imageAnalysis",
        "audioAnalysis",
        "integratedAnalysis",
        "transcription",
    )
