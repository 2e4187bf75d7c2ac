"""
小说创作辅助：模型输出抽取引擎

把大模型返回的半结构化文本转换为类型化记录：
    - extract_chapters(): 章节构成文本 -> ExtractionResult
    - extract_story_proposal(): 夹杂说明文字的 JSON -> StoryProposal
    - validate_story_proposal(): 提案的必填与长度校验
    - parse_content() / parse_ai_response(): 按内容类型或自动识别分派

引擎不做网络调用，也不主动配置日志；宿主程序需要统一日志格式时调用
novel_extraction.core.logging_config.setup_logging()。
"""

from .exceptions import (
    ExtractionConfigError,
    ExtractionException,
    InvalidParameterError,
    ParserInvariantError,
)
from .schemas.chapter import ExtractedChapter, ExtractionResult
from .schemas.character import ExtractedCharacter
from .schemas.plot import PlotOutline
from .schemas.proposal import ProposalExtraction, StoryProposal, ValidationResult
from .schemas.response import ParsedResponse, ResponseFormat, ResponseKind
from .services.chapter_extraction import ChapterExtractor, ChapterParserConfig, extract_chapters
from .services.character_extraction import (
    extract_character_sections,
    extract_numbered_character,
    extract_numbered_characters,
)
from .services.plot_extraction import extract_plot_outline
from .services.proposal_service import (
    extract_story_proposal,
    extract_story_proposal_with_diagnostic,
    validate_story_proposal,
)
from .services.response_parser import parse_ai_response, parse_content, validate_response

__version__ = "1.0.0"

__all__ = [
    # 章节
    "ChapterExtractor",
    "ChapterParserConfig",
    "ExtractedChapter",
    "ExtractionResult",
    "extract_chapters",
    # 故事提案
    "ProposalExtraction",
    "StoryProposal",
    "ValidationResult",
    "extract_story_proposal",
    "extract_story_proposal_with_diagnostic",
    "validate_story_proposal",
    # 角色与情节
    "ExtractedCharacter",
    "PlotOutline",
    "extract_character_sections",
    "extract_numbered_character",
    "extract_numbered_characters",
    "extract_plot_outline",
    # 通用分派
    "ParsedResponse",
    "ResponseFormat",
    "ResponseKind",
    "parse_ai_response",
    "parse_content",
    "validate_response",
    # 异常
    "ExtractionConfigError",
    "ExtractionException",
    "InvalidParameterError",
    "ParserInvariantError",
]
