import logging

from ..core.constants import PlotLabels
from ..schemas.plot import PlotOutline
from ..utils.text_utils import iter_content_lines
from .chapter_extraction.fields import compile_labels, match_labels

logger = logging.getLogger(__name__)

_FIELD_PATTERNS = (
    ("theme", compile_labels(PlotLabels.THEME)),
    ("setting", compile_labels(PlotLabels.SETTING)),
    ("hook", compile_labels(PlotLabels.HOOK)),
    ("protagonist_goal", compile_labels(PlotLabels.PROTAGONIST_GOAL)),
    ("main_obstacle", compile_labels(PlotLabels.MAIN_OBSTACLE)),
)


def extract_plot_outline(text: str) -> PlotOutline:
    """抽取情节基础设定，每个字段只接受第一次出现的值；无法识别时返回空的 PlotOutline"""
    values = {}
    for line in iter_content_lines(text):
        for field_name, patterns in _FIELD_PATTERNS:
            value = match_labels(line, patterns)
            if value is None:
                continue
            if value and field_name not in values:
                values[field_name] = value
            break

    logger.debug("情节设定抽取: 命中字段 %s", ", ".join(values) or "无")
    return PlotOutline(**values)
