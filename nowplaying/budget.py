"""Pixel width → character budget estimates using an average glyph width."""
from __future__ import annotations

import math
from typing import NamedTuple, Optional

from .constants import MIN_CHARS_FLOOR, MIN_VALUE_WIDTH_PX
from .style import StyleConfig, ValueFlow


class LineBudgets(NamedTuple):
    first: int
    continuation: int


def chars_that_fit(px_width: float, style: StyleConfig) -> int:
    """Approximate character count for ``px_width``; never below MIN_CHARS_FLOOR."""
    return max(MIN_CHARS_FLOOR, math.floor(px_width / style.avg_glyph_width_px))


def value_x(label: str, style: StyleConfig) -> float:
    """Horizontal start of every value line of a record (first line and continuations)."""
    if style.value_flow is ValueFlow.NATURAL:
        label_px = math.ceil(len(label) * style.avg_glyph_width_px)
        return style.padding_left + min(style.label_column_width_px, label_px) + style.gap_px
    return style.padding_left + style.label_column_width_px + style.gap_px


def value_width(label: str, style: StyleConfig) -> float:
    """Pixels between the value column and the block's right padding."""
    x = value_x(label, style)
    return max(MIN_VALUE_WIDTH_PX, style.block_width_px - style.padding_right - x)


def line_budgets(style: StyleConfig, label: Optional[str] = None) -> LineBudgets:
    """Character budgets for a value's first line and its continuation lines.

    Continuation lines hang under the first value line, so both are measured
    from the same value column. In NATURAL flow that column depends on
    ``label``; without a label the full label column is assumed.
    """
    if label is None:
        width = value_width("", style.replace(value_flow=ValueFlow.COLUMN))
    else:
        width = value_width(label, style)
    chars = chars_that_fit(width, style)
    return LineBudgets(first=chars, continuation=chars)
