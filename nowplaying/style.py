"""Style parameters shared by the estimator, wrapper, composer and SVG renderer."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum

from .constants import MAX_SLACK_CHARS


class ValueFlow(str, Enum):
    """Where the first value line starts relative to its label."""

    # Fixed value column at label_column_width_px
    COLUMN = "column"
    # Value follows the label's estimated width
    NATURAL = "natural"


@dataclass(frozen=True)
class StyleConfig:
    """Immutable block geometry and typography.

    Built once per run and passed explicitly to every stage. Only the
    geometry fields influence wrapping and layout; the font/colour fields
    are consumed by the SVG renderer alone.
    """

    block_width_px: int = 290
    padding_left: int = 0
    padding_right: int = 0
    padding_top: int = 18
    padding_bottom: int = 14

    label_column_width_px: int = 140
    gap_px: int = 6
    line_height_px: int = 24
    max_lines_per_value: int = 2

    # Average glyph width for Times at 16px; a heuristic, not real text shaping
    avg_glyph_width_px: float = 7.0
    # Characters a value (or its primary) may exceed the budget by and still stay on one line
    separator_slack_chars: int = 6

    value_flow: ValueFlow = ValueFlow.COLUMN
    show_missing_secondary: bool = False

    font_family: str = "Times New Roman, Times, serif"
    font_size: int = 16
    letter_spacing: str = "0.3px"
    label_color: str = "#222222"
    value_color: str = "#613d12"

    def __post_init__(self):
        for name in ("block_width_px", "line_height_px", "avg_glyph_width_px"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)!r}")
        for name in (
            "padding_left",
            "padding_right",
            "padding_top",
            "padding_bottom",
            "label_column_width_px",
            "gap_px",
            "separator_slack_chars",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative, got {getattr(self, name)!r}")
        if self.separator_slack_chars > MAX_SLACK_CHARS:
            raise ValueError(
                f"separator_slack_chars must be at most {MAX_SLACK_CHARS}, got {self.separator_slack_chars!r}"
            )
        if self.max_lines_per_value < 1:
            raise ValueError(f"max_lines_per_value must be at least 1, got {self.max_lines_per_value!r}")
        # Accept plain strings such as "natural" from the command line
        object.__setattr__(self, "value_flow", ValueFlow(self.value_flow))

    def replace(self, **changes) -> "StyleConfig":
        return dataclasses.replace(self, **changes)
