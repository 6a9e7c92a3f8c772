"""Layout helpers placing labels and wrapped values inside the block."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .budget import value_x
from .constants import PLACEHOLDER
from .records import NormalizedRecord, label_with_colon
from .style import StyleConfig
from .text_utils import wrap_record

ROLE_LABEL = "label"
ROLE_VALUE = "value"


class WrappedRecord(NamedTuple):
    label: str
    lines: Sequence[str]
    link: Optional[str] = None


@dataclass(frozen=True)
class LinePlacement:
    x: float
    y: float
    role: str
    text: str
    link: Optional[str] = None


@dataclass(frozen=True)
class RecordBlock:
    """All placements of one record; the renderer wraps them in one hyperlink."""

    label: LinePlacement
    values: Tuple[LinePlacement, ...]
    link: Optional[str] = None

    @property
    def placements(self) -> Tuple[LinePlacement, ...]:
        return (self.label,) + self.values


@dataclass(frozen=True)
class LayoutResult:
    width: float
    height: float
    blocks: Tuple[RecordBlock, ...]

    @property
    def placements(self) -> List[LinePlacement]:
        return [p for block in self.blocks for p in block.placements]

    @property
    def line_count(self) -> int:
        return sum(len(block.values) for block in self.blocks)


def compose_layout(records: Sequence[WrappedRecord], style: StyleConfig) -> LayoutResult:
    """Compute baselines for each label and value line, and the total block height.

    Line ``i`` of the whole block (counting every emitted value line) sits at
    ``padding_top + (i + 1) * line_height_px``.
    """
    blocks: List[RecordBlock] = []
    cursor = 0
    for record in records:
        lines = [line.strip() for line in record.lines if line and line.strip()] or [PLACEHOLDER]
        label = label_with_colon(record.label)
        x = value_x(label, style)

        first_y = style.padding_top + (cursor + 1) * style.line_height_px
        values = tuple(
            LinePlacement(
                x=x,
                y=first_y + idx * style.line_height_px,
                role=ROLE_VALUE,
                text=line,
                link=record.link,
            )
            for idx, line in enumerate(lines)
        )
        cursor += len(lines)

        blocks.append(
            RecordBlock(
                label=LinePlacement(x=style.padding_left, y=first_y, role=ROLE_LABEL, text=label, link=record.link),
                values=values,
                link=record.link,
            )
        )

    height = style.padding_top + style.padding_bottom + cursor * style.line_height_px
    return LayoutResult(width=style.block_width_px, height=height, blocks=tuple(blocks))


def layout_records(records: Sequence[NormalizedRecord], style: StyleConfig) -> LayoutResult:
    """Wrap every record's value to its value column and compose the block."""
    wrapped = [
        WrappedRecord(
            label=r.label_text,
            lines=wrap_record(r, style),
            link=r.link,
        )
        for r in records
    ]
    return compose_layout(wrapped, style)
