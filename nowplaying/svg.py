"""Serialize a LayoutResult into the now-playing SVG document."""
from __future__ import annotations

from typing import List
from xml.sax.saxutils import escape

from .layout import LayoutResult, RecordBlock
from .style import StyleConfig

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def escape_xml(text) -> str:
    return escape("" if text is None else str(text), _XML_ENTITIES)


def _fmt(number: float) -> str:
    # 18.0 -> "18", 146.5 -> "146.5"
    return f"{number:g}"


def render_block(block: RecordBlock, style: StyleConfig) -> str:
    label = block.label
    lines = [
        f'  <text x="{_fmt(label.x)}" y="{_fmt(label.y)}" class="line" text-anchor="start">',
        f'    <tspan class="label">{escape_xml(label.text)}</tspan>',
    ]
    for idx, value in enumerate(block.values):
        # Continuation lines step down relative to the previous tspan
        dy = f' dy="{_fmt(style.line_height_px)}"' if idx else ""
        lines.append(f'    <tspan class="value" x="{_fmt(value.x)}"{dy}>{escape_xml(value.text)}</tspan>')
    lines.append("  </text>")
    text_node = "\n".join(lines)

    if not block.link:
        return text_node
    return (
        f'  <a href="{escape_xml(block.link)}" target="_blank" rel="noopener noreferrer">\n'
        f"{text_node}\n"
        "  </a>"
    )


def render_svg(layout: LayoutResult, style: StyleConfig) -> str:
    """Return the complete SVG document for ``layout``; all text is XML-escaped."""
    width, height = _fmt(layout.width), _fmt(layout.height)
    parts: List[str] = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">',
        "  <style>",
        "    .line {",
        f"      font-family: {style.font_family};",
        f"      font-size: {style.font_size}px;",
        f"      letter-spacing: {style.letter_spacing};",
        "    }",
        f"    .label {{ fill: {style.label_color}; }}",
        f"    .value {{ fill: {style.value_color}; }}",
        "    a { text-decoration: none; }",
        "  </style>",
        '  <rect width="100%" height="100%" fill="transparent"/>',
    ]
    parts.extend(render_block(block, style) for block in layout.blocks)
    parts.append("</svg>")
    return "\n".join(parts) + "\n"
