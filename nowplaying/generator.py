"""SVG generation orchestrator for the now-playing widget."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .feeds import FeedSettings, fetch_all
from .layout import layout_records
from .records import NormalizedRecord
from .style import StyleConfig
from .svg import render_svg
from .text_utils import display_value


def build_svg(records: Sequence[NormalizedRecord], style: Optional[StyleConfig] = None) -> str:
    """Wrap, lay out and serialize already-normalized records."""
    style = style or StyleConfig()
    return render_svg(layout_records(records, style), style)


def main(
    output_svg_path: str = "now-playing.svg",
    style: Optional[StyleConfig] = None,
    settings: Optional[FeedSettings] = None,
    fetch: Callable[..., List[NormalizedRecord]] = fetch_all,
) -> Path:
    logger = logging.getLogger(__name__)
    style = style or StyleConfig()
    settings = settings or FeedSettings.from_env()

    records = fetch(settings, logger=logger)
    # Breadcrumbs for scheduled runs
    for record in records:
        logger.debug("%s: %s (link: %s)", record.label_text, display_value(record, style), record.link)

    layout = layout_records(records, style)
    output = Path(output_svg_path)
    output.write_text(render_svg(layout, style), encoding="utf-8")

    logger.info(
        "Wrote %s (%d records, %d lines, %gx%g px)",
        output,
        len(records),
        layout.line_count,
        layout.width,
        layout.height,
    )
    return output
