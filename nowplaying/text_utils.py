"""Text utilities relying on the character-budget heuristic."""
from __future__ import annotations

from typing import List, Optional, Tuple

from .budget import LineBudgets, line_budgets
from .constants import (
    PLACEHOLDER,
    SEPARATOR,
    SECONDARY_PREFIX,
    ELLIPSIS,
    MIN_WRAP_OFFSET,
)
from .records import NormalizedRecord, label_with_colon
from .style import StyleConfig


def ellipsize(text: str, max_chars: int, keep: int = 0) -> str:
    """Shorten text to at most max_chars, ending in a single ellipsis character.

    Cuts at the last space that still leaves room for the ellipsis, unless
    that space lies within the first ``keep`` characters, in which case the
    text is hard-cut instead.
    """
    t = (text or "").strip()
    if not t:
        return PLACEHOLDER
    if len(t) <= max_chars:
        return t
    limit = max(0, max_chars - 1)
    cut = t.rfind(" ", 0, limit + 1)
    head = t[:cut] if cut > keep else t[:limit]
    return head.rstrip() + ELLIPSIS


def _cut_line(text: str, max_chars: int) -> Tuple[str, str]:
    # Split at the last space within max_chars unless that leaves a stub first line
    min_offset = min(MIN_WRAP_OFFSET, max_chars // 2)
    cut = text.rfind(" ", 0, max_chars + 1)
    head = text[:cut] if cut > min_offset else text[:max_chars]
    return head.strip(), text[len(head):].strip()


def _take_lines(text: str, first_chars: int, continuation_chars: int, count: int) -> Tuple[List[str], str]:
    lines: List[str] = []
    rest = text
    limit = first_chars
    while rest and len(lines) < count:
        if len(rest) <= limit:
            lines.append(rest)
            rest = ""
            break
        line, rest = _cut_line(rest, limit)
        lines.append(line)
        limit = continuation_chars
    return lines, rest


def wrap_by_words(
    text: str,
    max_chars: int,
    max_lines: int = 2,
    continuation_chars: Optional[int] = None,
) -> List[str]:
    """Wrap text into at most max_lines lines.

    The first line holds max_chars characters and every later line
    continuation_chars (defaults to max_chars). Whatever remains for the last
    line is ellipsized. Returns ["—"] for empty text.
    """
    t = (text or "").strip()
    if not t:
        return [PLACEHOLDER]
    if continuation_chars is None:
        continuation_chars = max_chars
    lines, rest = _take_lines(t, max_chars, continuation_chars, max_lines - 1)
    if rest:
        lines.append(ellipsize(rest, continuation_chars if lines else max_chars))
    return lines


def _ellipsize_single_line(primary: str, secondary: Optional[str], max_chars: int) -> str:
    if not secondary:
        return ellipsize(primary, max_chars)
    # Cut after the secondary's first word at the earliest; drop the secondary whole if even that overflows
    head = f"{primary}{SEPARATOR}{secondary.split()[0]}"
    if len(head) < max_chars:
        return ellipsize(f"{primary}{SEPARATOR}{secondary}", max_chars, keep=len(head) - 1)
    return ellipsize(primary, max_chars)


def wrap_value(
    primary: str,
    secondary: Optional[str],
    first_line_chars: int,
    continuation_chars: int,
    max_lines: int = 2,
    slack: int = 0,
) -> List[str]:
    """Lay out ``primary — secondary`` on as few lines as possible.

    Prefers one line. Otherwise the secondary is kept whole as ``"— secondary"``
    on the last line (ellipsized only if it alone overflows), and the primary
    gets the lines before it; primary text that does not fit there is dropped.
    Without a secondary the value is word-wrapped.
    """
    primary = (primary or "").strip()
    secondary = (secondary or "").strip() or None
    if not primary and not secondary:
        return [PLACEHOLDER]
    primary = primary or PLACEHOLDER

    value = f"{primary}{SEPARATOR}{secondary}" if secondary else primary
    if len(value) <= first_line_chars + slack:
        return [value]

    if max_lines <= 1:
        return [_ellipsize_single_line(primary, secondary, first_line_chars + slack)]

    if not secondary:
        return wrap_by_words(value, first_line_chars, max_lines, continuation_chars)

    # The dash and the first word of the secondary stay together
    keep = len(SECONDARY_PREFIX) + len(secondary.split()[0])
    secondary_line = ellipsize(SECONDARY_PREFIX + secondary, continuation_chars, keep=keep)

    if len(primary) <= first_line_chars + slack:
        return [primary, secondary_line]

    primary_lines, _ = _take_lines(primary, first_line_chars, continuation_chars, max_lines - 1)
    return primary_lines + [secondary_line]


def display_secondary(record: NormalizedRecord, style: StyleConfig) -> Optional[str]:
    if record.secondary:
        return record.secondary
    if style.show_missing_secondary and record.has_attribution and not record.is_placeholder:
        return PLACEHOLDER
    return None


def display_value(record: NormalizedRecord, style: StyleConfig) -> str:
    """Single-line form of the record's value, e.g. ``"Hamnet — Maggie O'Farrell"``."""
    secondary = display_secondary(record, style)
    return f"{record.primary}{SEPARATOR}{secondary}" if secondary else record.primary


def wrap_record(record: NormalizedRecord, style: StyleConfig, budgets: Optional[LineBudgets] = None) -> List[str]:
    if budgets is None:
        budgets = line_budgets(style, label_with_colon(record.label_text))
    return wrap_value(
        record.primary,
        display_secondary(record, style),
        budgets.first,
        budgets.continuation,
        max_lines=style.max_lines_per_value,
        slack=style.separator_slack_chars,
    )
