"""Normalized (primary, secondary) records produced from raw feed items."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import (
    PLACEHOLDER,
    LABEL_READ,
    LABEL_WATCHED,
    LABEL_NOW_LISTENING,
    LABEL_LAST_LISTENED,
)


class Kind(str, Enum):
    READ = "read"
    WATCHED = "watched"
    LISTENED = "listened"


@dataclass(frozen=True)
class NormalizedRecord:
    """One display row: label kind, primary value, optional attribution and link.

    ``primary`` is never empty; a blank primary is replaced by the placeholder.
    """

    kind: Kind
    primary: str = PLACEHOLDER
    secondary: Optional[str] = None
    link: Optional[str] = None
    now_playing: bool = False
    year: Optional[int] = None

    def __post_init__(self):
        primary = (self.primary or "").strip()
        object.__setattr__(self, "primary", primary or PLACEHOLDER)
        secondary = (self.secondary or "").strip()
        object.__setattr__(self, "secondary", secondary or None)
        link = (self.link or "").strip()
        object.__setattr__(self, "link", link or None)

    @property
    def label_text(self) -> str:
        if self.kind is Kind.READ:
            return LABEL_READ
        if self.kind is Kind.WATCHED:
            return LABEL_WATCHED
        return LABEL_NOW_LISTENING if self.now_playing else LABEL_LAST_LISTENED

    @property
    def has_attribution(self) -> bool:
        """Kinds whose secondary names a person (author/artist)."""
        return self.kind in (Kind.READ, Kind.LISTENED)

    @property
    def is_placeholder(self) -> bool:
        return self.primary == PLACEHOLDER and self.secondary is None


def placeholder_record(kind: Kind, link: Optional[str] = None) -> NormalizedRecord:
    """Record used when a feed is missing, disabled or failed."""
    return NormalizedRecord(kind=kind, link=link)


def label_with_colon(label: str) -> str:
    label = (label or "").strip()
    return label if not label or label.endswith(":") else f"{label}:"
