"""Turn raw reading, viewing and listening feed items into NormalizedRecords.

Every function here degrades instead of raising: a missing item yields the
placeholder record and an unrecognised title shape is used as-is.
"""
from __future__ import annotations

import re
from typing import Any, Iterable, Mapping, Optional, Tuple

from .records import Kind, NormalizedRecord, placeholder_record

# Field names tried in order; the first non-empty text wins
TITLE_FIELDS: Tuple[str, ...] = ("title", "dc_title", "media_title")
LINK_FIELDS: Tuple[str, ...] = ("link", "id")
CREATOR_FIELDS: Tuple[str, ...] = ("author_name", "author", "dc_creator", "creator")

BY_DELIMITER = re.compile(r" by ", re.IGNORECASE)
RATING_SEPARATOR = " - "
YEAR_AFTER_COMMA = re.compile(r"^(.+?),\s*(\d{4})")
YEAR_IN_PARENS = re.compile(r"^(.+?)\s*\((\d{4})\)\s*$")


def safe_text(value: Any) -> str:
    """Return ``value`` as stripped text; containers and None give ''."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (bool, int, float)):
        return str(value)
    return ""


def first_text(item: Optional[Mapping[str, Any]], fields: Iterable[str]) -> Optional[str]:
    if not item:
        return None
    for field in fields:
        text = safe_text(item.get(field))
        if text:
            return text
    return None


def parse_book_title(raw_title: str) -> Tuple[str, Optional[str]]:
    """Split ``"<Title> by <Author>"`` on the first case-insensitive `` by ``.

    Returns (title, author); author is None when there is no delimiter.
    """
    text = safe_text(raw_title)
    parts = BY_DELIMITER.split(text, maxsplit=1)
    if len(parts) == 2:
        title, author = parts[0].strip(), parts[1].strip()
        if title and author:
            return title, author
    return text, None


def parse_movie_title_parts(raw_title: str) -> Tuple[str, Optional[int]]:
    """Return (cleaned title, year or None) for a viewing-log title."""
    # Drop star ratings and other annotations after " - "
    clean = safe_text(raw_title).split(RATING_SEPARATOR)[0].strip()

    m = YEAR_AFTER_COMMA.match(clean) or YEAR_IN_PARENS.match(clean)
    if m:
        return m.group(1).strip(), int(m.group(2))
    return clean, None


def parse_movie_title(raw_title: str) -> str:
    """Canonicalize ``"Title, 2025"`` / ``"Title (2025)"`` to ``"Title (2025)"``."""
    title, year = parse_movie_title_parts(raw_title)
    if year is None:
        return title
    return f"{title} ({year})"


def normalize_book_item(item: Optional[Mapping[str, Any]]) -> NormalizedRecord:
    """Reading-log entry → ``Last Read`` record."""
    if not item:
        return placeholder_record(Kind.READ)

    link = first_text(item, LINK_FIELDS)
    title, author = parse_book_title(first_text(item, TITLE_FIELDS) or "")
    if author is None:
        author = first_text(item, CREATOR_FIELDS)
    if not title:
        return placeholder_record(Kind.READ, link=link)
    return NormalizedRecord(kind=Kind.READ, primary=title, secondary=author, link=link)


def normalize_movie_item(item: Optional[Mapping[str, Any]]) -> NormalizedRecord:
    """Viewing-log entry → ``Last Watched`` record with the year folded into the primary."""
    if not item:
        return placeholder_record(Kind.WATCHED)

    link = first_text(item, LINK_FIELDS)
    title, year = parse_movie_title_parts(first_text(item, TITLE_FIELDS) or "")
    primary = f"{title} ({year})" if title and year is not None else title
    return NormalizedRecord(kind=Kind.WATCHED, primary=primary, link=link, year=year)


def artist_name(artist: Any) -> str:
    """Artist may be a plain string or an object with ``#text`` or ``name``."""
    if isinstance(artist, Mapping):
        return safe_text(artist.get("#text")) or safe_text(artist.get("name"))
    return safe_text(artist)


def is_now_playing(track: Mapping[str, Any]) -> bool:
    attrs = track.get("@attr")
    if not isinstance(attrs, Mapping):
        return False
    flag = attrs.get("nowplaying")
    if isinstance(flag, str):
        return flag.strip().lower() in ("true", "1", "yes")
    return flag is True


def normalize_recent_track(track: Optional[Mapping[str, Any]], default_link: Optional[str] = None) -> NormalizedRecord:
    """Recent-track JSON object → ``Now Listening To`` / ``Last Listened To`` record."""
    if not track:
        return placeholder_record(Kind.LISTENED)

    name = safe_text(track.get("name"))
    artist = artist_name(track.get("artist"))
    if not name:
        # Only the artist survived; it becomes the value
        name, artist = artist, ""
    return NormalizedRecord(
        kind=Kind.LISTENED,
        primary=name,
        secondary=artist,
        link=safe_text(track.get("url")) or default_link,
        now_playing=is_now_playing(track),
    )


def first_recent_track(payload: Any) -> Optional[Mapping[str, Any]]:
    """Pick the newest track from a ``user.getrecenttracks`` response."""
    if not isinstance(payload, Mapping):
        return None
    recent = payload.get("recenttracks")
    if not isinstance(recent, Mapping):
        return None
    tracks = recent.get("track")
    if isinstance(tracks, list):
        tracks = tracks[0] if tracks else None
    return tracks if isinstance(tracks, Mapping) else None
