"""Fetch the latest reading, viewing and listening items and normalize them.

Each feed is fetched independently; a disabled, empty or failing feed turns
into that domain's placeholder record and never affects the other two.
"""
from __future__ import annotations

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional
from urllib.parse import quote

import feedparser
import requests

from .normalize import (
    first_recent_track,
    normalize_book_item,
    normalize_movie_item,
    normalize_recent_track,
)
from .records import Kind, NormalizedRecord, placeholder_record

LASTFM_API_URL = "https://ws.audioscrobbler.com/2.0/"
LASTFM_USER_URL = "https://www.last.fm/user/{user}"
USER_AGENT = "nowplaying-widget"
TIMEOUT = 9
RSS_ACCEPT = "application/rss+xml, application/xml, text/xml;q=0.9, */*;q=0.8"
JSON_ACCEPT = "application/json, text/plain;q=0.9, */*;q=0.8"


@dataclass(frozen=True)
class FeedSettings:
    lastfm_api_key: str = ""
    lastfm_user: str = ""
    goodreads_rss: str = ""
    letterboxd_rss: str = ""
    timeout: float = TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, timeout: float = TIMEOUT) -> "FeedSettings":
        env = os.environ if environ is None else environ
        return cls(
            lastfm_api_key=env.get("LASTFM_API_KEY", "").strip(),
            lastfm_user=env.get("LASTFM_USER", "").strip(),
            goodreads_rss=env.get("GOODREADS_RSS", "").strip(),
            letterboxd_rss=env.get("LETTERBOXD_RSS", "").strip(),
            timeout=timeout,
        )


def _cache_bust() -> Dict[str, str]:
    return {"cb": str(int(time.time() * 1000))}


def _get(url: str, accept: str, params: Optional[Dict[str, str]] = None, timeout: float = TIMEOUT, session=None) -> requests.Response:
    http = session or requests
    query = dict(params or {})
    query.update(_cache_bust())
    response = http.get(
        url,
        params=query,
        headers={"User-Agent": USER_AGENT, "Accept": accept, "Cache-Control": "no-store"},
        timeout=timeout,
    )
    response.raise_for_status()
    return response


def fetch_text(url: str, timeout: float = TIMEOUT, session=None) -> str:
    return _get(url, RSS_ACCEPT, timeout=timeout, session=session).text


def fetch_json(url: str, params: Optional[Dict[str, str]] = None, timeout: float = TIMEOUT, session=None) -> Any:
    return _get(url, JSON_ACCEPT, params=params, timeout=timeout, session=session).json()


def first_feed_entry(xml_text: str) -> Optional[Mapping[str, Any]]:
    """First RSS item or Atom entry in ``xml_text``, or None."""
    parsed = feedparser.parse(xml_text)
    if not parsed.entries:
        if parsed.bozo:
            logging.getLogger(__name__).debug("Feed did not parse: %s", parsed.get("bozo_exception"))
        return None
    return parsed.entries[0]


def fetch_reading(settings: FeedSettings, session=None) -> NormalizedRecord:
    if not settings.goodreads_rss:
        logging.getLogger(__name__).info("GOODREADS_RSS not set; skipping reading feed.")
        return placeholder_record(Kind.READ)
    entry = first_feed_entry(fetch_text(settings.goodreads_rss, settings.timeout, session))
    return normalize_book_item(entry)


def fetch_viewing(settings: FeedSettings, session=None) -> NormalizedRecord:
    if not settings.letterboxd_rss:
        logging.getLogger(__name__).info("LETTERBOXD_RSS not set; skipping viewing feed.")
        return placeholder_record(Kind.WATCHED)
    entry = first_feed_entry(fetch_text(settings.letterboxd_rss, settings.timeout, session))
    return normalize_movie_item(entry)


def fetch_listening(settings: FeedSettings, session=None) -> NormalizedRecord:
    if not settings.lastfm_api_key or not settings.lastfm_user:
        logging.getLogger(__name__).info("LASTFM_API_KEY/LASTFM_USER not set; skipping listening feed.")
        return placeholder_record(Kind.LISTENED)
    params = {
        "method": "user.getrecenttracks",
        "user": settings.lastfm_user,
        "api_key": settings.lastfm_api_key,
        "format": "json",
        "limit": "1",
    }
    payload = fetch_json(LASTFM_API_URL, params=params, timeout=settings.timeout, session=session)
    profile = LASTFM_USER_URL.format(user=quote(settings.lastfm_user, safe=""))
    return normalize_recent_track(first_recent_track(payload), default_link=profile)


FETCHERS: Dict[Kind, Callable[..., NormalizedRecord]] = {
    Kind.READ: fetch_reading,
    Kind.WATCHED: fetch_viewing,
    Kind.LISTENED: fetch_listening,
}


def fetch_all(
    settings: FeedSettings,
    fetchers: Optional[Mapping[Kind, Callable[..., NormalizedRecord]]] = None,
    session=None,
    logger: Optional[logging.Logger] = None,
) -> List[NormalizedRecord]:
    """Fetch all feeds concurrently; returns records in Read, Watched, Listened order."""
    if logger is None:
        logger = logging.getLogger(__name__)
    fetchers = dict(FETCHERS if fetchers is None else fetchers)

    records: List[NormalizedRecord] = []
    with ThreadPoolExecutor(max_workers=len(Kind)) as pool:
        futures = {kind: pool.submit(fetchers[kind], settings, session) for kind in Kind if kind in fetchers}
        for kind in Kind:
            future = futures.get(kind)
            if future is None:
                records.append(placeholder_record(kind))
                continue
            try:
                records.append(future.result())
            except (requests.RequestException, ValueError) as exc:
                logger.warning("Failed to fetch %s feed: %s", kind.value, exc)
                records.append(placeholder_record(kind))
            except Exception:
                logger.exception("Unexpected error while fetching %s feed", kind.value)
                records.append(placeholder_record(kind))
    return records
