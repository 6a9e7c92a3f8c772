import logging

import pytest
import requests

from nowplaying import feeds
from nowplaying.feeds import FeedSettings, fetch_all, fetch_listening, fetch_reading, fetch_viewing, first_feed_entry
from nowplaying.records import Kind, NormalizedRecord

GOODREADS_RSS = """<?xml version="1.0"?>
<rss version="2.0">
  <channel>
    <title>Bookshelf: read</title>
    <item>
      <title>The Little Prince</title>
      <link>https://example.com/review/1</link>
      <author_name>Antoine de Saint-Exupéry</author_name>
    </item>
    <item>
      <title>Older Book</title>
      <author_name>Someone</author_name>
    </item>
  </channel>
</rss>
"""

LETTERBOXD_RSS = """<?xml version="1.0"?>
<rss version="2.0">
  <channel>
    <title>Letterboxd</title>
    <item>
      <title>Hamnet, 2025 - ★★★★</title>
      <link>https://example.com/film/hamnet/</link>
    </item>
  </channel>
</rss>
"""

ATOM = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Example</title>
  <entry>
    <title>Hamnet (2025)</title>
    <link href="https://example.com/atom/1"/>
    <id>urn:example:1</id>
  </entry>
</feed>
"""


class FakeResponse:
    def __init__(self, text="", payload=None, status=200):
        self.text = text
        self._payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        return self.response


def test_settings_from_env():
    settings = FeedSettings.from_env(
        {"LASTFM_API_KEY": " key ", "LASTFM_USER": "listener", "GOODREADS_RSS": "https://example.com/gr"},
        timeout=3,
    )
    assert settings.lastfm_api_key == "key"
    assert settings.lastfm_user == "listener"
    assert settings.goodreads_rss == "https://example.com/gr"
    assert settings.letterboxd_rss == ""
    assert settings.timeout == 3


def test_first_feed_entry_rss_and_atom():
    assert first_feed_entry(GOODREADS_RSS)["title"] == "The Little Prince"
    entry = first_feed_entry(ATOM)
    assert entry["title"] == "Hamnet (2025)"
    assert entry["link"] == "https://example.com/atom/1"
    assert first_feed_entry("not a feed") is None


def test_fetch_reading_parses_first_item():
    session = FakeSession(FakeResponse(text=GOODREADS_RSS))
    record = fetch_reading(FeedSettings(goodreads_rss="https://example.com/gr?shelf=read", timeout=5), session)

    assert record.primary == "The Little Prince"
    assert record.secondary == "Antoine de Saint-Exupéry"
    assert record.link == "https://example.com/review/1"

    call = session.calls[0]
    assert call["url"] == "https://example.com/gr?shelf=read"
    assert "cb" in call["params"]
    assert call["headers"]["User-Agent"] == feeds.USER_AGENT
    assert call["timeout"] == 5


def test_fetch_viewing_canonicalizes_title():
    session = FakeSession(FakeResponse(text=LETTERBOXD_RSS))
    record = fetch_viewing(FeedSettings(letterboxd_rss="https://example.com/lb"), session)
    assert record.primary == "Hamnet (2025)"
    assert record.link == "https://example.com/film/hamnet/"


def test_fetch_listening_builds_query_and_default_link():
    payload = {"recenttracks": {"track": [{"name": "Reckoner", "artist": {"#text": "Radiohead"}, "@attr": {"nowplaying": "true"}}]}}
    session = FakeSession(FakeResponse(payload=payload))
    record = fetch_listening(FeedSettings(lastfm_api_key="key", lastfm_user="some user"), session)

    assert record.label_text == "Now Listening To"
    assert record.primary == "Reckoner"
    assert record.secondary == "Radiohead"
    assert record.link == "https://www.last.fm/user/some%20user"

    params = session.calls[0]["params"]
    assert params["method"] == "user.getrecenttracks"
    assert params["limit"] == "1"
    assert params["format"] == "json"


@pytest.mark.parametrize("fetch, kind", [(fetch_reading, Kind.READ), (fetch_viewing, Kind.WATCHED), (fetch_listening, Kind.LISTENED)])
def test_disabled_feeds_do_not_fetch(fetch, kind):
    session = FakeSession(FakeResponse())
    record = fetch(FeedSettings(), session)
    assert record == NormalizedRecord(kind=kind)
    assert session.calls == []


def test_fetch_all_isolates_failures(caplog):
    def broken(settings, session):
        raise requests.ConnectionError("boom")

    def bad_json(settings, session):
        raise ValueError("bad json")

    def watched(settings, session):
        return NormalizedRecord(kind=Kind.WATCHED, primary="Hamnet (2025)")

    with caplog.at_level(logging.WARNING):
        records = fetch_all(FeedSettings(), fetchers={Kind.READ: broken, Kind.WATCHED: watched, Kind.LISTENED: bad_json})

    assert [r.kind for r in records] == [Kind.READ, Kind.WATCHED, Kind.LISTENED]
    assert records[0] == NormalizedRecord(kind=Kind.READ)
    assert records[1].primary == "Hamnet (2025)"
    assert records[2] == NormalizedRecord(kind=Kind.LISTENED)
    assert "Failed to fetch read feed" in caplog.text


def test_fetch_all_http_error_becomes_placeholder():
    session = FakeSession(FakeResponse(status=503))
    settings = FeedSettings(goodreads_rss="https://example.com/gr", letterboxd_rss="https://example.com/lb")
    records = fetch_all(settings, session=session)
    assert records == [NormalizedRecord(kind=Kind.READ), NormalizedRecord(kind=Kind.WATCHED), NormalizedRecord(kind=Kind.LISTENED)]


def test_fetch_all_fills_missing_fetchers():
    records = fetch_all(FeedSettings(), fetchers={Kind.WATCHED: lambda settings, session: NormalizedRecord(kind=Kind.WATCHED, primary="Film")})
    assert [r.primary for r in records] == ["—", "Film", "—"]
