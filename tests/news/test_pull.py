"""Tests for RSS fetching and feed parsing."""

from datetime import datetime, timezone
from urllib.error import HTTPError, URLError

import pytest

from eventswing.news import pull
from eventswing.news.factor import build_ticker_result
from eventswing.news.pull import (
    FeedFetchError,
    FeedParseError,
    HeadlineSourceError,
    _parse_rss_date,
    fetch_feed,
    fetch_headlines,
    google_news_rss_url,
    parse_feed,
)

GOOGLE_RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:dc="http://purl.org/dc/elements/1.1/">
  <channel>
    <title>"NVDA stock" - Google News</title>
    <item>
      <title>Nvidia &amp; TSMC win new deal - Reuters</title>
      <link>https://news.google.com/rss/articles/abc</link>
      <pubDate>Thu, 15 Jan 2026 09:30:00 GMT</pubDate>
      <source url="https://www.reuters.com">Reuters</source>
    </item>
    <item>
      <title>Chip stocks slide</title>
      <link>https://www.cnbc.com/2026/01/15/chips.html</link>
      <dc:date>2026-01-15T08:00:00Z</dc:date>
    </item>
    <item>
      <title>Undated headline</title>
      <link>https://example.com/a</link>
      <pubDate>sometime yesterday</pubDate>
    </item>
    <item>
      <title></title>
      <link>https://example.com/untitled</link>
    </item>
  </channel>
</rss>
"""

ESCAPED_TITLES_RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <item>
      <title>Chipmaker P/E &lt; 20 as lawsuit &gt; settled</title>
      <source url="https://www.reuters.com">Reuters</source>
    </item>
    <item>
      <title>Chipmaker  rallies</title>
      <source url="https://www.bloomberg.com">Bloomberg</source>
    </item>
    <item>
      <title>  Chipmaker rallies </title>
      <source url="https://www.reuters.com">Reuters</source>
    </item>
  </channel>
</rss>
"""

NOW = datetime(2026, 1, 15, 12, tzinfo=timezone.utc)

ATOM_FEED = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Example</title>
  <entry>
    <title>Analyst upgrades Meta</title>
    <link href="https://www.marketwatch.com/story/meta"/>
    <published>2026-01-15T10:00:00+00:00</published>
  </entry>
</feed>
"""


class FakeResponse:
    """Minimal stand-in for urlopen's response."""

    def __init__(self, body, status: int = 200):
        self._body = body if isinstance(body, bytes) else body.encode("utf-8")
        self.status = status

    def read(self) -> bytes:
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class TestGoogleNewsRssUrl:
    """Tests for feed URL construction."""

    def test_default_locale(self):
        url = google_news_rss_url("NVDA", 12, "en-US", "US")
        assert url == (
            "https://news.google.com/rss/search?q=NVDA+stock%20when:12h"
            "&hl=en-US&gl=US&ceid=US:US"
        )

    def test_region_with_subtag(self):
        url = google_news_rss_url("TSM", 24, "en-GB", "en-GB")
        assert "when:24h" in url
        assert "&gl=GB&" in url
        assert url.endswith("ceid=en-GB:GB")

    def test_ticker_is_quoted(self):
        url = google_news_rss_url("BRK B", 6, "en-US", "US")
        assert "q=BRK+B+stock" in url


class TestParseRssDate:
    """Tests for RSS date parsing."""

    def test_rfc822_gmt(self):
        dt = _parse_rss_date("Thu, 15 Jan 2026 09:30:00 GMT")
        assert dt == datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)

    def test_rfc822_offset(self):
        dt = _parse_rss_date("Thu, 15 Jan 2026 09:30:00 +0100")
        assert dt == datetime(2026, 1, 15, 8, 30, tzinfo=timezone.utc)

    def test_iso_zulu(self):
        dt = _parse_rss_date("2026-01-15T08:00:00Z")
        assert dt == datetime(2026, 1, 15, 8, 0, tzinfo=timezone.utc)

    def test_unparsable_returns_none(self):
        assert _parse_rss_date("sometime yesterday") is None

    def test_empty_returns_none(self):
        assert _parse_rss_date("") is None


class TestParseFeed:
    """Tests for RSS/Atom parsing."""

    def test_rss_items(self):
        headlines = parse_feed(GOOGLE_RSS)

        assert [h.title for h in headlines] == [
            "Nvidia & TSMC win new deal - Reuters",
            "Chip stocks slide",
            "Undated headline",
        ]

    def test_rss_source_element(self):
        first = parse_feed(GOOGLE_RSS)[0]
        assert first.source_name == "Reuters"
        assert first.link == "https://news.google.com/rss/articles/abc"
        assert first.published_at == datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)

    def test_dc_date_and_missing_source(self):
        second = parse_feed(GOOGLE_RSS)[1]
        assert second.source_name is None
        assert second.published_at == datetime(2026, 1, 15, 8, 0, tzinfo=timezone.utc)

    def test_bad_date_becomes_none(self):
        assert parse_feed(GOOGLE_RSS)[2].published_at is None

    def test_atom_entries(self):
        headlines = parse_feed(ATOM_FEED)

        assert len(headlines) == 1
        assert headlines[0].title == "Analyst upgrades Meta"
        assert headlines[0].link == "https://www.marketwatch.com/story/meta"
        assert headlines[0].published_at == datetime(2026, 1, 15, 10, tzinfo=timezone.utc)

    def test_titles_kept_verbatim(self):
        headlines = parse_feed(ESCAPED_TITLES_RSS)

        assert [h.title for h in headlines] == [
            "Chipmaker P/E < 20 as lawsuit > settled",
            "Chipmaker  rallies",
            "Chipmaker rallies",
        ]

    def test_verbatim_titles_drive_aggregation(self):
        result = build_ticker_result("CHIP", parse_feed(ESCAPED_TITLES_RSS), NOW)

        assert result.item_count == 3
        assert result.unique_source_count == 2
        assert result.topic_boost_total == pytest.approx(-0.4)

    def test_declared_encoding_honored(self):
        body = (
            '<?xml version="1.0" encoding="ISO-8859-1"?>'
            "<rss><channel><item><title>Soci\xe9t\xe9 G\xe9n\xe9rale wins award</title>"
            "</item></channel></rss>"
        ).encode("latin-1")

        assert parse_feed(body)[0].title == "Société Générale wins award"

    def test_empty_channel(self):
        assert parse_feed("<rss><channel><title>x</title></channel></rss>") == []

    def test_malformed_xml_raises(self):
        with pytest.raises(FeedParseError):
            parse_feed("<rss><channel><item>")

    def test_errors_share_base(self):
        assert issubclass(FeedParseError, HeadlineSourceError)
        assert issubclass(FeedFetchError, HeadlineSourceError)


class TestFetchFeed:
    """Tests for HTTP fetching."""

    def test_success_returns_body(self, monkeypatch):
        seen = {}

        def fake_urlopen(req, timeout):
            seen["agent"] = req.get_header("User-agent")
            seen["timeout"] = timeout
            return FakeResponse("<rss/>")

        monkeypatch.setattr(pull, "urlopen", fake_urlopen)

        assert fetch_feed("https://example.com/rss", timeout=7, user_agent="bot/2") == b"<rss/>"
        assert seen == {"agent": "bot/2", "timeout": 7}

    def test_http_error_message(self, monkeypatch):
        def fake_urlopen(req, timeout):
            raise HTTPError(req.full_url, 503, "Service Unavailable", None, None)

        monkeypatch.setattr(pull, "urlopen", fake_urlopen)

        with pytest.raises(FeedFetchError, match="HTTP 503 for https://example.com/rss"):
            fetch_feed("https://example.com/rss")

    def test_non_success_status(self, monkeypatch):
        monkeypatch.setattr(pull, "urlopen", lambda req, timeout: FakeResponse("", status=302))

        with pytest.raises(FeedFetchError, match="HTTP 302"):
            fetch_feed("https://example.com/rss")

    def test_network_error(self, monkeypatch):
        def fake_urlopen(req, timeout):
            raise URLError("name resolution failed")

        monkeypatch.setattr(pull, "urlopen", fake_urlopen)

        with pytest.raises(FeedFetchError, match="name resolution failed"):
            fetch_feed("https://example.com/rss")

    def test_timeout(self, monkeypatch):
        def fake_urlopen(req, timeout):
            raise TimeoutError("timed out")

        monkeypatch.setattr(pull, "urlopen", fake_urlopen)

        with pytest.raises(FeedFetchError, match="Timeout"):
            fetch_feed("https://example.com/rss")


class TestFetchHeadlines:
    """Tests for the Google News source."""

    def test_fetches_built_url(self, monkeypatch):
        calls = []

        def fake_fetch_feed(url, timeout, user_agent):
            calls.append((url, timeout, user_agent))
            return GOOGLE_RSS

        monkeypatch.setattr(pull, "fetch_feed", fake_fetch_feed)

        headlines = fetch_headlines("NVDA", 12, "en-US", "US", timeout=3, user_agent="ua")

        assert len(headlines) == 3
        assert calls == [(google_news_rss_url("NVDA", 12, "en-US", "US"), 3, "ua")]
