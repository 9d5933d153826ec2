"""RSS headline fetching for news ingestion.

Fetches Google News search feeds per ticker without requiring API keys
and turns each feed item into a ``Headline``.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import List, Optional, Protocol, Union
from urllib.error import HTTPError, URLError
from urllib.parse import quote_plus
from urllib.request import Request, urlopen

from eventswing.logging_setup import get_logger

logger = get_logger("news.pull")

GOOGLE_NEWS_RSS = "https://news.google.com/rss/search"

# Timeout for RSS requests (seconds)
REQUEST_TIMEOUT = 15

USER_AGENT = "event-swing-bot/1.0"

_ATOM_NS = "{http://www.w3.org/2005/Atom}"
_DC_NS = "{http://purl.org/dc/elements/1.1/}"


class HeadlineSourceError(Exception):
    """Base error for headline providers."""


class FeedFetchError(HeadlineSourceError):
    """Transport failure or non-success HTTP response."""


class FeedParseError(HeadlineSourceError):
    """Feed body is not well-formed XML."""


@dataclass(frozen=True)
class Headline:
    """Single feed item as delivered by the provider."""

    title: str
    published_at: Optional[datetime] = None
    source_name: Optional[str] = None
    link: Optional[str] = None


class HeadlineSource(Protocol):
    """Anything that can return headlines for a ticker."""

    def __call__(
        self, ticker: str, lookback_hours: int, lang: str, region: str
    ) -> List[Headline]: ...


def google_news_rss_url(ticker: str, lookback_hours: int, lang: str, region: str) -> str:
    """Build the Google News search feed URL for a ticker."""
    query = quote_plus(f"{ticker} stock")
    gl = region.split("-")[-1]
    ceid = f"{region}:{lang.split('-')[-1]}"
    return (
        f"{GOOGLE_NEWS_RSS}?q={query}%20when:{lookback_hours}h"
        f"&hl={lang}&gl={gl}&ceid={ceid}"
    )


def _parse_rss_date(date_str: str) -> Optional[datetime]:
    """Parse various RSS date formats to datetime."""
    if not date_str:
        return None

    formats = [
        "%a, %d %b %Y %H:%M:%S %z",  # RFC 822
        "%a, %d %b %Y %H:%M:%S GMT",
        "%Y-%m-%dT%H:%M:%S%z",  # ISO 8601
        "%Y-%m-%dT%H:%M:%SZ",
        "%Y-%m-%d %H:%M:%S",
        "%Y-%m-%dT%H:%M:%S.%f%z",
        "%Y-%m-%dT%H:%M:%S.%fZ",
    ]

    date_str = re.sub(r"\s+", " ", date_str.strip())

    for fmt in formats:
        try:
            dt = datetime.strptime(date_str, fmt)
        except ValueError:
            continue
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt

    try:
        dt = parsedate_to_datetime(date_str)
    except (TypeError, ValueError):
        logger.debug("Could not parse date: %s", date_str)
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _get_text(element: Optional[ET.Element], default: str = "") -> str:
    """Safely get text from XML element."""
    if element is None:
        return default
    return element.text or default


def parse_feed(xml_content: Union[str, bytes]) -> List[Headline]:
    """Parse an RSS 2.0 or Atom document into headlines.

    Titles are kept as delivered apart from trimming the ends; entities are
    already decoded by the XML parser. Items without a title are skipped.
    A document that parses but holds no items yields an empty list.

    Raises:
        FeedParseError: If the document is not well-formed XML.
    """
    try:
        root = ET.fromstring(xml_content)
    except ET.ParseError as e:
        raise FeedParseError(f"Malformed feed: {e}") from e

    headlines: List[Headline] = []

    atom_entries = root.findall(f"{_ATOM_NS}entry")
    if root.tag == f"{_ATOM_NS}feed" or atom_entries:
        for entry in atom_entries:
            title = _get_text(entry.find(f"{_ATOM_NS}title")).strip()
            if not title:
                continue
            link_el = entry.find(f"{_ATOM_NS}link")
            link = link_el.get("href") if link_el is not None else None
            source_name = (
                _get_text(entry.find(f"{_ATOM_NS}source/{_ATOM_NS}title")).strip() or None
            )
            published = _get_text(entry.find(f"{_ATOM_NS}published")) or _get_text(
                entry.find(f"{_ATOM_NS}updated")
            )
            headlines.append(
                Headline(
                    title=title,
                    published_at=_parse_rss_date(published),
                    source_name=source_name,
                    link=link,
                )
            )
        return headlines

    for item in root.findall(".//item"):
        title = _get_text(item.find("title")).strip()
        if not title:
            continue
        published = _get_text(item.find("pubDate")) or _get_text(item.find(f"{_DC_NS}date"))
        headlines.append(
            Headline(
                title=title,
                published_at=_parse_rss_date(published),
                # Google News names the publisher in <source url="...">
                source_name=_get_text(item.find("source")).strip() or None,
                link=_get_text(item.find("link")).strip() or None,
            )
        )

    return headlines


def fetch_feed(url: str, timeout: int = REQUEST_TIMEOUT, user_agent: str = USER_AGENT) -> bytes:
    """GET a feed body as raw bytes.

    The bytes go to the XML parser undecoded so the document's own
    encoding declaration applies.

    Raises:
        FeedFetchError: On non-success status or network failure.
    """
    req = Request(url, headers={"User-Agent": user_agent})
    try:
        with urlopen(req, timeout=timeout) as response:
            status = response.status
            if not 200 <= status < 300:
                raise FeedFetchError(f"HTTP {status} for {url}")
            return response.read()
    except HTTPError as e:
        raise FeedFetchError(f"HTTP {e.code} for {url}") from e
    except URLError as e:
        raise FeedFetchError(f"URL error for {url}: {e.reason}") from e
    except TimeoutError as e:
        raise FeedFetchError(f"Timeout fetching {url}") from e


def fetch_headlines(
    ticker: str,
    lookback_hours: int,
    lang: str,
    region: str,
    *,
    timeout: int = REQUEST_TIMEOUT,
    user_agent: str = USER_AGENT,
) -> List[Headline]:
    """Fetch headlines for one ticker from Google News RSS."""
    url = google_news_rss_url(ticker, lookback_hours, lang, region)
    headlines = parse_feed(fetch_feed(url, timeout=timeout, user_agent=user_agent))
    logger.info("Fetched %d items for %s", len(headlines), ticker)
    return headlines
