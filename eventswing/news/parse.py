"""Headline normalization ahead of scoring.

Window filtering, title deduplication and publisher extraction for the
headlines of a single ticker.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Dict, Iterable, List
from urllib.parse import urlsplit

from eventswing.news.pull import Headline

UNKNOWN_PUBLISHER = "unknown"


def within_lookback(headline: Headline, now: datetime, lookback_hours: int) -> bool:
    """Check whether a headline falls inside the lookback window.

    Undated headlines count as published ``now`` and are always kept.
    """
    published = headline.published_at or now
    return now - published <= timedelta(hours=lookback_hours)


def filter_lookback(
    headlines: Iterable[Headline], now: datetime, lookback_hours: int
) -> List[Headline]:
    """Drop headlines older than the lookback window."""
    return [h for h in headlines if within_lookback(h, now, lookback_hours)]


def dedupe_headlines(headlines: Iterable[Headline]) -> List[Headline]:
    """Collapse headlines sharing a trimmed title.

    The first occurrence wins, and survivors keep the feed order of their
    first appearance, which is what the recency weighting runs over.
    """
    unique: Dict[str, Headline] = {}
    for headline in headlines:
        unique.setdefault(headline.title.strip(), headline)
    return list(unique.values())


def publisher_of(headline: Headline) -> str:
    """Identify the publisher of a headline.

    Prefers the feed's source name, then the link host without ``www.``.
    """
    if headline.source_name:
        return headline.source_name

    try:
        host = urlsplit(headline.link or "").hostname
    except ValueError:
        return UNKNOWN_PUBLISHER
    if not host:
        return UNKNOWN_PUBLISHER
    return host[4:] if host.startswith("www.") else host
