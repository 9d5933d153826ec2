"""Per-ticker news factor and signal classification.

Blends the recency-weighted headline sentiment, publisher diversity and
accumulated topic boosts into a single factor in [-1, 1], then maps the
factor onto a discrete trading signal.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Sequence, Union

import pandas as pd

from eventswing.news.parse import dedupe_headlines, publisher_of
from eventswing.news.pull import Headline
from eventswing.news.score import clamp, score_headline, topic_boost

SENTIMENT_WEIGHT = 0.5
DIVERSITY_WEIGHT = 0.3
BOOST_WEIGHT = 0.2

# Publishers needed for full diversity credit
DIVERSITY_SATURATION = 5.0

BUY_THRESHOLD = 0.6
RISK_OFF_THRESHOLD = -0.4


class Signal(Enum):
    """Signal emitted per ticker."""

    BUY = "BUY"
    RISK_OFF = "RISK_OFF"
    NEUTRAL = "NEUTRAL"


@dataclass(frozen=True)
class TickerResult:
    """Full metrics for a ticker whose headlines were scored."""

    ticker: str
    timestamp: datetime
    item_count: int
    unique_source_count: int
    sentiment_score: float
    topic_boost_total: float
    news_factor: float
    signal: Signal

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the artifact's JSON shape."""
        return {
            "ticker": self.ticker,
            "timestamp": format_timestamp(self.timestamp),
            "item_count": self.item_count,
            "unique_source_count": self.unique_source_count,
            "sentiment_score": round(self.sentiment_score, 3),
            "topic_boost_total": round(self.topic_boost_total, 2),
            "news_factor": round(self.news_factor, 3),
            "signal": self.signal.value,
        }


@dataclass(frozen=True)
class TickerError:
    """Placeholder for a ticker whose headlines could not be fetched."""

    ticker: str
    error: str
    signal: Signal = Signal.NEUTRAL

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the artifact's JSON shape."""
        return {"ticker": self.ticker, "error": self.error, "signal": self.signal.value}


TickerRecord = Union[TickerResult, TickerError]


def format_timestamp(ts: datetime) -> str:
    """Render a UTC instant as ISO-8601 with a trailing Z."""
    return ts.strftime("%Y-%m-%dT%H:%M:%SZ")


def ew_mean(scores: Sequence[float]) -> float:
    """Exponentially weighted mean favoring later scores.

    The recursion starts from 0.0 with ``alpha = 2 / max(10, n + 1)``, so
    short lists are damped toward zero.
    """
    n = len(scores)
    if n == 0:
        return 0.0

    alpha = 2.0 / max(10.0, n + 1.0)
    # Leading zero seeds the adjust=False recursion at m = 0.0
    series = pd.Series([0.0, *scores], dtype="float64")
    return float(series.ewm(alpha=alpha, adjust=False).mean().iloc[-1])


def compute_news_factor(sentiment: float, unique_sources: int, boost_total: float) -> float:
    """Blend sentiment, publisher diversity and topic boosts.

    Args:
        sentiment: EW mean headline sentiment in [-1, 1].
        unique_sources: Number of distinct publishers.
        boost_total: Unclamped sum of topic boosts.

    Returns:
        News factor in [-1.0, 1.0].
    """
    diversity = min(unique_sources / DIVERSITY_SATURATION, 1.0)
    factor = (
        SENTIMENT_WEIGHT * sentiment
        + DIVERSITY_WEIGHT * diversity
        + BOOST_WEIGHT * clamp(boost_total)
    )
    return clamp(factor)


def classify_signal(news_factor: float) -> Signal:
    """Map a news factor to a signal."""
    if news_factor <= RISK_OFF_THRESHOLD:
        return Signal.RISK_OFF  # avoid new longs
    if news_factor >= BUY_THRESHOLD:
        return Signal.BUY
    return Signal.NEUTRAL


def build_ticker_result(
    ticker: str, headlines: Iterable[Headline], timestamp: datetime
) -> TickerResult:
    """Score and aggregate one ticker's headlines.

    Headlines are deduplicated by trimmed title before scoring; feed order
    of the survivors drives the recency weighting.
    """
    items: List[Headline] = dedupe_headlines(headlines)

    sentiments = [score_headline(h.title) for h in items]
    boost_total = sum((topic_boost(h.title) for h in items), 0.0)
    unique_sources = len({publisher_of(h) for h in items})

    sentiment = ew_mean(sentiments)
    factor = compute_news_factor(sentiment, unique_sources, boost_total)

    return TickerResult(
        ticker=ticker,
        timestamp=timestamp,
        item_count=len(items),
        unique_source_count=unique_sources,
        sentiment_score=sentiment,
        topic_boost_total=boost_total,
        news_factor=factor,
        signal=classify_signal(factor),
    )
