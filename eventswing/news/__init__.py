"""News ingestion and headline scoring.

Modules:
    pull: Fetch headlines from Google News RSS
    parse: Lookback filtering, deduplication and publisher extraction
    score: Lexicon sentiment and topic boosts
    factor: News factor aggregation and signal classification
"""

from eventswing.news.factor import (
    Signal,
    TickerError,
    TickerResult,
    build_ticker_result,
    classify_signal,
    compute_news_factor,
    ew_mean,
)
from eventswing.news.parse import dedupe_headlines, filter_lookback, publisher_of
from eventswing.news.pull import Headline, fetch_headlines
from eventswing.news.score import score_headline, topic_boost

__all__ = [
    "Headline",
    "Signal",
    "TickerError",
    "TickerResult",
    "build_ticker_result",
    "classify_signal",
    "compute_news_factor",
    "dedupe_headlines",
    "ew_mean",
    "fetch_headlines",
    "filter_lookback",
    "publisher_of",
    "score_headline",
    "topic_boost",
]
