"""Signal run loop.

Processes tickers one at a time in input order. A failure for one ticker
becomes an error record for that ticker and the loop moves on.
"""

from __future__ import annotations

from datetime import datetime, timezone
from functools import partial
from typing import List, Optional

from eventswing.config import SignalConfig
from eventswing.logging_setup import get_logger
from eventswing.news.factor import TickerError, TickerRecord, build_ticker_result
from eventswing.news.parse import filter_lookback
from eventswing.news.pull import HeadlineSource, fetch_headlines

logger = get_logger("pipeline")


def default_source(config: SignalConfig) -> HeadlineSource:
    """Google News source bound to the config's HTTP settings."""
    return partial(
        fetch_headlines,
        timeout=config.request_timeout,
        user_agent=config.user_agent,
    )


def process_ticker(
    ticker: str,
    config: SignalConfig,
    source: HeadlineSource,
    now: datetime,
) -> TickerRecord:
    """Fetch, filter and score a single ticker."""
    try:
        headlines = source(ticker, config.lookback_hours, config.lang, config.region)
        recent = filter_lookback(headlines, now, config.lookback_hours)
        result = build_ticker_result(ticker, recent, now)
    except Exception as e:
        logger.error(
            "[ERR] %s: %s",
            ticker,
            e,
            extra={"extra_fields": {"ticker": ticker, "error_type": type(e).__name__}},
        )
        return TickerError(ticker=ticker, error=str(e))

    logger.info(
        "%s: %d items, %d sources, factor %.3f -> %s",
        ticker,
        result.item_count,
        result.unique_source_count,
        result.news_factor,
        result.signal.value,
    )
    return result


def run_signals(
    config: SignalConfig,
    source: Optional[HeadlineSource] = None,
    now: Optional[datetime] = None,
) -> List[TickerRecord]:
    """Produce one record per configured ticker.

    Args:
        config: Tickers, lookback window and feed locale.
        source: Headline provider. Defaults to Google News RSS.
        now: Reference time for the lookback window and record timestamps.

    Returns:
        Records in the same order as ``config.symbols``.
    """
    if source is None:
        source = default_source(config)
    if now is None:
        now = datetime.now(timezone.utc)

    results: List[TickerRecord] = []
    for ticker in config.symbols:
        results.append(process_ticker(ticker, config, source, now))

    failed = sum(1 for r in results if isinstance(r, TickerError))
    logger.info("Processed %d tickers (%d failed)", len(results), failed)
    return results
