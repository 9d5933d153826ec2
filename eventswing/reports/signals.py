"""Signal artifact writers and console summary."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional, Sequence

import pandas as pd

from eventswing.cli._console import signal_arrow
from eventswing.logging_setup import get_logger
from eventswing.news.factor import TickerError, TickerRecord

logger = get_logger("reports.signals")

CSV_COLUMNS = [
    "ticker",
    "timestamp",
    "item_count",
    "unique_source_count",
    "sentiment_score",
    "topic_boost_total",
    "news_factor",
    "signal",
    "error",
]


def write_signals_json(records: Sequence[TickerRecord], output_path: Path) -> Path:
    """Write records as a pretty-printed JSON array."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [record.to_dict() for record in records]
    output_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    logger.info("Wrote %d signals to %s", len(payload), output_path)
    return output_path


def write_signals_csv(records: Sequence[TickerRecord], output_path: Path) -> Path:
    """Write a flat CSV digest, one row per ticker.

    Error rows leave the metric columns empty and fill ``error``.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame([record.to_dict() for record in records], columns=CSV_COLUMNS)
    df.to_csv(output_path, index=False)
    logger.info("Wrote signal digest to %s (%d tickers)", output_path, len(df))
    return output_path


def format_summary(
    records: Sequence[TickerRecord],
    lookback_hours: int,
    use_emoji: Optional[bool] = None,
) -> List[str]:
    """Render one console line per ticker under a header."""
    arrow = signal_arrow(use_emoji)
    lines = [f"=== Event Swing Signals (last {lookback_hours}h) ==="]
    for record in records:
        if isinstance(record, TickerError):
            lines.append(f"{record.ticker}: ERROR {record.error}")
            continue
        row = record.to_dict()
        lines.append(
            f"{row['ticker']}  items={row['item_count']} src={row['unique_source_count']} "
            f"NF={row['news_factor']}  {arrow} {row['signal']}"
        )
    return lines


def print_summary(
    records: Sequence[TickerRecord],
    lookback_hours: int,
    use_emoji: Optional[bool] = None,
) -> None:
    """Print the summary lines to stdout."""
    for line in format_summary(records, lookback_hours, use_emoji):
        print(line)
