"""EventSwing command-line interface (`eventswing`).

Commands:

- ``run``: fetch headlines for every configured ticker, write the signal
  artifact and print the summary
- ``score``: score ad-hoc headline titles against the lexicon (offline)

Flags override the environment configuration for a single invocation.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from eventswing import __version__
from eventswing.cli._console import configure_windows_console
from eventswing.config import get_config, parse_symbols
from eventswing.logging_setup import get_logger, setup_logging
from eventswing.news.score import score_headline, topic_boost
from eventswing.pipeline import run_signals
from eventswing.reports.signals import print_summary, write_signals_csv, write_signals_json

logger = get_logger("cli.main")


def cmd_run(args: argparse.Namespace) -> None:
    """Run the signal pipeline."""
    config = get_config()
    signals = config.signals

    if args.symbols is not None:
        signals = replace(signals, symbols=parse_symbols(args.symbols))
    if args.lookback_hours is not None:
        signals = replace(signals, lookback_hours=args.lookback_hours)
    if args.lang is not None:
        signals = replace(signals, lang=args.lang)
    if args.region is not None:
        signals = replace(signals, region=args.region)

    if not signals.symbols:
        logger.warning("No symbols configured; writing an empty signal list")

    output_path = Path(args.out) if args.out else config.signals_path
    use_emoji = False if args.no_emoji else None

    logger.info(
        "Running signals for %s (last %dh)", ",".join(signals.symbols), signals.lookback_hours
    )
    records = run_signals(signals)
    write_signals_json(records, output_path)
    if args.csv:
        write_signals_csv(records, Path(args.csv))

    print_summary(records, signals.lookback_hours, use_emoji=use_emoji)
    print(f"Saved {output_path}")


def cmd_score(args: argparse.Namespace) -> None:
    """Score titles without fetching anything."""
    for title in args.titles:
        print(f"{score_headline(title):+.1f}\t{topic_boost(title):+.2f}\t{title}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eventswing",
        description="Headline sentiment signals (BUY / RISK_OFF / NEUTRAL)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # run
    run_p = subparsers.add_parser(
        "run",
        help="Fetch headlines and emit signals for all tickers",
    )
    run_p.add_argument(
        "--symbols",
        default=None,
        help="Comma-separated tickers (default: SYMBOLS env or NVDA,META,TSM,FCX,MA)",
    )
    run_p.add_argument(
        "--lookback-hours",
        type=int,
        default=None,
        help="Headline window in hours (default: LOOKBACK_HOURS env or 12)",
    )
    run_p.add_argument(
        "--lang",
        default=None,
        help="Feed language tag (default: NEWS_LANG env or en-US)",
    )
    run_p.add_argument(
        "--region",
        default=None,
        help="Feed region tag (default: NEWS_REGION env or US)",
    )
    run_p.add_argument(
        "--out",
        default=None,
        help="JSON artifact path (default: <RESULTS_DIR>/signals.json)",
    )
    run_p.add_argument(
        "--csv",
        default=None,
        help="Optional CSV digest path",
    )
    run_p.add_argument(
        "--no-emoji",
        action="store_true",
        help="Use ASCII-only console output",
    )
    run_p.set_defaults(func=cmd_run)

    # score
    score_p = subparsers.add_parser(
        "score",
        help="Print sentiment and topic boost for headline titles",
    )
    score_p.add_argument("titles", nargs="+", help="Headline titles")
    score_p.set_defaults(func=cmd_score)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    configure_windows_console()
    setup_logging(get_config().logging)

    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
