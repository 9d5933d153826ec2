"""Pytest configuration and fixtures."""

from collections.abc import Callable, Generator
from datetime import datetime, timezone

import pytest

from eventswing.config import reset_config
from eventswing.logging_setup import reset_logging
from eventswing.news.pull import Headline

SIGNAL_ENV_VARS = (
    "SYMBOLS",
    "LOOKBACK_HOURS",
    "NEWS_LANG",
    "NEWS_REGION",
    "NEWS_REQUEST_TIMEOUT",
    "NEWS_USER_AGENT",
    "RESULTS_DIR",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "EVENTSWING_NO_EMOJI",
)


@pytest.fixture(autouse=True)
def reset_globals(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Reset global state and isolate from the caller's environment."""
    for var in SIGNAL_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    reset_config()
    reset_logging()
    yield
    reset_config()
    reset_logging()


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for lookback windows."""
    return datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_headline() -> Callable[..., Headline]:
    """Factory for headlines with sensible defaults."""

    def _make(
        title: str,
        source_name: str | None = "Reuters",
        link: str | None = None,
        published_at: datetime | None = None,
    ) -> Headline:
        return Headline(
            title=title,
            published_at=published_at,
            source_name=source_name,
            link=link,
        )

    return _make
