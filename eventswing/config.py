"""Configuration management for EventSwing.

Loads configuration from environment variables with sane defaults.
Uses python-dotenv to load from .env file if present.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

DEFAULT_SYMBOLS = "NVDA,META,TSM,FCX,MA"


def _get_env_int(key: str, default: int) -> int:
    """Get int from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_env_str(key: str, default: str) -> str:
    """Get string from environment variable."""
    return os.getenv(key, default)


def parse_symbols(raw: str) -> tuple[str, ...]:
    """Split a comma-separated ticker list.

    Symbols are trimmed, empty entries dropped and duplicates removed
    while keeping the first occurrence's position.
    """
    symbols: list[str] = []
    for part in raw.split(","):
        symbol = part.strip()
        if symbol and symbol not in symbols:
            symbols.append(symbol)
    return tuple(symbols)


@dataclass(frozen=True)
class LoggingConfig:
    """Logging-related configuration."""

    level: str
    format: str

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        """Create LoggingConfig from environment variables."""
        return cls(
            level=_get_env_str("LOG_LEVEL", "INFO"),
            format=_get_env_str("LOG_FORMAT", "simple"),
        )


@dataclass(frozen=True)
class SignalConfig:
    """Inputs for one signal run."""

    symbols: tuple[str, ...]
    lookback_hours: int
    lang: str
    region: str
    request_timeout: int = 15
    user_agent: str = "event-swing-bot/1.0"

    @classmethod
    def from_env(cls) -> "SignalConfig":
        """Create SignalConfig from environment variables."""
        return cls(
            symbols=parse_symbols(_get_env_str("SYMBOLS", DEFAULT_SYMBOLS)),
            lookback_hours=_get_env_int("LOOKBACK_HOURS", 12),
            lang=_get_env_str("NEWS_LANG", "en-US"),
            region=_get_env_str("NEWS_REGION", "US"),
            request_timeout=_get_env_int("NEWS_REQUEST_TIMEOUT", 15),
            user_agent=_get_env_str("NEWS_USER_AGENT", "event-swing-bot/1.0"),
        )


@dataclass(frozen=True)
class Config:
    """Main configuration container."""

    signals: SignalConfig
    logging: LoggingConfig
    results_dir: Path

    @property
    def signals_path(self) -> Path:
        """Default location of the JSON artifact."""
        return self.results_dir / "signals.json"

    @classmethod
    def from_env(cls) -> "Config":
        """Create Config from environment variables."""
        return cls(
            signals=SignalConfig.from_env(),
            logging=LoggingConfig.from_env(),
            results_dir=Path(_get_env_str("RESULTS_DIR", "results")),
        )


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
