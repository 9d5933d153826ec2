"""Console glyph helpers.

The signal summary uses an arrow glyph that some Windows code pages
cannot encode; these helpers pick an ASCII stand-in when needed.
"""

import contextlib
import os
import sys

SIGNAL_ARROW = "→"
SIGNAL_ARROW_ASCII = "->"


def _can_encode(s: str) -> bool:
    """Check whether stdout's encoding can represent ``s``."""
    encoding = sys.stdout.encoding or "utf-8"
    try:
        s.encode(encoding, errors="strict")
    except (LookupError, UnicodeEncodeError):
        return False
    return True


def _fmt(s: str, ascii_fallback: str, use_emoji: bool | None = None) -> str:
    """Return ``s`` when it can be printed, else ``ascii_fallback``.

    Args:
        s: Text containing non-ASCII glyphs.
        ascii_fallback: Plain ASCII replacement.
        use_emoji: Force the choice. If None, EVENTSWING_NO_EMOJI (any
            value) disables glyphs.
    """
    if use_emoji is None:
        use_emoji = not os.environ.get("EVENTSWING_NO_EMOJI")

    if use_emoji and _can_encode(s):
        return s
    return ascii_fallback


def signal_arrow(use_emoji: bool | None = None) -> str:
    """Arrow separating a ticker's metrics from its signal label."""
    return _fmt(SIGNAL_ARROW, SIGNAL_ARROW_ASCII, use_emoji)


def configure_windows_console() -> None:
    """Switch stdout to UTF-8 on Windows (best-effort)."""
    if os.name == "nt":
        with contextlib.suppress(AttributeError, OSError):
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
