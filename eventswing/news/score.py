"""Lexicon sentiment and topic boosts for headlines.

Uses a lightweight phrase lexicon (no model downloads required). Phrases
match as plain substrings, so overlapping entries such as "beat" and
"beats" both count.
"""

from __future__ import annotations

import re
from typing import Tuple

POSITIVE_PHRASES: Tuple[str, ...] = (
    "beat", "beats", "raises", "raised", "upgrade", "upgrades", "upgraded",
    "guidance up", "record revenue", "record profit", "wins", "win",
    "contract award", "partnership", "approval", "approved", "secures",
    "bullish",
)

NEGATIVE_PHRASES: Tuple[str, ...] = (
    "miss", "misses", "cuts", "cut", "downgrade", "downgraded",
    "guidance cut", "warns", "warning", "lawsuit", "probe", "investigation",
    "breach", "recall", "bearish", "strike", "halt", "delays", "delay",
    "layoffs", "layoff",
)

# Evaluated top to bottom; the first matching category sets the boost.
TOPIC_BOOSTS: Tuple[Tuple[re.Pattern[str], float], ...] = (
    (re.compile(r"guidance\s+up|raises guidance|beat[s]?", re.IGNORECASE), 0.4),
    (re.compile(r"upgrade|upgraded", re.IGNORECASE), 0.25),
    (re.compile(r"contract|award|secures", re.IGNORECASE), 0.2),
    (re.compile(r"lawsuit|probe|investigation|breach", re.IGNORECASE), -0.4),
    (re.compile(r"guidance\s+cut|warns|warning", re.IGNORECASE), -0.5),
    (re.compile(r"downgrade|downgraded", re.IGNORECASE), -0.3),
    (re.compile(r"strike|halt|recall|layoff", re.IGNORECASE), -0.3),
)


def clamp(value: float, low: float = -1.0, high: float = 1.0) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def score_headline(title: str) -> float:
    """Compute lexicon sentiment for a headline title.

    Each positive phrase found adds 1.0 and each negative phrase subtracts
    1.0. Returns score in range [-1.0, 1.0].
    """
    if not title:
        return 0.0

    text = title.lower()
    score = 0.0
    for phrase in POSITIVE_PHRASES:
        if phrase in text:
            score += 1.0
    for phrase in NEGATIVE_PHRASES:
        if phrase in text:
            score -= 1.0

    return clamp(score)


def topic_boost(title: str) -> float:
    """Return the boost of the first topic category matching the title."""
    if not title:
        return 0.0

    for pattern, value in TOPIC_BOOSTS:
        if pattern.search(title):
            return value
    return 0.0
