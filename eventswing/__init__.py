"""EventSwing - headline sentiment signals for swing trading.

Pulls recent news headlines per ticker, scores them with a keyword
lexicon and turns the blend into a BUY / RISK_OFF / NEUTRAL signal.
"""

__version__ = "1.0.0"
