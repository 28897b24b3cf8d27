"""Utility helpers for the news feed: pair normalization and RSS query building."""

import re
import urllib.parse

from fxsentiment.core.errors import ConfigurationError

GOOGLE_RSS_BASE = "https://news.google.com/rss/search"

# Separators users commonly type between the two legs of a pair.
_PAIR_SEPARATORS = re.compile(r"[\s/_\-]+")


def normalize_pair(pair: str) -> str:
    """Return the canonical upper-case symbol for a currency pair.

    Examples:
        ``"eur/usd"`` → ``"EURUSD"``
        ``" xauusd "`` → ``"XAUUSD"``

    Args:
        pair (str): Raw pair symbol as supplied by config or the caller.

    Returns:
        str: Upper-cased symbol with separators and whitespace removed.

    Raises:
        ConfigurationError: If nothing remains after normalization.
    """
    symbol = _PAIR_SEPARATORS.sub("", pair or "").upper()
    if not symbol:
        raise ConfigurationError("pair symbol must not be empty")
    return symbol


def build_query(pair: str, window_hours: int) -> str:
    """Build the Google News search query, e.g. ``"EURUSD when:24h"``.

    ``when:<N>h`` makes Google filter the lookback window server-side.
    """
    return f"{pair} when:{int(window_hours)}h"


def build_rss_url(query: str) -> str:
    """Return the full Google News RSS search URL for ``query`` (US English edition)."""
    encoded = urllib.parse.quote_plus(query)
    return f"{GOOGLE_RSS_BASE}?q={encoded}&hl=en-US&gl=US&ceid=US:en"
