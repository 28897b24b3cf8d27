"""Google News RSS feed provider.

Pipeline per run:
  1. Build ``"<PAIR> when:<N>h"`` query → Google News RSS URL
  2. Download with ``requests`` (bounded timeout)
  3. Parse with ``feedparser`` → list of :class:`Headline` in feed order

Any network, HTTP or parse failure raises :class:`FeedUnavailable`; the
engine treats that as "zero headlines", never as a fatal error.
"""

from datetime import datetime, timezone
from typing import List, Optional

import feedparser
import requests

from fxsentiment.core.errors import FeedUnavailable
from fxsentiment.core.logger import logger
from fxsentiment.core.news_utils import build_query, build_rss_url
from fxsentiment.models.datatypes import Headline
from fxsentiment.providers.base import NewsProvider

_USER_AGENT = "Mozilla/5.0 (compatible; fxsentiment/1.0)"


class GoogleNewsProvider(NewsProvider):
    """Google News RSS provider.

    ``when:<N>h`` handles server-side date filtering, so no client-side
    window check is applied. Headlines are returned exactly as ordered by the
    feed; no relevance filtering or deduplication happens here.

    Args:
        timeout: Per-request timeout in seconds.
        session: Optional ``requests.Session`` (a new one is created if omitted).
    """

    def __init__(self, timeout: float = 15.0, session: Optional[requests.Session] = None) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_headlines(self, query: str, window_hours: int) -> List[Headline]:
        url = build_rss_url(build_query(query, window_hours))
        logger.info(f"GoogleNewsProvider: fetching [{query}] last {window_hours}h")

        try:
            resp = self.session.get(url, timeout=self.timeout, headers={"User-Agent": _USER_AGENT})
        except requests.RequestException as exc:
            raise FeedUnavailable(f"RSS request failed for {query}: {exc}") from exc

        if resp.status_code != 200:
            raise FeedUnavailable(
                f"RSS request for {query} returned HTTP {resp.status_code}: {resp.text[:200]}"
            )

        feed = feedparser.parse(resp.content)
        if feed.bozo and not feed.entries:
            raise FeedUnavailable(
                f"RSS parse failed for {query}: {getattr(feed, 'bozo_exception', 'unknown error')}"
            )
        if feed.bozo:
            logger.warning(
                f"GoogleNewsProvider: RSS parse warning for {query}: "
                f"{getattr(feed, 'bozo_exception', '')}"
            )

        headlines = [h for h in (_to_headline(entry) for entry in feed.entries) if h]
        logger.info(f"GoogleNewsProvider: {len(headlines)} headlines for {query}")
        return headlines


# ── helpers ───────────────────────────────────────────────────────────────────

def _to_headline(entry) -> Optional[Headline]:
    """Convert one feedparser entry to a Headline, or None if it has no title."""
    title = (entry.get("title") or "").strip()
    if not title:
        return None

    pub_parsed = entry.get("published_parsed")
    published_at = (
        datetime(*pub_parsed[:6], tzinfo=timezone.utc) if pub_parsed else None
    )
    source_raw = entry.get("source") or {}
    source = source_raw.get("title", "") if isinstance(source_raw, dict) else str(source_raw)

    return Headline(
        title=title,
        published_at=published_at,
        source=source or "Google News",
        url=entry.get("link", ""),
    )
