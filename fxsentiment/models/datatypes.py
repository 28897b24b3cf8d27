"""Data structures for the FX sentiment pipeline."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

STATUS_SUCCESS = "success"
STATUS_DEGRADED = "degraded"

REASON_NO_NEWS = "no-news"
REASON_AI_FAILED = "ai-generation-failed"


@dataclass(frozen=True)
class Headline:
    """
    A single news headline fetched from the feed provider.
    """
    title: str
    published_at: Optional[datetime] = None
    source: str = ""
    url: str = ""


@dataclass(frozen=True)
class ModelCandidate:
    """One inference model in the fallback list. Lower priority is tried first."""
    identifier: str
    priority: int


@dataclass(frozen=True)
class AttemptRecord:
    """Outcome of one candidate attempt, kept for diagnostics only."""
    model: str
    accepted: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class RunOutcome:
    """
    The single record produced by one analysis run.

    A run is either a ``success`` carrying the normalized model output, or
    ``degraded`` carrying the failure reason and the raw headline titles.
    Use :meth:`success` / :meth:`degraded` rather than the constructor.
    """
    status: str
    pair: str
    timestamp: str
    headline_count: int
    titles: Tuple[str, ...] = ()
    window_size: int = 0
    analysis: Optional[Dict[str, Any]] = None
    reason: Optional[str] = None
    detail: Optional[str] = None
    attempts: Tuple[AttemptRecord, ...] = field(default=(), compare=False)

    @classmethod
    def success(
        cls,
        pair: str,
        timestamp: str,
        headline_count: int,
        titles: List[str],
        analysis: Dict[str, Any],
        window_size: int = 0,
        attempts: Tuple[AttemptRecord, ...] = (),
    ) -> "RunOutcome":
        return cls(
            status=STATUS_SUCCESS, pair=pair, timestamp=timestamp,
            headline_count=headline_count, titles=tuple(titles),
            window_size=window_size, analysis=dict(analysis), attempts=attempts,
        )

    @classmethod
    def degraded(
        cls,
        pair: str,
        timestamp: str,
        headline_count: int,
        titles: List[str],
        reason: str,
        detail: Optional[str] = None,
        attempts: Tuple[AttemptRecord, ...] = (),
    ) -> "RunOutcome":
        return cls(
            status=STATUS_DEGRADED, pair=pair, timestamp=timestamp,
            headline_count=headline_count, titles=tuple(titles),
            reason=reason, detail=detail, attempts=attempts,
        )

    @property
    def is_success(self) -> bool:
        return self.status == STATUS_SUCCESS

    def to_record(self) -> Dict[str, Any]:
        """Serialize to the flat dict pushed to the output sink.

        Success records carry ``score/outlook/summary/model_used`` and a
        ``news`` preview; degraded records carry ``error/detail`` and the
        full ``news_headlines`` list. The two shapes never overlap.
        """
        record: Dict[str, Any] = {
            "pair": self.pair,
            "timestamp": self.timestamp,
            "status": self.status,
        }
        if self.is_success:
            record.update(self.analysis or {})
            record["headline_count"] = self.headline_count
            record["window_size"] = self.window_size
            record["news"] = list(self.titles)
        else:
            record["error"] = self.reason
            record["detail"] = self.detail
            record["headline_count"] = self.headline_count
            record["news_headlines"] = list(self.titles)
        return record
