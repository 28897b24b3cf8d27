"""Result assembler: turns a run's pieces into exactly one output record."""

from datetime import datetime, timezone
from typing import Optional, Sequence, Tuple

from fxsentiment.models.datatypes import AttemptRecord, Headline, RunOutcome
from fxsentiment.models.sentiment_schema import SentimentResult
from fxsentiment.pipeline.window import HeadlineWindow

DEFAULT_PREVIEW_COUNT = 5


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601, e.g. ``2026-10-19T08:00:00+00:00``."""
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def assemble_success(
    pair: str,
    result: SentimentResult,
    headlines: Sequence[Headline],
    window: HeadlineWindow,
    preview_count: int = DEFAULT_PREVIEW_COUNT,
    attempts: Tuple[AttemptRecord, ...] = (),
) -> RunOutcome:
    """Merge an accepted result with run context.

    ``news`` keeps only the first ``preview_count`` window titles for audit.
    """
    return RunOutcome.success(
        pair=pair,
        timestamp=utc_timestamp(),
        headline_count=len(headlines),
        titles=window.titles[:preview_count],
        analysis=result.to_fields(),
        window_size=len(window),
        attempts=attempts,
    )


def assemble_degraded(
    pair: str,
    reason: str,
    headlines: Sequence[Headline],
    window: HeadlineWindow,
    detail: Optional[str] = None,
    attempts: Tuple[AttemptRecord, ...] = (),
) -> RunOutcome:
    """Build the raw-data record used when no analysis is available.

    The window titles are carried unchanged, in feed order.
    """
    return RunOutcome.degraded(
        pair=pair,
        timestamp=utc_timestamp(),
        headline_count=len(headlines),
        titles=window.titles,
        reason=reason,
        detail=detail,
        attempts=attempts,
    )
