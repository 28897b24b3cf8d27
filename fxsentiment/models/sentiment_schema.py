"""Validated schema for the model's sentiment answer."""

import math

from pydantic import BaseModel, Field, field_validator

DEFAULT_OUTLOOK = "Neutral"
DEFAULT_SUMMARY = "No summary"
KNOWN_OUTLOOKS = ("Bullish", "Bearish", "Neutral")

SCORE_MIN = -10.0
SCORE_MAX = 10.0


class SentimentResult(BaseModel):
    """Normalized sentiment produced by exactly one accepted model attempt.

    ``score`` is required and must lie in ``[-10, 10]``; out-of-range values
    are rejected rather than clamped. ``outlook`` and ``summary`` are
    optional and fall back to ``"Neutral"`` / ``"No summary"``.
    """
    score: float = Field(..., ge=SCORE_MIN, le=SCORE_MAX, description="Sentiment score, -10 (bearish) to 10 (bullish).")
    # Defaults apply only to absent keys; an explicit null is a present, invalid value
    outlook: str = Field(DEFAULT_OUTLOOK, description="Directional outlook, e.g. Bullish/Bearish/Neutral.")
    summary: str = Field(DEFAULT_SUMMARY, description="One or two sentence rationale.")
    model_used: str = Field(..., min_length=1, description="Identifier of the model that answered.")

    model_config = {
        "extra": "ignore",
        "frozen": True,
    }

    @field_validator("score", mode="before")
    @classmethod
    def _reject_non_numeric(cls, v):
        # JSON true/false would otherwise coerce to 1.0/0.0
        if isinstance(v, bool) or v is None:
            raise ValueError("score must be a number")
        if isinstance(v, str):
            v = v.strip()
        return v

    @field_validator("score")
    @classmethod
    def _finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("score must be finite")
        return v

    @field_validator("outlook")
    @classmethod
    def _canonical_outlook(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("outlook must not be empty")
        for known in KNOWN_OUTLOOKS:
            if v.lower() == known.lower():
                return known
        return v

    @field_validator("summary")
    @classmethod
    def _non_empty_summary(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("summary must not be empty")
        return v

    def to_fields(self) -> dict:
        """Return the record fields merged into a successful run record."""
        return {
            "score": self.score,
            "outlook": self.outlook,
            "summary": self.summary,
            "model_used": self.model_used,
        }
