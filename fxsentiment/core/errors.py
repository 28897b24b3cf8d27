"""Error taxonomy for the sentiment pipeline.

Only ``ConfigurationError`` is fatal. Every other condition is recovered
inside the pipeline and turned into a degraded run record:

    FeedUnavailable      → zero headlines → Degraded("no-news")
    BackendError         → next model candidate
    SchemaViolation      → next model candidate (same as BackendError)
    AllBackendsExhausted → Degraded("ai-generation-failed")
"""

from typing import Optional


class SentimentPipelineError(Exception):
    """Base class for all pipeline errors."""


class ConfigurationError(SentimentPipelineError):
    """Missing credential or invalid configuration. Raised before any I/O."""


class FeedUnavailable(SentimentPipelineError):
    """The news feed could not be fetched or parsed."""


class BackendError(SentimentPipelineError):
    """A single inference backend failed (network, auth, quota, timeout).

    Args:
        model: Model identifier that failed.
        message: Human-readable diagnostic.
    """

    def __init__(self, model: str, message: str) -> None:
        self.model = model
        self.message = message
        super().__init__(f"{model}: {message}")


class SchemaViolation(SentimentPipelineError):
    """Model output could not be parsed or failed schema validation."""


class AllBackendsExhausted(SentimentPipelineError):
    """Every model candidate was tried and rejected."""

    def __init__(self, last_error: Optional[str]) -> None:
        self.last_error = last_error
        super().__init__(last_error or "no candidates succeeded")
