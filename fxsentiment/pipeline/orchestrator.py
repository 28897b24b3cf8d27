"""Model fallback orchestrator.

Tries each model candidate once, in priority order, with the same prompt:

    candidate 1 → invoke → normalize ─ accepted → done
                     └─ BackendError / SchemaViolation → candidate 2 → ...

The first accepted answer is final. No candidate is retried and results
are never merged across candidates. If every candidate is rejected the
outcome carries no result and the last diagnostic message.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from fxsentiment.core.errors import AllBackendsExhausted, BackendError, SchemaViolation
from fxsentiment.core.logger import logger
from fxsentiment.models.datatypes import AttemptRecord, ModelCandidate
from fxsentiment.models.sentiment_schema import SentimentResult
from fxsentiment.pipeline.normalizer import normalize_response
from fxsentiment.providers.base import InferenceProvider

NO_CANDIDATES = "no candidates configured"


@dataclass
class InferenceOutcome:
    """Result of one pass over the candidate list.

    Attributes:
        result: The accepted answer, or ``None`` if every candidate failed.
        last_error: Diagnostic from the last failed attempt.
        attempts: One record per candidate actually called, in call order.
    """
    result: Optional[SentimentResult] = None
    last_error: Optional[str] = None
    attempts: List[AttemptRecord] = field(default_factory=list)

    def require(self) -> SentimentResult:
        """Return the accepted result or raise :class:`AllBackendsExhausted`."""
        if self.result is None:
            raise AllBackendsExhausted(self.last_error)
        return self.result


class ModelFallbackOrchestrator:
    """Strict linear fallback over ranked model candidates.

    Args:
        provider: Inference backend used for every candidate.
    """

    def __init__(self, provider: InferenceProvider) -> None:
        self.provider = provider

    def infer(self, prompt: str, candidates: Sequence[ModelCandidate]) -> InferenceOutcome:
        """Try candidates in ascending priority; stop at the first accepted answer.

        Args:
            prompt: Shared prompt text, identical for every candidate.
            candidates: Ranked models. Ties keep their input order.

        Returns:
            :class:`InferenceOutcome` with either ``result`` set, or
            ``result=None`` and ``last_error`` describing the final failure.
        """
        outcome = InferenceOutcome()
        ordered = sorted(candidates, key=lambda c: c.priority)
        if not ordered:
            outcome.last_error = NO_CANDIDATES
            logger.error(f"ModelFallbackOrchestrator: {NO_CANDIDATES}")
            return outcome

        for rank, candidate in enumerate(ordered, start=1):
            model = candidate.identifier
            logger.info(f"ModelFallbackOrchestrator: trying [{rank}/{len(ordered)}] {model}")
            try:
                raw = self.provider.invoke(model, prompt)
                result = normalize_response(raw, model)
            except (BackendError, SchemaViolation) as exc:
                error = f"{model}: {exc.message}" if isinstance(exc, BackendError) else f"{model}: {exc}"
            except Exception as exc:
                # A misbehaving provider must not abort the run
                error = f"{model}: unexpected {type(exc).__name__}: {exc}"
            else:
                outcome.result = result
                outcome.last_error = None
                outcome.attempts.append(AttemptRecord(model=model, accepted=True))
                logger.info(
                    f"ModelFallbackOrchestrator: {model} accepted ✓ "
                    f"[{result.outlook} / {result.score:+.1f}]"
                )
                return outcome

            outcome.last_error = error
            outcome.attempts.append(AttemptRecord(model=model, accepted=False, error=error))
            logger.warning(f"ModelFallbackOrchestrator: {model} rejected: {error}")

        logger.error(
            f"ModelFallbackOrchestrator: all {len(ordered)} candidates failed; "
            f"last error: {outcome.last_error}"
        )
        return outcome
