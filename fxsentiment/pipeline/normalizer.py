"""Response normalizer: the validation boundary for raw model output.

    raw text → strip_code_fences → json.loads → SentimentResult (pydantic)

Any failure raises :class:`SchemaViolation`. The orchestrator treats that
exactly like a transport failure and moves on to the next model, so an
answer that only almost matches the schema is never accepted.
"""

import json
import re

from pydantic import ValidationError

from fxsentiment.core.errors import SchemaViolation
from fxsentiment.models.sentiment_schema import SentimentResult

# ```json ... ``` (any or no language tag), possibly surrounded by prose
_FENCED_BLOCK = re.compile(r"```[ \t]*[\w-]*[ \t]*\n?(.*?)\n?[ \t]*```", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Remove markdown code-fence wrapping and surrounding whitespace.

    Examples:
        ``'```json\\n{"score": 1}\\n```'`` → ``'{"score": 1}'``
        ``'  {"score": 1}  '`` → ``'{"score": 1}'``

    An unterminated opening fence is dropped together with its tag line.
    """
    cleaned = (text or "").strip()
    match = _FENCED_BLOCK.search(cleaned)
    if match:
        return match.group(1).strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()[1:]
        cleaned = "\n".join(lines).strip()
        if cleaned.endswith("```"):
            cleaned = cleaned[:-3].rstrip()
    return cleaned


def normalize_response(text: str, model_used: str) -> SentimentResult:
    """Parse and validate one raw model answer.

    Args:
        text: Raw response text from the inference backend.
        model_used: Identifier of the model that produced ``text``.

    Returns:
        A fully populated :class:`SentimentResult`.

    Raises:
        SchemaViolation: Empty text, invalid JSON, non-object JSON, a missing
            or non-numeric score, a score outside ``[-10, 10]``, or an empty
            outlook/summary.
    """
    cleaned = strip_code_fences(text)
    if not cleaned:
        raise SchemaViolation("empty response")

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise SchemaViolation(f"invalid JSON: {exc.msg} at pos {exc.pos}") from exc

    if not isinstance(parsed, dict):
        raise SchemaViolation(f"expected a JSON object, got {type(parsed).__name__}")

    try:
        return SentimentResult.model_validate({**parsed, "model_used": model_used})
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'response'}: {err['msg']}"
            for err in exc.errors()
        )
        raise SchemaViolation(f"schema violation: {problems}") from exc
