"""Google Gemini inference backend via the ``google-genai`` SDK.

    prompt (str) → GeminiProvider.invoke(model_id) → raw response text

Every failure mode of a single call (HTTP/API error, auth, quota,
transport error, timeout, empty answer) is raised as :class:`BackendError`
so the fallback orchestrator can treat them identically.
"""

from typing import Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from fxsentiment.core.errors import BackendError, ConfigurationError
from fxsentiment.core.logger import logger
from fxsentiment.providers.base import InferenceProvider


class GeminiProvider(InferenceProvider):
    """Gemini text generation with a bounded per-call timeout.

    The SDK client is created lazily on the first call so that constructing
    the provider performs no network I/O.

    Args:
        api_key: Gemini API key. Must be non-empty.
        timeout: Per-call timeout in seconds.
        temperature: Sampling temperature.
        client: Pre-built ``genai.Client`` (tests inject a fake here).
    """

    def __init__(
        self,
        api_key: str,
        timeout: float = 30.0,
        temperature: float = 0.2,
        client: Optional[genai.Client] = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError("Gemini API key is missing")
        self.api_key = api_key
        self.timeout = timeout
        self.temperature = temperature
        self._client = client

    # ── public API ──────────────────────────────────────────────────────────

    def invoke(self, model_id: str, prompt: str) -> str:
        client = self._get_client()
        try:
            response = client.models.generate_content(
                model=model_id,
                contents=prompt,
                config=types.GenerateContentConfig(temperature=self.temperature),
            )
        except genai_errors.APIError as exc:
            raise BackendError(model_id, f"API error {exc.code}: {exc.message}") from exc
        except Exception as exc:
            # httpx transport errors and timeouts surface here
            raise BackendError(model_id, f"{type(exc).__name__}: {exc}") from exc

        text = getattr(response, "text", None)
        if not text or not text.strip():
            raise BackendError(model_id, "empty response")
        return text

    # ── internal ─────────────────────────────────────────────────────────────

    def _get_client(self) -> genai.Client:
        """Create the SDK client on first use."""
        if self._client is None:
            logger.info(f"GeminiProvider: creating client (timeout={self.timeout:.0f}s)")
            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=int(self.timeout * 1000)),
            )
        return self._client
