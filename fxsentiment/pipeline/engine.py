"""Analysis engine: runs one sentiment analysis for one currency pair.

Flow per run:
  1. News       : fetch_headlines (FeedUnavailable → zero headlines)
  2. Window     : first N headlines; empty → Degraded("no-news"), no inference
  3. Prompt     : built once, shared by every candidate
  4. Inference  : ModelFallbackOrchestrator over ranked candidates
  5. Assemble   : Success, or Degraded("ai-generation-failed")
  6. Emit       : exactly one record to the output sink

Only a ConfigurationError escapes :meth:`AnalysisEngine.run`; every other
failure degrades the record instead of aborting the run.
"""

from typing import Any, Dict, List, Optional

from fxsentiment.core.config import Settings
from fxsentiment.core.errors import AllBackendsExhausted, ConfigurationError, FeedUnavailable
from fxsentiment.core.logger import logger
from fxsentiment.core.news_utils import normalize_pair
from fxsentiment.models.datatypes import REASON_AI_FAILED, REASON_NO_NEWS, Headline, RunOutcome
from fxsentiment.pipeline.assembler import assemble_degraded, assemble_success
from fxsentiment.pipeline.orchestrator import ModelFallbackOrchestrator
from fxsentiment.pipeline.prompt import build_prompt
from fxsentiment.pipeline.window import HeadlineWindow
from fxsentiment.providers.base import InferenceProvider, NewsProvider, OutputSink
from fxsentiment.providers.gemini import GeminiProvider
from fxsentiment.providers.news import GoogleNewsProvider
from fxsentiment.providers.sink import JsonlSink


class AnalysisEngine:
    """Wires the pipeline components to their collaborators.

    Args:
        settings: Validated run settings (caps, model list, timeouts).
        news: Feed collaborator.
        inference: Inference collaborator shared by all candidates.
        sink: Output collaborator; receives exactly one record per run.
    """

    def __init__(
        self,
        settings: Settings,
        news: NewsProvider,
        inference: InferenceProvider,
        sink: OutputSink,
    ) -> None:
        self.settings = settings
        self.news = news
        self.sink = sink
        self.orchestrator = ModelFallbackOrchestrator(inference)

    # ── public ────────────────────────────────────────────────────────────────

    def run(self, pair: str, window_hours: int) -> RunOutcome:
        """Run the pipeline for ``pair`` and emit the resulting record.

        Args:
            pair: Currency pair symbol, e.g. ``"EURUSD"``.
            window_hours: News lookback window in hours (must be positive).

        Returns:
            The :class:`RunOutcome` that was emitted.

        Raises:
            ConfigurationError: Empty pair or non-positive window.
        """
        if isinstance(window_hours, bool) or not isinstance(window_hours, int) or window_hours <= 0:
            raise ConfigurationError(f"window_hours must be a positive integer, got {window_hours!r}")
        symbol = normalize_pair(pair)

        logger.info(f"AnalysisEngine: analysis starting for {symbol} (last {window_hours}h)")
        outcome = self._analyze(symbol, window_hours)

        self.sink.emit(outcome)
        if outcome.is_success:
            logger.info(
                f"AnalysisEngine: {symbol} → {outcome.analysis['outlook']} "
                f"({outcome.analysis['score']:+.1f}) via {outcome.analysis['model_used']}"
            )
        else:
            logger.warning(f"AnalysisEngine: {symbol} → degraded ({outcome.reason})")
        return outcome

    # ── internal ──────────────────────────────────────────────────────────────

    def _analyze(self, symbol: str, window_hours: int) -> RunOutcome:
        """Produce exactly one outcome; never raises for recoverable failures."""
        headlines = self._fetch(symbol, window_hours)
        window = HeadlineWindow.from_headlines(headlines, self.settings.headline_cap)

        if window.is_empty:
            logger.warning(f"AnalysisEngine: no news found for {symbol}; skipping inference")
            return assemble_degraded(symbol, REASON_NO_NEWS, headlines, window)

        logger.info(
            f"AnalysisEngine: {len(headlines)} headlines fetched, "
            f"{len(window)} in prompt window"
        )
        prompt = build_prompt(symbol, window.render())
        inference = self.orchestrator.infer(prompt, self.settings.candidates())
        attempts = tuple(inference.attempts)

        try:
            result = inference.require()
        except AllBackendsExhausted as exc:
            logger.error(f"AnalysisEngine: all models failed for {symbol}; saving headlines only")
            return assemble_degraded(
                symbol, REASON_AI_FAILED, headlines, window,
                detail=exc.last_error, attempts=attempts,
            )

        return assemble_success(
            symbol, result, headlines, window,
            preview_count=self.settings.preview_count, attempts=attempts,
        )

    def _fetch(self, symbol: str, window_hours: int) -> List[Headline]:
        """Fetch headlines; any feed failure is logged and treated as no news."""
        try:
            return list(self.news.fetch_headlines(symbol, window_hours))
        except FeedUnavailable as exc:
            logger.error(f"AnalysisEngine: news feed unavailable for {symbol}: {exc}")
        except Exception as exc:
            logger.error(f"AnalysisEngine: news provider raised for {symbol}: {exc}", exc_info=True)
        return []


# ── entry ─────────────────────────────────────────────────────────────────────

def run_analysis(
    pair: str,
    api_key: str,
    window_hours: int,
    config: Optional[Dict[str, Any]] = None,
) -> RunOutcome:
    """Run one analysis with the default collaborators.

    Google News RSS → Gemini (with ``api_key``) → ``<output_dir>/sentiment_runs.jsonl``.

    Args:
        pair: Currency pair symbol.
        api_key: Gemini credential; must be non-empty.
        window_hours: Lookback window in hours.
        config: Parsed ``config.yaml`` dict (defaults apply when omitted).

    Raises:
        ConfigurationError: Missing credential, empty pair, bad window or config.
    """
    api_key = (api_key or "").strip()
    if not api_key:
        raise ConfigurationError("Gemini API key is missing (set GEMINI_API_KEY)")

    settings = Settings.from_config(config or {})
    engine = AnalysisEngine(
        settings=settings,
        news=GoogleNewsProvider(timeout=settings.news_timeout_seconds),
        inference=GeminiProvider(
            api_key=api_key,
            timeout=settings.llm_timeout_seconds,
            temperature=settings.llm_temperature,
        ),
        sink=JsonlSink(output_dir=settings.output_dir),
    )
    return engine.run(pair, window_hours)
