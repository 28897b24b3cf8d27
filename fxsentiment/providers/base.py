"""Abstract base classes for the pipeline's external collaborators."""

from abc import ABC, abstractmethod
from typing import List

from fxsentiment.models.datatypes import Headline, RunOutcome


class NewsProvider(ABC):
    """Abstract interface for fetching recent headlines about an instrument."""

    @abstractmethod
    def fetch_headlines(self, query: str, window_hours: int) -> List[Headline]:
        """
        Fetch headlines matching a query within a lookback window.

        Args:
            query (str): Instrument symbol or search phrase, e.g. ``"EURUSD"``.
            window_hours (int): How far back to look for headlines.

        Returns:
            List[Headline]: Headlines in feed order (newest first).

        Raises:
            FeedUnavailable: On network or parse failure.
        """
        pass


class InferenceProvider(ABC):
    """Abstract interface for a text-generation backend."""

    @abstractmethod
    def invoke(self, model_id: str, prompt: str) -> str:
        """
        Run one generation call.

        Args:
            model_id (str): Backend model identifier.
            prompt (str): Fully rendered prompt text.

        Returns:
            str: Raw response text, unvalidated.

        Raises:
            BackendError: On network, auth, quota or timeout failure.
        """
        pass


class OutputSink(ABC):
    """Abstract interface for persisting the single record of a run."""

    @abstractmethod
    def emit(self, outcome: RunOutcome) -> None:
        """
        Persist one run outcome. Called exactly once per run.

        Args:
            outcome (RunOutcome): The success or degraded record.
        """
        pass
