import os
import tempfile

# Keep the module-level logger from writing into the working tree.
os.environ.setdefault(
    "FXSENTIMENT_LOG_FILE", os.path.join(tempfile.gettempdir(), "fxsentiment-tests.log")
)

from typing import Dict, List, Union  # noqa: E402

import pytest  # noqa: E402

from fxsentiment.core.config import Settings  # noqa: E402
from fxsentiment.core.errors import BackendError, FeedUnavailable  # noqa: E402
from fxsentiment.models.datatypes import Headline, RunOutcome  # noqa: E402
from fxsentiment.providers.base import InferenceProvider, NewsProvider, OutputSink  # noqa: E402


class FakeNews(NewsProvider):
    def __init__(self, headlines=None, error: Exception = None):
        self.headlines = headlines or []
        self.error = error
        self.calls = []

    def fetch_headlines(self, query, window_hours):
        self.calls.append((query, window_hours))
        if self.error:
            raise self.error
        return list(self.headlines)


class ScriptedInference(InferenceProvider):
    """Returns a scripted answer per model; an Exception value is raised."""

    def __init__(self, script: Dict[str, Union[str, Exception]]):
        self.script = script
        self.calls: List[str] = []
        self.prompts: List[str] = []

    def invoke(self, model_id, prompt):
        self.calls.append(model_id)
        self.prompts.append(prompt)
        answer = self.script.get(model_id, BackendError(model_id, "not scripted"))
        if isinstance(answer, Exception):
            raise answer
        return answer


class MemorySink(OutputSink):
    def __init__(self):
        self.records: List[RunOutcome] = []

    def emit(self, outcome):
        self.records.append(outcome)


@pytest.fixture
def headlines():
    return [
        Headline(title="Fed signals more hikes as inflation sticks"),
        Headline(title="Euro slips against dollar after weak PMI"),
        Headline(title="ECB's Lagarde warns on growth outlook"),
    ]


@pytest.fixture
def settings():
    return Settings(models=("model-a", "model-b", "model-c"), headline_cap=20)


@pytest.fixture
def sink():
    return MemorySink()


@pytest.fixture
def fake_news():
    return FakeNews


@pytest.fixture
def scripted():
    return ScriptedInference


@pytest.fixture
def feed_down():
    return FakeNews(error=FeedUnavailable("connection refused"))
