import pytest

from fxsentiment.core.errors import ConfigurationError
from fxsentiment.models.datatypes import Headline
from fxsentiment.pipeline.prompt import build_prompt
from fxsentiment.pipeline.window import HeadlineWindow


def test_window_renders_numbered_lines_in_feed_order(headlines):
    window = HeadlineWindow.from_headlines(headlines, cap=20)

    assert window.render() == (
        "1. Fed signals more hikes as inflation sticks\n"
        "2. Euro slips against dollar after weak PMI\n"
        "3. ECB's Lagarde warns on growth outlook"
    )
    assert len(window) == 3


def test_window_truncation_keeps_first_n():
    items = [Headline(title=f"headline {i}") for i in range(30)]

    window = HeadlineWindow.from_headlines(items, cap=20)

    assert window.titles == [f"headline {i}" for i in range(20)]
    assert window.render().splitlines()[-1] == "20. headline 19"


def test_window_keeps_duplicates():
    items = [Headline(title="same"), Headline(title="same")]

    assert HeadlineWindow.from_headlines(items, cap=5).titles == ["same", "same"]


def test_empty_window():
    window = HeadlineWindow.from_headlines([], cap=20)

    assert window.is_empty
    assert window.render() == ""


def test_window_rejects_non_positive_cap(headlines):
    with pytest.raises(ConfigurationError):
        HeadlineWindow.from_headlines(headlines, cap=0)


def test_prompt_embeds_pair_headlines_and_schema(headlines):
    block = HeadlineWindow.from_headlines(headlines, cap=20).render()

    prompt = build_prompt("EURUSD", block)

    assert "EURUSD" in prompt
    assert block in prompt
    assert '"score": number (-10 to 10)' in prompt
    assert '"outlook"' in prompt and '"summary"' in prompt
    assert "No markdown, no code fences" in prompt


def test_prompt_is_stable_for_same_inputs():
    assert build_prompt("GBPUSD", "1. a") == build_prompt("GBPUSD", "1. a")


def test_prompt_tolerates_braces_in_headlines():
    prompt = build_prompt("USDJPY", "1. Yen {record} low")

    assert "1. Yen {record} low" in prompt
