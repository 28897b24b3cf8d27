import json
from unittest.mock import patch

import pytest

from fxsentiment.core.config import Settings
from fxsentiment.core.errors import BackendError, ConfigurationError
from fxsentiment.models.datatypes import Headline, REASON_AI_FAILED, REASON_NO_NEWS
from fxsentiment.pipeline.engine import AnalysisEngine, run_analysis

BEARISH = '{"score":-4,"outlook":"Bearish","summary":"rate fears"}'


def _engine(settings, news, inference, sink):
    return AnalysisEngine(settings=settings, news=news, inference=inference, sink=sink)


def test_scenario_a_first_candidate_succeeds(settings, headlines, fake_news, scripted, sink):
    inference = scripted({"model-a": BEARISH})

    outcome = _engine(settings, fake_news(headlines), inference, sink).run("eurusd", 24)

    record = outcome.to_record()
    assert record["status"] == "success"
    assert record["pair"] == "EURUSD"
    assert record["model_used"] == "model-a"
    assert record["score"] == -4
    assert record["outlook"] == "Bearish"
    assert record["summary"] == "rate fears"
    assert record["headline_count"] == 3
    assert record["news"] == [h.title for h in headlines]
    assert "error" not in record
    assert inference.calls == ["model-a"]
    assert sink.records == [outcome]


def test_scenario_b_second_candidate_after_failure(settings, headlines, fake_news, scripted, sink):
    inference = scripted({"model-a": BackendError("model-a", "503 unavailable"), "model-b": BEARISH})

    outcome = _engine(settings, fake_news(headlines), inference, sink).run("EURUSD", 24)

    record = outcome.to_record()
    assert record["model_used"] == "model-b"
    assert inference.calls == ["model-a", "model-b"]
    assert "503" not in json.dumps(record)
    assert "error" not in record and "detail" not in record


def test_scenario_c_all_candidates_fail(settings, headlines, fake_news, scripted, sink):
    inference = scripted({
        "model-a": BackendError("model-a", "auth"),
        "model-b": BackendError("model-b", "quota"),
        "model-c": BackendError("model-c", "timeout"),
    })

    outcome = _engine(settings, fake_news(headlines), inference, sink).run("EURUSD", 24)

    record = outcome.to_record()
    assert record["status"] == "degraded"
    assert record["error"] == REASON_AI_FAILED
    assert "timeout" in record["detail"]
    assert record["news_headlines"] == [h.title for h in headlines]
    assert "score" not in record
    assert inference.calls == ["model-a", "model-b", "model-c"]
    assert len(sink.records) == 1


def test_rejected_answers_degrade_with_original_titles(settings, headlines, fake_news, scripted, sink):
    inference = scripted({"model-a": '{"score": 99}', "model-b": "{}", "model-c": "nope"})

    outcome = _engine(settings, fake_news(headlines), inference, sink).run("EURUSD", 24)

    assert outcome.reason == REASON_AI_FAILED
    assert list(outcome.titles) == [h.title for h in headlines]


def test_no_news_skips_inference(settings, fake_news, scripted, sink):
    inference = scripted({"model-a": BEARISH})

    outcome = _engine(settings, fake_news([]), inference, sink).run("EURUSD", 24)

    assert outcome.reason == REASON_NO_NEWS
    assert outcome.to_record()["news_headlines"] == []
    assert inference.calls == []
    assert len(sink.records) == 1


def test_feed_unavailable_is_treated_as_no_news(settings, feed_down, scripted, sink):
    inference = scripted({"model-a": BEARISH})

    outcome = _engine(settings, feed_down, inference, sink).run("EURUSD", 24)

    assert outcome.reason == REASON_NO_NEWS
    assert inference.calls == []


def test_window_caps_prompt_but_count_reports_all(fake_news, scripted, sink):
    items = [Headline(title=f"story {i}") for i in range(25)]
    settings = Settings(models=("model-a",), headline_cap=20, preview_count=5)
    inference = scripted({"model-a": BEARISH})

    outcome = _engine(settings, fake_news(items), inference, sink).run("EURUSD", 24)

    record = outcome.to_record()
    assert record["headline_count"] == 25
    assert record["window_size"] == 20
    assert record["news"] == [f"story {i}" for i in range(5)]
    assert "20. story 19" in inference.prompts[0]
    assert "story 20" not in inference.prompts[0]


def test_news_query_uses_normalized_pair_and_window(settings, headlines, fake_news, scripted, sink):
    news = fake_news(headlines)

    _engine(settings, news, scripted({"model-a": BEARISH}), sink).run("eur/usd", 12)

    assert news.calls == [("EURUSD", 12)]


@pytest.mark.parametrize("pair, hours", [("", 24), ("  ", 24), ("EURUSD", 0), ("EURUSD", -3)])
def test_invalid_inputs_fail_fast(settings, fake_news, scripted, sink, pair, hours):
    news = fake_news([])

    with pytest.raises(ConfigurationError):
        _engine(settings, news, scripted({}), sink).run(pair, hours)

    assert news.calls == []
    assert sink.records == []


def test_run_analysis_requires_credential():
    with patch("fxsentiment.pipeline.engine.GoogleNewsProvider") as news_cls:
        with pytest.raises(ConfigurationError):
            run_analysis("EURUSD", "", 24)

    news_cls.assert_not_called()


def test_run_analysis_wires_default_collaborators(tmp_path, headlines, fake_news, scripted):
    config = {"llm": {"models": ["model-a"]}, "output": {"dir": str(tmp_path)}}

    with patch("fxsentiment.pipeline.engine.GoogleNewsProvider", return_value=fake_news(headlines)), \
            patch("fxsentiment.pipeline.engine.GeminiProvider", return_value=scripted({"model-a": BEARISH})) as gemini_cls:
        outcome = run_analysis("EURUSD", "secret", 24, config=config)

    assert outcome.is_success
    assert gemini_cls.call_args.kwargs["api_key"] == "secret"
    lines = (tmp_path / "sentiment_runs.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["model_used"] == "model-a"
