"""Configuration module for loading project settings and environment variables."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml
from dotenv import load_dotenv

from fxsentiment.core.errors import ConfigurationError
from fxsentiment.models.datatypes import ModelCandidate

# Load environment variables from .env file
load_dotenv()

DEFAULT_PAIR = "XAUUSD"
DEFAULT_MODELS = ["gemini-2.5-flash", "gemini-2.0-flash", "gemini-1.5-flash"]


def load_config(config_path: str | Path = "config.yaml") -> Dict[str, Any]:
    """
    Load configuration from the specified YAML file.

    Args:
        config_path (str | Path): Path to the configuration file. Defaults to "config.yaml".

    Returns:
        Dict[str, Any]: A dictionary containing the configuration settings.
    """
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found at {config_path}")

    with open(config_file, "r", encoding="utf-8") as file:
        config_data = yaml.safe_load(file)

    if not config_data:
        raise ValueError(f"Configuration file {config_path} is empty or invalid.")

    return config_data


def get_api_key() -> str:
    """Return the Gemini credential from the environment (empty string if unset)."""
    return os.getenv("GEMINI_API_KEY", "").strip()


@dataclass(frozen=True)
class Settings:
    """Flattened, validated view of ``config.yaml`` plus environment overrides.

    Attributes:
        pair: Currency pair symbol, e.g. ``"EURUSD"``.
        hours_lookback: News lookback window in hours.
        headline_cap: Maximum headlines fed into the prompt.
        preview_count: Headline titles kept on a successful record.
        models: Model identifiers in fallback priority order.
        llm_timeout_seconds: Per-call inference timeout.
        llm_temperature: Sampling temperature for inference.
        news_timeout_seconds: RSS fetch timeout.
        output_dir: Directory for the run log and log file.
    """
    pair: str = DEFAULT_PAIR
    hours_lookback: int = 24
    headline_cap: int = 20
    preview_count: int = 5
    models: Tuple[str, ...] = field(default_factory=lambda: tuple(DEFAULT_MODELS))
    llm_timeout_seconds: float = 30.0
    llm_temperature: float = 0.2
    news_timeout_seconds: float = 15.0
    output_dir: str = "output"

    def __post_init__(self) -> None:
        if not self.models:
            raise ConfigurationError("llm.models must list at least one model")
        if self.hours_lookback <= 0:
            raise ConfigurationError(f"hours_lookback must be positive, got {self.hours_lookback}")
        if self.headline_cap <= 0:
            raise ConfigurationError(f"news.headline_cap must be positive, got {self.headline_cap}")
        if self.preview_count < 0:
            raise ConfigurationError(f"output.preview_count must be >= 0, got {self.preview_count}")

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "Settings":
        """Build settings from a parsed config dict, applying env overrides.

        ``FOREX_PAIR`` and ``HOURS_LOOKBACK`` take precedence over the file.
        """
        news = _section(config, "news")
        llm = _section(config, "llm")
        output = _section(config, "output")

        pair = os.getenv("FOREX_PAIR") or config.get("pair") or DEFAULT_PAIR
        hours = os.getenv("HOURS_LOOKBACK") or config.get("hours_lookback", 24)
        models = _model_list(llm.get("models", DEFAULT_MODELS))

        try:
            return cls(
                pair=str(pair).strip().upper(),
                hours_lookback=_whole_number("hours_lookback", hours),
                headline_cap=_whole_number("news.headline_cap", news.get("headline_cap", 20)),
                preview_count=_whole_number("output.preview_count", output.get("preview_count", 5)),
                models=tuple(models),
                llm_timeout_seconds=float(llm.get("timeout_seconds", 30)),
                llm_temperature=float(llm.get("temperature", 0.2)),
                news_timeout_seconds=float(news.get("timeout_seconds", 15)),
                output_dir=str(output.get("dir") or config.get("output_dir") or "output"),
            )
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"invalid configuration value: {exc}") from exc

    def candidates(self) -> Tuple[ModelCandidate, ...]:
        """Return the configured models as ranked candidates (0 = tried first)."""
        return tuple(
            ModelCandidate(identifier=model, priority=rank)
            for rank, model in enumerate(self.models)
        )


# ── helpers ───────────────────────────────────────────────────────────────────

def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return a nested config mapping; a missing or empty section is ``{}``."""
    value = config.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"{name} must be a mapping, got {type(value).__name__}")
    return value


def _model_list(value: Any) -> List[str]:
    """Normalize ``llm.models``: a list of ids, or a single id written as a scalar."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ConfigurationError(f"llm.models must be a list of model ids, got {value!r}")
    return [str(m).strip() for m in value if m is not None and str(m).strip()]


def _whole_number(name: str, value: Any) -> int:
    """Coerce an integer setting; fractional values and booleans are rejected.

    Strings are accepted so that environment overrides like ``"12"`` work.
    """
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be a whole number, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("+-").isdigit():
        return int(value.strip())
    raise ConfigurationError(f"{name} must be a whole number, got {value!r}")
