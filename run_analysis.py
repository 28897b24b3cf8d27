"""FX sentiment analysis entry point.

Usage:
    python run_analysis.py [path/to/config.yaml]

Loads .env and config.yaml, checks the Gemini credential, runs one analysis
and reports the outcome to stdout and the pipeline log. A degraded run is
still a completed run (exit 0); only configuration errors exit 1.
"""

import sys
from dotenv import load_dotenv

load_dotenv()  # must precede fxsentiment imports so env vars are available at module load

from fxsentiment.core.config import Settings, get_api_key, load_config  # noqa: E402
from fxsentiment.core.errors import ConfigurationError  # noqa: E402
from fxsentiment.core.logger import logger  # noqa: E402
from fxsentiment.pipeline.engine import run_analysis  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    """Run the analysis. Returns 0 on a completed run, 1 on configuration failure."""
    argv = sys.argv[1:] if argv is None else argv
    config_path = argv[0] if argv else "config.yaml"

    try:
        config = load_config(config_path)
        settings = Settings.from_config(config)
    except (FileNotFoundError, ValueError, ConfigurationError) as exc:
        logger.error(f"run_analysis: failed to load config: {exc}")
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    api_key = get_api_key()
    if not api_key:
        logger.error("run_analysis: Configuration Error: GEMINI_API_KEY is missing")
        print("ERROR: Configuration Error: GEMINI_API_KEY is missing.", file=sys.stderr)
        return 1

    try:
        outcome = run_analysis(settings.pair, api_key, settings.hours_lookback, config=config)
    except ConfigurationError as exc:
        logger.error(f"run_analysis: {exc}")
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    if outcome.is_success:
        analysis = outcome.analysis
        print(f"SUCCESS: {analysis['outlook']} ({analysis['score']:+.1f}) via {analysis['model_used']}")
    else:
        print(f"DEGRADED: {outcome.reason}" + (f" ({outcome.detail})" if outcome.detail else ""))
    return 0


if __name__ == "__main__":
    sys.exit(main())
