"""JSON-lines output sink: one line per run, appended."""

import json
import os

from fxsentiment.core.logger import logger
from fxsentiment.models.datatypes import RunOutcome
from fxsentiment.providers.base import OutputSink

RUN_LOG_FILENAME = "sentiment_runs.jsonl"


class JsonlSink(OutputSink):
    """Append each run record to ``<output_dir>/sentiment_runs.jsonl``.

    Args:
        output_dir: Directory that holds the run log (created if missing).
        filename: Run log file name.
    """

    def __init__(self, output_dir: str = "output", filename: str = RUN_LOG_FILENAME) -> None:
        self.output_dir = output_dir
        self.path = os.path.join(output_dir, filename)

    def emit(self, outcome: RunOutcome) -> None:
        os.makedirs(self.output_dir, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(json.dumps(outcome.to_record(), ensure_ascii=False) + "\n")
        logger.info(f"JsonlSink: saved {outcome.status} record for {outcome.pair} → {self.path}")
