"""Run-log validator: audits records in sentiment_runs.jsonl.

Checks per record:
  1. Line is a JSON object with pair, timestamp and status
  2. Success: numeric score in [-10, 10], non-empty model_used/outlook/summary
  3. Degraded: non-empty error and a news_headlines list
  4. Never both an analysis (score) and an error

Usage:
    python -m fxsentiment.pipeline.validator output/sentiment_runs.jsonl
"""

import json
import sys
from typing import Any, Dict, List, Tuple

from fxsentiment.models.datatypes import STATUS_DEGRADED, STATUS_SUCCESS
from fxsentiment.models.sentiment_schema import SCORE_MAX, SCORE_MIN

_REQUIRED_KEYS = ["pair", "timestamp", "status"]


def validate(jsonl_path: str) -> Tuple[bool, List[str]]:
    """Run all validation checks against jsonl_path.

    Args:
        jsonl_path: Path to a JSON-lines run log.

    Returns:
        Tuple of ``(passed: bool, messages: list[str])``.
        ``messages`` holds one PASS/FAIL line per record.
    """
    messages: List[str] = []
    passed = True

    # ── load ──────────────────────────────────────────────────────────────────
    try:
        with open(jsonl_path, encoding="utf-8") as f:
            lines = [line for line in f.read().splitlines() if line.strip()]
    except FileNotFoundError:
        return False, [f"FAIL  file not found: {jsonl_path}"]
    except OSError as exc:
        return False, [f"FAIL  could not read run log: {exc}"]

    if not lines:
        return False, ["FAIL  run log is empty"]

    # ── per-record checks ─────────────────────────────────────────────────────
    for lineno, line in enumerate(lines, start=1):
        try:
            record = json.loads(line)
        except json.JSONDecodeError as exc:
            messages.append(f"FAIL  line {lineno}: invalid JSON ({exc.msg})")
            passed = False
            continue

        problems = _check_record(record)
        if problems:
            messages.append(f"FAIL  line {lineno}: {'; '.join(problems)}")
            passed = False
        else:
            messages.append(f"PASS  line {lineno}: {record['pair']} {record['status']}")

    return passed, messages


def _check_record(record: Any) -> List[str]:
    """Return a list of problems with one record (empty when valid)."""
    if not isinstance(record, dict):
        return ["not a JSON object"]

    problems = [f"missing {k}" for k in _REQUIRED_KEYS if not record.get(k)]
    status = record.get("status")

    if "score" in record and "error" in record:
        problems.append("has both score and error")

    if status == STATUS_SUCCESS:
        problems.extend(_check_success(record))
    elif status == STATUS_DEGRADED:
        if not record.get("error"):
            problems.append("degraded record without error")
        if not isinstance(record.get("news_headlines"), list):
            problems.append("news_headlines is not a list")
    elif status:
        problems.append(f"unknown status {status!r}")
    return problems


def _check_success(record: Dict[str, Any]) -> List[str]:
    problems = []
    score = record.get("score")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        problems.append(f"score is not numeric: {score!r}")
    elif not (SCORE_MIN <= score <= SCORE_MAX):
        problems.append(f"score out of range: {score}")
    for key in ("model_used", "outlook", "summary"):
        if not record.get(key):
            problems.append(f"missing {key}")
    return problems


def main() -> int:
    if len(sys.argv) < 2:
        print("Usage: python -m fxsentiment.pipeline.validator <path_to_jsonl>")
        return 1
    passed, messages = validate(sys.argv[1])
    for msg in messages:
        print(msg)
    if passed:
        print("\nVALIDATION PASSED ✓")
        return 0
    else:
        print("\nVALIDATION FAILED ✗")
        return 1


if __name__ == "__main__":
    sys.exit(main())
