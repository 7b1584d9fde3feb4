"""Configuration for the pocketbook tracker.

Thresholds, view sizes and paths live here so the evaluators and the
Streamlit app read them from one place. Every value can be overridden with a
``POCKETBOOK_*`` environment variable.
"""

from __future__ import annotations

import os
from pathlib import Path

# Project root - this file lives in tracker/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# Seed data for a fresh session
SEED_PATH = Path(
    os.getenv("POCKETBOOK_SEED_PATH", _PROJECT_ROOT / "data" / "seed.json")
).resolve()

LOG_LEVEL = os.getenv("POCKETBOOK_LOG_LEVEL", "INFO")

# Budget status bands (percent of limit)
WARNING_PCT = _env_float("POCKETBOOK_WARNING_PCT", 80.0)
EXCEEDED_PCT = 100.0

# Dashboard views
TOP_CATEGORIES = _env_int("POCKETBOOK_TOP_CATEGORIES", 3)
RECENT_COUNT = _env_int("POCKETBOOK_RECENT_COUNT", 5)

# Banner thresholds (percent)
GREAT_JOB_SAVINGS_PCT = 40.0
GREAT_JOB_MAX_USAGE_PCT = 90.0
GOOD_STANDING_MAX_USAGE_PCT = 70.0
HALFWAY_PCT = 50.0


def get_seed_path() -> str:
    """Get the seed path as a string."""
    return str(SEED_PATH)
