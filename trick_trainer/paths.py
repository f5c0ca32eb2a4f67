# trick_trainer/paths.py
from __future__ import annotations

import os
from pathlib import Path

# Generated CSVs, transcripts and plots land here unless given an absolute path.
# TRICK_TRAINER_RESULTS_DIR overrides the default, e.g. for tests.
RESULTS_DIR = Path(
    os.environ.get("TRICK_TRAINER_RESULTS_DIR", Path.cwd() / "trick_trainer_results")
)


def ensure_results_dir() -> Path:
    RESULTS_DIR.mkdir(parents=True, exist_ok=True)
    return RESULTS_DIR


def resolve_results_path(path_like: str | Path) -> Path:
    """
    Anchor a relative path inside RESULTS_DIR.

    Absolute paths are returned unchanged.
    """
    path = Path(path_like)
    if path.is_absolute():
        return path
    return ensure_results_dir() / path
