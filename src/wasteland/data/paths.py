"""Helpers for resolving data file locations."""
from __future__ import annotations

from pathlib import Path

SAVE_DIR_NAME = "saves"
SAVE_SUFFIX = ".json"


def get_definitions_path(base_path: Path | str | None = None) -> Path:
    """Return the directory containing the JSON definition files."""
    if base_path is not None:
        return Path(base_path)
    return Path(__file__).resolve().parent / "definitions"


def get_save_dir(base_path: Path | str | None = None) -> Path:
    """Return the saves directory, relative to the working directory by default."""
    if base_path is not None:
        return Path(base_path)
    return Path(SAVE_DIR_NAME)
