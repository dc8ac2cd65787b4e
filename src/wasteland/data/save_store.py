"""File-system storage for named save files."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List

from wasteland.core.validation import validate_save_name
from wasteland.data import paths
from wasteland.data.errors import DataDecodeError, DataIOError, DataNotFoundError
from wasteland.data.json_loader import load_json, write_json_atomic

logger = logging.getLogger(__name__)


class SaveStore:
    """Maps validated save names onto ``<base_dir>/<name>.json`` files."""

    def __init__(self, base_dir: Path | str | None = None) -> None:
        self._base_dir = paths.get_save_dir(base_dir)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def path_for(self, name: str) -> Path:
        """Return the file path for a save name, rejecting unsafe names."""
        validate_save_name(name)
        return self._base_dir / f"{name}{paths.SAVE_SUFFIX}"

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def list_saves(self) -> List[str]:
        """Return the names of saves on disk, sorted."""
        if not self._base_dir.is_dir():
            return []
        names: List[str] = []
        try:
            entries = list(self._base_dir.iterdir())
        except OSError as exc:
            raise DataIOError(f"Unable to list {self._base_dir}: {exc.strerror or exc}") from exc
        for entry in entries:
            if entry.suffix != paths.SAVE_SUFFIX or entry.name.startswith("."):
                continue
            if entry.is_file():
                names.append(entry.stem)
        return sorted(names)

    def read(self, name: str) -> dict[str, Any]:
        """Load and parse the payload stored under ``name``."""
        path = self.path_for(name)
        try:
            payload = load_json(path)
        except DataNotFoundError as exc:
            raise DataNotFoundError(f"No save named '{name}' in {self._base_dir}") from exc
        if not isinstance(payload, dict):
            raise DataDecodeError(str(path), "save data must be a JSON object")
        logger.debug("Read save '%s' from %s", name, path)
        return payload

    def write(self, name: str, payload: dict[str, Any]) -> Path:
        """Persist the payload under ``name`` and return the file path."""
        path = self.path_for(name)
        write_json_atomic(path, payload)
        logger.debug("Stored save '%s' at %s", name, path)
        return path

    def delete(self, name: str) -> bool:
        """Delete the save if present; return True when a file was removed."""
        path = self.path_for(name)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise DataIOError(f"Unable to delete {path}: {exc.strerror or exc}") from exc
        return True
