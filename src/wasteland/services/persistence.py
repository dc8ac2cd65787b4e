"""Save and load game sessions under ``saves/<name>.json``.

Names are validated before any filesystem access. Writes go to a temp sibling
that is renamed over the destination, so an interrupted save never replaces
a good one.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from wasteland.config import load_config
from wasteland.core.validation import validate_save_name
from wasteland.data.save_store import SaveStore
from wasteland.domain.state import GameState
from wasteland.services.save_service import SaveService

logger = logging.getLogger(__name__)


def default_store() -> SaveStore:
    """Store rooted at the configured save directory."""
    return SaveStore(load_config().save_dir)


def save_to_file(state: GameState, name: str, store: SaveStore | None = None) -> Path:
    """Validate ``name``, encode ``state`` and write it atomically; returns the file path."""
    validate_save_name(name)
    payload = SaveService().serialize(state)
    path = (store or default_store()).write(name, payload)
    logger.info("Saved game '%s' to %s", name, path)
    return path


def load_from_file(name: str, store: SaveStore | None = None) -> GameState:
    """Validate ``name``, read the save and rebuild a fully checked GameState."""
    validate_save_name(name)
    payload = (store or default_store()).read(name)
    state = SaveService().deserialize(payload)
    logger.info("Loaded game '%s'", name)
    return state


def list_save_files(store: SaveStore | None = None) -> List[str]:
    return (store or default_store()).list_saves()


def delete_save(name: str, store: SaveStore | None = None) -> bool:
    validate_save_name(name)
    return (store or default_store()).delete(name)
