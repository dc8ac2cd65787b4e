"""Game configuration persisted as a small JSON file."""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict

from wasteland.domain.entities.character import DEFAULT_CAPS
from wasteland.domain.state import DEFAULT_PROMPT_HISTORY_TURNS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "config.json"
DEFAULT_SAVE_DIR = "saves"


@dataclass(frozen=True, slots=True)
class GameConfig:
    starting_caps: int = DEFAULT_CAPS
    save_dir: str = DEFAULT_SAVE_DIR
    prompt_history_turns: int = DEFAULT_PROMPT_HISTORY_TURNS


def get_default_config_path() -> Path:
    """Config lives next to the saves, relative to the working directory."""
    return Path(DEFAULT_CONFIG_FILENAME)


def _coerce(raw: Dict[str, Any]) -> GameConfig:
    defaults = GameConfig()
    caps = raw.get("starting_caps", defaults.starting_caps)
    save_dir = raw.get("save_dir", defaults.save_dir)
    history = raw.get("prompt_history_turns", defaults.prompt_history_turns)
    return GameConfig(
        starting_caps=caps if _is_non_negative_int(caps) else defaults.starting_caps,
        save_dir=save_dir if isinstance(save_dir, str) and save_dir else defaults.save_dir,
        prompt_history_turns=history if _is_non_negative_int(history) else defaults.prompt_history_turns,
    )


def _is_non_negative_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def load_config(path: Path | None = None) -> GameConfig:
    """Load config from disk or return defaults; bad values fall back per field."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return GameConfig()
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return GameConfig()
    if not isinstance(raw, dict):
        logger.warning("Ignoring config %s: expected a JSON object", config_path)
        return GameConfig()
    return _coerce(raw)


def save_config(config: GameConfig, path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(asdict(config), indent=2, sort_keys=True), encoding="utf-8")
