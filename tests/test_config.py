from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from wasteland.config import GameConfig, get_default_config_path, load_config, save_config


def test_missing_config_returns_defaults(tmp_path: Path) -> None:
    assert load_config(tmp_path / "config.json") == GameConfig()


def test_default_path_is_relative(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert get_default_config_path() == Path("config.json")
    save_config(GameConfig(starting_caps=10))
    assert (tmp_path / "config.json").is_file()
    assert load_config().starting_caps == 10


def test_save_and_load_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"
    config = GameConfig(starting_caps=250, save_dir="slots", prompt_history_turns=4)
    save_config(config, path)
    assert load_config(path) == config


def test_invalid_fields_fall_back_individually(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"starting_caps": -5, "save_dir": "", "prompt_history_turns": 6, "extra": 1}),
        encoding="utf-8",
    )
    assert load_config(path) == GameConfig(prompt_history_turns=6)


def test_boolean_is_not_a_count(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"starting_caps": True}), encoding="utf-8")
    assert load_config(path).starting_caps == GameConfig().starting_caps


def test_unreadable_config_logs_warning(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "config.json"
    path.write_text("{broken", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="wasteland.config"):
        assert load_config(path) == GameConfig()
    assert "Ignoring unreadable config" in caplog.text


def test_non_object_config_returns_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert load_config(path) == GameConfig()
