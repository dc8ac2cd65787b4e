"""Typed accessors for decoding JSON payloads.

Each helper takes the raw value plus a dotted ``location`` such as
``character.inventory[2].damage`` and either returns the value with a
narrowed type or raises :class:`DataDecodeError` pointing at that location.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping

from wasteland.data.errors import DataDecodeError


def require_mapping(value: Any, location: str) -> Dict[str, Any]:
    if not isinstance(value, Mapping):
        raise DataDecodeError(location, "must be an object")
    for key in value:
        if not isinstance(key, str):
            raise DataDecodeError(location, "keys must be strings")
    return dict(value)


def require_exact_keys(
    mapping: Mapping[str, Any],
    expected: set[str] | frozenset[str],
    location: str,
    *,
    optional: set[str] | frozenset[str] = frozenset(),
) -> None:
    """Reject missing required keys and any key outside expected | optional."""
    actual = set(mapping.keys())
    missing = set(expected) - actual
    extra = actual - set(expected) - set(optional)
    problems: list[str] = []
    if missing:
        problems.append(f"missing keys: {sorted(missing)}")
    if extra:
        problems.append(f"unknown keys: {sorted(extra)}")
    if problems:
        raise DataDecodeError(location, "; ".join(problems))


def require_str(value: Any, location: str) -> str:
    if not isinstance(value, str):
        raise DataDecodeError(location, "must be a string")
    return value


def optional_str(value: Any, location: str) -> str | None:
    if value is None:
        return None
    return require_str(value, location)


def require_int(value: Any, location: str, *, minimum: int | None = None) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise DataDecodeError(location, "must be an integer")
    if minimum is not None and value < minimum:
        raise DataDecodeError(location, f"must be >= {minimum}")
    return value


def require_float(value: Any, location: str, *, minimum: float | None = None) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DataDecodeError(location, "must be a number")
    if minimum is not None and value < minimum:
        raise DataDecodeError(location, f"must be >= {minimum}")
    return float(value)


def require_bool(value: Any, location: str) -> bool:
    if not isinstance(value, bool):
        raise DataDecodeError(location, "must be a boolean")
    return value


def require_list(value: Any, location: str) -> List[Any]:
    if not isinstance(value, list):
        raise DataDecodeError(location, "must be a list")
    return value


def require_str_list(value: Any, location: str) -> List[str]:
    entries = require_list(value, location)
    return [require_str(entry, f"{location}[{index}]") for index, entry in enumerate(entries)]
