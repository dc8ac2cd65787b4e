"""Pure validation predicates for user-supplied names and stat spreads.

Every predicate returns the accepted value unchanged or raises
:class:`ValidationError` naming the rule that failed. Nothing here touches
the filesystem, so callers can reject input before any I/O happens.
"""
from __future__ import annotations

import re
from typing import Iterable, Tuple

MAX_CHARACTER_NAME_LENGTH = 32
MAX_SAVE_NAME_LENGTH = 64
MIN_STAT_VALUE = 1
MAX_STAT_VALUE = 10
MAX_SPECIAL_POINTS = 40

RULE_EMPTY = "empty"
RULE_SURROUNDING_WHITESPACE = "surrounding whitespace"
RULE_TOO_LONG = "too long"
RULE_INVALID_CHARACTER = "invalid character"
RULE_PATH_TRAVERSAL = "path traversal"
RULE_PATH_SEPARATOR = "path separator"
RULE_LEADING_DOT = "leading dot"
RULE_STAT_OUT_OF_RANGE = "stat out of range"
RULE_POINT_BUDGET = "point budget exceeded"

_CHARACTER_NAME_PATTERN = re.compile(r"[A-Za-z0-9_ \-]+")
_SAVE_NAME_PATTERN = re.compile(r"[A-Za-z0-9_\-]+")


class ValidationError(ValueError):
    """Raised when user-supplied input breaks a validation rule."""

    def __init__(self, field: str, value: object, rule: str) -> None:
        self.field = field
        self.value = value
        self.rule = rule
        super().__init__(f"{field} {value!r} rejected: {rule}")


def validate_character_name(name: str) -> str:
    """Accept a display name made of letters, digits, spaces, '_' and '-'."""
    if not isinstance(name, str) or not name:
        raise ValidationError("character name", name, RULE_EMPTY)
    if name != name.strip():
        raise ValidationError("character name", name, RULE_SURROUNDING_WHITESPACE)
    if len(name) > MAX_CHARACTER_NAME_LENGTH:
        raise ValidationError("character name", name, RULE_TOO_LONG)
    if _CHARACTER_NAME_PATTERN.fullmatch(name) is None:
        raise ValidationError("character name", name, RULE_INVALID_CHARACTER)
    return name


def validate_save_name(name: str) -> str:
    """Accept a save slot name that maps to exactly one file in the saves dir."""
    if not isinstance(name, str) or not name:
        raise ValidationError("save name", name, RULE_EMPTY)
    if len(name) > MAX_SAVE_NAME_LENGTH:
        raise ValidationError("save name", name, RULE_TOO_LONG)
    if ".." in name:
        raise ValidationError("save name", name, RULE_PATH_TRAVERSAL)
    if "/" in name or "\\" in name:
        raise ValidationError("save name", name, RULE_PATH_SEPARATOR)
    if name.startswith("."):
        raise ValidationError("save name", name, RULE_LEADING_DOT)
    if _SAVE_NAME_PATTERN.fullmatch(name) is None:
        raise ValidationError("save name", name, RULE_INVALID_CHARACTER)
    return name


def validate_special_stat(stat_name: str, value: int) -> int:
    """Accept a single SPECIAL value inside the 1..10 range."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(stat_name, value, RULE_STAT_OUT_OF_RANGE)
    if not MIN_STAT_VALUE <= value <= MAX_STAT_VALUE:
        raise ValidationError(stat_name, value, RULE_STAT_OUT_OF_RANGE)
    return value


def validate_special_values(values: Iterable[Tuple[str, int]]) -> int:
    """Check every (name, value) pair and the 40 point budget; return the total."""
    total = 0
    for stat_name, value in values:
        total += validate_special_stat(stat_name, value)
    if total > MAX_SPECIAL_POINTS:
        raise ValidationError("SPECIAL total", total, RULE_POINT_BUDGET)
    return total
