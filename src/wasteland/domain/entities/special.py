"""SPECIAL attribute model."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict, Sequence, Tuple

from wasteland.core.types import StatName

STAT_NAMES: Tuple[StatName, ...] = (
    "strength",
    "perception",
    "endurance",
    "charisma",
    "intelligence",
    "agility",
    "luck",
)
DEFAULT_STAT_VALUE = 5


@dataclass(slots=True)
class Special:
    """The seven primary attributes, each in the 1..10 range."""

    strength: int = DEFAULT_STAT_VALUE
    perception: int = DEFAULT_STAT_VALUE
    endurance: int = DEFAULT_STAT_VALUE
    charisma: int = DEFAULT_STAT_VALUE
    intelligence: int = DEFAULT_STAT_VALUE
    agility: int = DEFAULT_STAT_VALUE
    luck: int = DEFAULT_STAT_VALUE

    @classmethod
    def from_values(cls, values: Sequence[int]) -> "Special":
        """Build from seven values in S, P, E, C, I, A, L order."""
        if len(values) != len(STAT_NAMES):
            raise ValueError(f"SPECIAL needs {len(STAT_NAMES)} values, got {len(values)}.")
        return cls(*values)

    def get(self, stat: str) -> int:
        """Return a stat by its full name; raises KeyError for unknown names."""
        if stat not in STAT_NAMES:
            raise KeyError(stat)
        return getattr(self, stat)

    def as_tuple(self) -> Tuple[int, ...]:
        return tuple(getattr(self, name) for name in STAT_NAMES)

    def to_dict(self) -> Dict[str, int]:
        return {field.name: getattr(self, field.name) for field in fields(self)}

    def total_points(self) -> int:
        return sum(self.as_tuple())
