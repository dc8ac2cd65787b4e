"""Runtime entity exports."""

from .character import Character, ConsumableResult
from .enemy import Enemy
from .skills import SKILL_TABLE, Skills
from .special import STAT_NAMES, Special

__all__ = [
    "Character",
    "ConsumableResult",
    "Enemy",
    "SKILL_TABLE",
    "STAT_NAMES",
    "Skills",
    "Special",
]
