"""Factory helpers for runtime entities."""

from .enemy_factory import create_enemy, deathclaw, radroach, raider, super_mutant
from .player_factory import STARTING_KIT, create_character

__all__ = [
    "STARTING_KIT",
    "create_character",
    "create_enemy",
    "deathclaw",
    "radroach",
    "raider",
    "super_mutant",
]
