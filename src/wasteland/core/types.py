"""Shared type aliases for the core and domain layers."""
from typing import Literal

StatName = Literal[
    "strength",
    "perception",
    "endurance",
    "charisma",
    "intelligence",
    "agility",
    "luck",
]
ItemTypeTag = Literal["weapon", "armor", "consumable"]

__all__ = ["ItemTypeTag", "StatName"]
