"""Skill values derived from SPECIAL.

``SKILL_TABLE`` is the single source of truth for every skill formula and is
part of the save format: skills are stored on disk and compared against this
table when a save is loaded.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict, Mapping, Tuple

from .special import Special

SkillFormula = Tuple[int, Tuple[Tuple[str, int], ...]]

# skill -> (base, ((stat, coefficient), ...))
SKILL_TABLE: Mapping[str, SkillFormula] = {
    "small_guns": (5, (("agility", 4),)),
    "big_guns": (0, (("agility", 2),)),
    "energy_weapons": (0, (("agility", 2),)),
    "unarmed": (30, (("agility", 2), ("strength", 2))),
    "melee_weapons": (20, (("agility", 2), ("strength", 2))),
    "throwing": (0, (("agility", 4),)),
    "first_aid": (0, (("perception", 2), ("intelligence", 2))),
    "doctor": (5, (("perception", 1), ("intelligence", 1))),
    "sneak": (5, (("agility", 3),)),
    "lockpick": (10, (("perception", 1), ("agility", 1))),
    "steal": (0, (("agility", 3),)),
    "traps": (10, (("perception", 1), ("agility", 1))),
    "science": (0, (("intelligence", 4),)),
    "repair": (0, (("intelligence", 3),)),
    "speech": (0, (("charisma", 5),)),
    "barter": (0, (("charisma", 4),)),
    "gambling": (0, (("luck", 5),)),
    "outdoorsman": (0, (("endurance", 1), ("intelligence", 1))),
}


def derive_skill(skill: str, special: Special) -> int:
    """Evaluate one row of the skill table."""
    base, terms = SKILL_TABLE[skill]
    return base + sum(coefficient * special.get(stat) for stat, coefficient in terms)


@dataclass(slots=True)
class Skills:
    """Fixed-shape record of the 18 skills."""

    small_guns: int = 0
    big_guns: int = 0
    energy_weapons: int = 0
    unarmed: int = 0
    melee_weapons: int = 0
    throwing: int = 0
    first_aid: int = 0
    doctor: int = 0
    sneak: int = 0
    lockpick: int = 0
    steal: int = 0
    traps: int = 0
    science: int = 0
    repair: int = 0
    speech: int = 0
    barter: int = 0
    gambling: int = 0
    outdoorsman: int = 0

    @classmethod
    def from_special(cls, special: Special) -> "Skills":
        return cls(**{skill: derive_skill(skill, special) for skill in SKILL_TABLE})

    def get(self, skill: str) -> int:
        """Return the skill value, or 0 for a name that is not a skill."""
        if skill not in SKILL_TABLE:
            return 0
        return getattr(self, skill)

    def to_dict(self) -> Dict[str, int]:
        return {field.name: getattr(self, field.name) for field in fields(self)}
