"""Skill and stat checks."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

from wasteland.core.rng import RNG
from wasteland.domain.dice import CRITICAL_ROLL, FUMBLE_ROLL
from wasteland.domain.entities import Character

# Keyword -> (display name, skill or stat attribute). Skills are matched before
# stats, and the first matching keyword wins.
_SKILL_KEYWORDS: Tuple[Tuple[Tuple[str, ...], str, str], ...] = (
    (("big", "heavy"), "Big Guns", "big_guns"),
    (("small", "gun", "firearms"), "Small Guns", "small_guns"),
    (("energy",), "Energy Weapons", "energy_weapons"),
    (("melee",), "Melee Weapons", "melee_weapons"),
    (("unarmed", "fist"), "Unarmed", "unarmed"),
    (("speech", "persuade"), "Speech", "speech"),
    (("sneak", "stealth"), "Sneak", "sneak"),
    (("lockpick", "lock"), "Lockpick", "lockpick"),
    (("science", "hack", "computer"), "Science", "science"),
    (("repair", "fix"), "Repair", "repair"),
    (("first aid",), "First Aid", "first_aid"),
    (("doctor", "medicine"), "Doctor", "doctor"),
    (("barter", "trade"), "Barter", "barter"),
    (("outdoorsman", "survival"), "Outdoorsman", "outdoorsman"),
)
_STAT_KEYWORDS: Tuple[Tuple[Tuple[str, ...], str, str], ...] = (
    (("strength", "str"), "Strength", "strength"),
    (("perception", "per"), "Perception", "perception"),
    (("endurance", "end"), "Endurance", "endurance"),
    (("charisma", "cha"), "Charisma", "charisma"),
    (("intelligence", "int"), "Intelligence", "intelligence"),
    (("agility", "agi"), "Agility", "agility"),
    (("luck", "lck"), "Luck", "luck"),
)
_ROLL_REQUEST = re.compile(r"(?:skill|stat):\s*(?P<name>.+?)\s+dc\s*(?P<dc>\d+)", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class RollResult:
    skill_name: str
    roll: int
    modifier: int
    total: int
    dc: int
    success: bool
    critical: bool
    fumble: bool

    @property
    def outcome(self) -> str:
        if self.critical:
            return "CRITICAL SUCCESS!"
        if self.fumble:
            return "CRITICAL FAILURE!"
        return "Success" if self.success else "Failure"

    def format(self) -> str:
        return (
            f"{self.skill_name} Check: Rolled {self.roll}+{self.modifier} = {self.total} "
            f"vs DC {self.dc} - {self.outcome}"
        )


def resolve_modifier(character: Character, skill_or_stat: str) -> Tuple[str, int]:
    """Map a free-form skill or stat name onto (display name, modifier).

    Unrecognised names fall back to Luck.
    """
    lowered = skill_or_stat.lower()
    for keywords, display, skill in _SKILL_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return display, character.skills.get(skill)
    for keywords, display, stat in _STAT_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return display, character.special.get(stat)
    return "Luck", character.special.luck


def perform_roll(character: Character, skill_or_stat: str, dc: int, rng: RNG) -> RollResult:
    """Roll d20 + modifier against a difficulty class; a natural 20 always succeeds."""
    roll = rng.d20()
    skill_name, modifier = resolve_modifier(character, skill_or_stat)
    total = roll + modifier
    return RollResult(
        skill_name=skill_name,
        roll=roll,
        modifier=modifier,
        total=total,
        dc=dc,
        success=total >= dc or roll == CRITICAL_ROLL,
        critical=roll == CRITICAL_ROLL,
        fumble=roll == FUMBLE_ROLL,
    )


def parse_roll_request(text: str) -> Tuple[str, int] | None:
    """Find a ``SKILL: <name> DC <n>`` or ``STAT: <name> DC <n>`` request in text."""
    match = _ROLL_REQUEST.search(text)
    if match is None:
        return None
    return match.group("name").strip(), int(match.group("dc"))
