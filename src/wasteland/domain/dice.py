"""Dice notation and the attack/damage rolls built on it.

Damage strings look like ``2d6+3``, ``1d4`` or ``1d8+STR``. ``STR`` stands
for half the attacker's strength and is substituted before rolling.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from wasteland.core.rng import RNG

CRITICAL_ROLL = 20
FUMBLE_ROLL = 1
CRITICAL_MULTIPLIER = 2
MIN_HIT_CHANCE = 5
MAX_HIT_CHANCE = 95

_DICE_PATTERN = re.compile(r"(\d+)d(\d+)(?:([+-])(\d+|STR))?")


@dataclass(frozen=True, slots=True)
class DiceExpression:
    count: int
    sides: int
    modifier: int = 0
    uses_strength: bool = False

    def __str__(self) -> str:
        text = f"{self.count}d{self.sides}"
        if self.uses_strength:
            return text + "+STR"
        if self.modifier > 0:
            return f"{text}+{self.modifier}"
        if self.modifier < 0:
            return f"{text}{self.modifier}"
        return text

    def with_strength(self, strength: int) -> "DiceExpression":
        """Replace the STR placeholder with ``strength // 2``."""
        if not self.uses_strength:
            return self
        return DiceExpression(self.count, self.sides, strength // 2)

    def roll(self, rng: RNG) -> int:
        return sum(rng.roll(self.count, self.sides)) + self.modifier


@dataclass(frozen=True, slots=True)
class AttackRoll:
    roll: int
    total: int
    hit: bool
    critical: bool


def parse_dice(expression: str) -> DiceExpression:
    """Parse dice notation; raises ValueError for anything else."""
    match = _DICE_PATTERN.fullmatch(expression.replace(" ", ""))
    if match is None:
        raise ValueError(f"Invalid dice expression: {expression!r}")
    count, sides, sign, modifier = match.groups()
    if int(count) < 1 or int(sides) < 1:
        raise ValueError(f"Dice expression needs at least one die with one side: {expression!r}")
    if modifier == "STR":
        if sign == "-":
            raise ValueError(f"STR can only be added: {expression!r}")
        return DiceExpression(int(count), int(sides), 0, uses_strength=True)
    value = int(modifier) if modifier else 0
    return DiceExpression(int(count), int(sides), -value if sign == "-" else value)


def is_valid_dice(expression: str) -> bool:
    try:
        parse_dice(expression)
    except ValueError:
        return False
    return True


def roll_dice(expression: str, rng: RNG, *, strength: int = 0) -> int:
    return parse_dice(expression).with_strength(strength).roll(rng)


def attack_roll(skill: int, armor_class: int, rng: RNG) -> AttackRoll:
    """d20 + skill against armor class; a natural 20 always hits and is critical."""
    roll = rng.d20()
    total = roll + skill
    critical = roll == CRITICAL_ROLL
    return AttackRoll(roll=roll, total=total, hit=critical or total >= armor_class, critical=critical)


def calculate_damage(expression: str, rng: RNG, *, strength: int = 0, bonus: int = 0, critical: bool = False) -> int:
    damage = max(0, roll_dice(expression, rng, strength=strength) + bonus)
    return damage * CRITICAL_MULTIPLIER if critical else damage


def hit_chance(skill: int, perception: int, armor_class: int) -> int:
    """Displayed percentage: skill + 2 * perception - (AC - 10), clamped to 5..95."""
    chance = skill + 2 * perception - (armor_class - 10)
    return max(MIN_HIT_CHANCE, min(MAX_HIT_CHANCE, chance))
