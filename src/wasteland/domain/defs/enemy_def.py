"""Enemy template definition structures."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LinearStat:
    """``base + min(per_level * (level // step), cap)``; never decreasing in level."""

    base: int
    per_level: int = 0
    step: int = 1
    cap: int | None = None

    def at(self, level: int) -> int:
        bonus = self.per_level * (level // self.step)
        if self.cap is not None:
            bonus = min(bonus, self.cap)
        return self.base + bonus


@dataclass(frozen=True, slots=True)
class DamageScaling:
    """Dice expression ``<dice>d<die>+<bonus>`` with level-scaled dice and bonus."""

    dice: LinearStat
    die: int
    bonus: LinearStat

    def at(self, level: int) -> str:
        expression = f"{self.dice.at(level)}d{self.die}"
        bonus = self.bonus.at(level)
        if bonus > 0:
            expression += f"+{bonus}"
        return expression


@dataclass(frozen=True, slots=True)
class EnemyTemplateDef:
    """Immutable enemy template; ``name`` may contain a ``{level}`` placeholder."""

    id: str
    name: str
    level_offset: int
    hp: LinearStat
    armor_class: LinearStat
    skill: LinearStat
    strength: LinearStat
    ap: LinearStat
    xp: LinearStat
    damage: DamageScaling
