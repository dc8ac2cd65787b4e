"""Enemy runtime model."""
from __future__ import annotations

from dataclasses import dataclass

from wasteland.domain.dice import is_valid_dice


@dataclass(slots=True)
class Enemy:
    """A spawned enemy taking part in an encounter."""

    name: str
    level: int
    max_hp: int
    current_hp: int
    armor_class: int
    skill: int
    damage: str
    ap: int
    xp_reward: int
    strength: int

    def is_alive(self) -> bool:
        return self.current_hp > 0

    def take_damage(self, amount: int) -> None:
        self.current_hp = max(0, self.current_hp - max(0, amount))

    def check_invariants(self) -> list[str]:
        problems: list[str] = []
        if self.level < 1:
            problems.append("level must be at least 1")
        if not 0 <= self.current_hp <= self.max_hp:
            problems.append(f"current_hp {self.current_hp} outside 0..{self.max_hp}")
        if not is_valid_dice(self.damage):
            problems.append(f"damage '{self.damage}' is not a dice expression")
        return problems
