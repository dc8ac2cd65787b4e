"""Combat encounter state machine."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from wasteland.domain.entities import Enemy

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CombatEncounter:
    """Idle (inactive, no enemies, round 0) or Active (>=1 enemy, round >= 1).

    ``turn`` is 0 while the player acts and ``i + 1`` while enemy ``i`` acts.
    """

    active: bool = False
    enemies: List[Enemy] = field(default_factory=list)
    round: int = 0
    turn: int = 0

    def start_combat(self, enemies: Sequence[Enemy]) -> bool:
        """Move Idle -> Active. Refused (returns False) for an empty list or a running fight."""
        if self.active or not enemies:
            return False
        self.active = True
        self.enemies = list(enemies)
        self.round = 1
        self.turn = 0
        logger.debug("Combat started against %d enemies", len(self.enemies))
        return True

    def end_combat(self) -> None:
        if self.active:
            logger.debug("Combat ended after %d rounds", self.round)
        self.active = False
        self.enemies = []
        self.round = 0
        self.turn = 0

    def next_round(self) -> None:
        if not self.active:
            return
        self.round += 1
        self.turn = 0

    def advance_turn(self) -> None:
        if self.active and self.turn < len(self.enemies):
            self.turn += 1

    def all_defeated(self) -> bool:
        return all(enemy.current_hp == 0 for enemy in self.enemies)

    def living_enemies(self) -> List[Enemy]:
        return [enemy for enemy in self.enemies if enemy.is_alive()]

    def total_xp_reward(self) -> int:
        """Experience owed for the enemies defeated so far."""
        return sum(enemy.xp_reward for enemy in self.enemies if not enemy.is_alive())

    def check_invariants(self) -> List[str]:
        problems: List[str] = []
        if self.active != bool(self.enemies):
            problems.append("active must be true exactly when enemies are present")
        if self.active and self.round < 1:
            problems.append("an active encounter must be in round 1 or later")
        if not self.active and (self.round != 0 or self.turn != 0):
            problems.append("an idle encounter must have round 0 and turn 0")
        if not 0 <= self.turn <= len(self.enemies):
            problems.append(f"turn {self.turn} outside 0..{len(self.enemies)}")
        for index, enemy in enumerate(self.enemies):
            problems.extend(f"enemies[{index}]: {problem}" for problem in enemy.check_invariants())
        return problems
