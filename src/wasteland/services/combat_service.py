"""Combat resolution on top of the encounter state machine.

The service never prints: every action returns a list of event dataclasses
for the presentation layer to narrate.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from wasteland.core.rng import RNG
from wasteland.data.repositories import EnemiesRepository
from wasteland.domain.dice import attack_roll, calculate_damage
from wasteland.domain.entities import Enemy
from wasteland.domain.errors import RuleError
from wasteland.domain.state import GameState
from wasteland.services.factories import create_enemy

logger = logging.getLogger(__name__)

UNARMED_AP_COST = 3
MAX_RANDOM_ENEMIES = 3

# (minimum character level, template id)
ENCOUNTER_TABLE: Tuple[Tuple[int, str], ...] = (
    (1, "radroach"),
    (1, "raider"),
    (3, "super_mutant"),
    (6, "deathclaw"),
)


@dataclass(slots=True)
class CombatEvent:
    """Base combat event."""


@dataclass(slots=True)
class CombatStartedEvent(CombatEvent):
    enemy_names: List[str] = field(default_factory=list)


@dataclass(slots=True)
class AttackResolvedEvent(CombatEvent):
    attacker_name: str
    target_name: str
    roll: int
    total: int
    damage: int
    target_hp: int
    critical: bool = False


@dataclass(slots=True)
class AttackMissedEvent(CombatEvent):
    attacker_name: str
    target_name: str
    roll: int
    total: int


@dataclass(slots=True)
class CombatantDefeatedEvent(CombatEvent):
    combatant_name: str


@dataclass(slots=True)
class CombatEndedEvent(CombatEvent):
    victory: bool
    xp_awarded: int
    levels_gained: int


class CombatService:
    """Runs player attacks, enemy turns and the end-of-fight payout."""

    def __init__(self, enemies_repo: EnemiesRepository | None = None) -> None:
        self._enemies_repo = enemies_repo or EnemiesRepository()

    # ---- Lifecycle ----

    def start_encounter(self, state: GameState, enemies: Sequence[Enemy]) -> List[CombatEvent]:
        if state.combat.active:
            raise RuleError("Combat is already in progress.")
        if not state.combat.start_combat(enemies):
            raise RuleError("An encounter needs at least one enemy.")
        return [CombatStartedEvent(enemy_names=[enemy.name for enemy in state.combat.enemies])]

    def start_random_encounter(self, state: GameState, rng: RNG) -> List[CombatEvent]:
        """Spawn one to three enemies suited to the character's level."""
        character_level = state.character.level
        templates = [template_id for min_level, template_id in ENCOUNTER_TABLE if character_level >= min_level]
        count = rng.randint(1, MAX_RANDOM_ENEMIES)
        enemies: List[Enemy] = []
        for _ in range(count):
            template_id = rng.choice(templates)
            level = max(1, character_level + rng.randint(-1, 1))
            enemies.append(create_enemy(template_id, level, self._enemies_repo))
        return self.start_encounter(state, enemies)

    def finish_combat(self, state: GameState) -> CombatEndedEvent:
        """Award experience for defeated enemies and return to Idle."""
        if not state.combat.active:
            raise RuleError("There is no combat to finish.")
        victory = state.combat.all_defeated()
        xp = state.combat.total_xp_reward()
        levels = state.character.add_experience(xp)
        state.combat.end_combat()
        logger.debug("Combat finished: victory=%s xp=%d levels=%d", victory, xp, levels)
        return CombatEndedEvent(victory=victory, xp_awarded=xp, levels_gained=levels)

    # ---- Actions ----

    def player_attack(self, state: GameState, target_index: int, rng: RNG) -> List[CombatEvent]:
        """Spend the weapon's AP cost and attack one living enemy."""
        combat = state.combat
        character = state.character
        if not combat.active:
            raise RuleError("Not in combat.")
        if not 0 <= target_index < len(combat.enemies):
            raise RuleError(f"No enemy at position {target_index + 1}.")
        target = combat.enemies[target_index]
        if not target.is_alive():
            raise RuleError(f"{target.name} is already defeated.")

        weapon = character.equipped_weapon_stats()
        ap_cost = weapon.ap_cost if weapon is not None else UNARMED_AP_COST
        if not character.use_ap(ap_cost):
            raise RuleError(f"Not enough AP: need {ap_cost}, have {character.current_ap}.")

        result = attack_roll(character.weapon_skill(), target.armor_class, rng)
        if not result.hit:
            return [AttackMissedEvent(character.name, target.name, result.roll, result.total)]

        damage = calculate_damage(
            character.equipped_damage(),
            rng,
            strength=character.special.strength,
            critical=result.critical,
        )
        target.take_damage(damage)
        events: List[CombatEvent] = [
            AttackResolvedEvent(
                attacker_name=character.name,
                target_name=target.name,
                roll=result.roll,
                total=result.total,
                damage=damage,
                target_hp=target.current_hp,
                critical=result.critical,
            )
        ]
        if not target.is_alive():
            events.append(CombatantDefeatedEvent(target.name))
        return events

    def enemy_turns(self, state: GameState, rng: RNG) -> List[CombatEvent]:
        """Every living enemy attacks once; then AP refills and the round advances."""
        combat = state.combat
        character = state.character
        if not combat.active:
            raise RuleError("Not in combat.")
        events: List[CombatEvent] = []
        for enemy in combat.enemies:
            combat.advance_turn()
            if not enemy.is_alive():
                continue
            result = attack_roll(enemy.skill, character.defense_class(), rng)
            if not result.hit:
                events.append(AttackMissedEvent(enemy.name, character.name, result.roll, result.total))
                continue
            raw = calculate_damage(enemy.damage, rng, bonus=enemy.strength // 2, critical=result.critical)
            damage = max(0, raw - character.damage_resistance())
            character.take_damage(damage)
            events.append(
                AttackResolvedEvent(
                    attacker_name=enemy.name,
                    target_name=character.name,
                    roll=result.roll,
                    total=result.total,
                    damage=damage,
                    target_hp=character.current_hp,
                    critical=result.critical,
                )
            )
            if not character.is_alive():
                events.append(CombatantDefeatedEvent(character.name))
                break
        character.restore_ap()
        combat.next_round()
        return events
