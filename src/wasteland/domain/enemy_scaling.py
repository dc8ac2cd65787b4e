"""Deterministic enemy stat scaling from templates."""
from __future__ import annotations

from wasteland.domain.defs import EnemyTemplateDef
from wasteland.domain.entities import Enemy
from wasteland.domain.errors import RuleError

MIN_ENEMY_LEVEL = 1


def scale_enemy(template: EnemyTemplateDef, *, level: int) -> Enemy:
    """Spawn a fresh enemy from a template at the requested level.

    Every stat is evaluated against the requested level; ``level_offset`` only
    shifts the level the enemy reports (and shows in its name).
    """
    if level < MIN_ENEMY_LEVEL:
        raise RuleError(f"Enemy level must be at least {MIN_ENEMY_LEVEL}, got {level}.")
    effective_level = level + template.level_offset
    max_hp = template.hp.at(level)
    return Enemy(
        name=template.name.format(level=effective_level),
        level=effective_level,
        max_hp=max_hp,
        current_hp=max_hp,
        armor_class=template.armor_class.at(level),
        skill=template.skill.at(level),
        damage=template.damage.at(level),
        ap=template.ap.at(level),
        xp_reward=template.xp.at(level),
        strength=template.strength.at(level),
    )
