"""Factory for spawning enemies from templates."""
from __future__ import annotations

from wasteland.data.repositories import EnemiesRepository
from wasteland.domain.entities import Enemy
from wasteland.domain.enemy_scaling import MIN_ENEMY_LEVEL, scale_enemy
from wasteland.services.errors import FactoryError


def create_enemy(template_id: str, level: int, enemies_repo: EnemiesRepository | None = None) -> Enemy:
    """Instantiate an enemy template at ``level`` (1 or higher)."""
    enemies_repo = enemies_repo or EnemiesRepository()
    try:
        template = enemies_repo.get(template_id)
    except KeyError as exc:
        raise FactoryError(f"Enemy template '{template_id}' not found.") from exc
    if level < MIN_ENEMY_LEVEL:
        raise FactoryError(f"Enemy level must be at least {MIN_ENEMY_LEVEL}, got {level}.")
    return scale_enemy(template, level=level)


def radroach(level: int, enemies_repo: EnemiesRepository | None = None) -> Enemy:
    return create_enemy("radroach", level, enemies_repo)


def raider(level: int, enemies_repo: EnemiesRepository | None = None) -> Enemy:
    return create_enemy("raider", level, enemies_repo)


def super_mutant(level: int, enemies_repo: EnemiesRepository | None = None) -> Enemy:
    return create_enemy("super_mutant", level, enemies_repo)


def deathclaw(level: int, enemies_repo: EnemiesRepository | None = None) -> Enemy:
    return create_enemy("deathclaw", level, enemies_repo)
