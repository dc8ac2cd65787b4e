from __future__ import annotations

import pytest

from wasteland.data.repositories import EnemiesRepository
from wasteland.domain.defs import DamageScaling, EnemyTemplateDef, LinearStat
from wasteland.domain.enemy_scaling import scale_enemy
from wasteland.domain.errors import RuleError


def _template(**overrides: object) -> EnemyTemplateDef:
    fields = dict(
        id="mole_rat",
        name="Mole Rat",
        level_offset=0,
        hp=LinearStat(10, per_level=2),
        armor_class=LinearStat(9),
        skill=LinearStat(20, per_level=5, cap=30),
        strength=LinearStat(3),
        ap=LinearStat(5, per_level=1, step=2),
        xp=LinearStat(0, per_level=50),
        damage=DamageScaling(dice=LinearStat(1), die=4, bonus=LinearStat(0)),
    )
    fields.update(overrides)
    return EnemyTemplateDef(**fields)  # type: ignore[arg-type]


def test_linear_stat_applies_step_and_cap() -> None:
    stat = LinearStat(10, per_level=4, step=2, cap=12)
    assert [stat.at(level) for level in range(1, 9)] == [10, 14, 14, 18, 18, 22, 22, 22]


def test_damage_scaling_omits_zero_bonus() -> None:
    scaling = DamageScaling(dice=LinearStat(1, per_level=1, step=3), die=6, bonus=LinearStat(0, per_level=1))
    assert scaling.at(1) == "1d6+1"
    assert scaling.at(3) == "2d6+3"
    assert DamageScaling(dice=LinearStat(2), die=10, bonus=LinearStat(0)).at(5) == "2d10"


def test_scale_enemy_starts_at_full_health() -> None:
    enemy = scale_enemy(_template(), level=3)
    assert enemy.max_hp == 16
    assert enemy.current_hp == enemy.max_hp
    assert enemy.level == 3
    assert enemy.skill == 35


def test_level_offset_shifts_reported_level_only() -> None:
    enemy = scale_enemy(_template(level_offset=2, name="Mole Rat (Level {level})"), level=1)
    assert enemy.level == 3
    assert enemy.name == "Mole Rat (Level 3)"
    assert enemy.max_hp == 12


def test_scale_enemy_rejects_level_below_one() -> None:
    with pytest.raises(RuleError):
        scale_enemy(_template(), level=0)


def test_scale_enemy_returns_fresh_instances() -> None:
    first = scale_enemy(_template(), level=2)
    first.take_damage(5)
    assert scale_enemy(_template(), level=2).current_hp == 14


@pytest.mark.parametrize("template_id", ["radroach", "raider", "super_mutant", "deathclaw"])
def test_shipped_templates_never_weaken_with_level(template_id: str) -> None:
    template = EnemiesRepository().get(template_id)
    previous = scale_enemy(template, level=1)
    for level in range(2, 31):
        current = scale_enemy(template, level=level)
        assert current.max_hp >= previous.max_hp
        assert current.armor_class >= previous.armor_class
        assert current.skill >= previous.skill
        assert current.strength >= previous.strength
        assert current.ap >= previous.ap
        assert current.xp_reward >= previous.xp_reward
        previous = current
