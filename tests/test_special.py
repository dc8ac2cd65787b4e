from __future__ import annotations

import pytest

from wasteland.domain.entities import SKILL_TABLE, STAT_NAMES, Skills, Special


def test_default_special_is_all_fives() -> None:
    special = Special()
    assert special.as_tuple() == (5,) * 7
    assert special.total_points() == 35


def test_from_values_follows_special_order() -> None:
    special = Special.from_values([6, 5, 5, 6, 7, 5, 6])
    assert special.strength == 6
    assert special.charisma == 6
    assert special.intelligence == 7
    assert special.luck == 6
    assert special.total_points() == 40


def test_from_values_rejects_wrong_length() -> None:
    with pytest.raises(ValueError):
        Special.from_values([5, 5, 5])


def test_get_unknown_stat_raises() -> None:
    with pytest.raises(KeyError):
        Special().get("charm")


def test_skill_table_covers_every_skill_field() -> None:
    assert set(SKILL_TABLE) == set(Skills().to_dict())
    for _, terms in SKILL_TABLE.values():
        for stat, _ in terms:
            assert stat in STAT_NAMES


def test_skills_from_reference_special() -> None:
    skills = Skills.from_special(Special.from_values([6, 5, 5, 6, 7, 5, 6]))
    assert skills.to_dict() == {
        "small_guns": 25,
        "big_guns": 10,
        "energy_weapons": 10,
        "unarmed": 52,
        "melee_weapons": 42,
        "throwing": 20,
        "first_aid": 24,
        "doctor": 17,
        "sneak": 20,
        "lockpick": 20,
        "steal": 15,
        "traps": 20,
        "science": 28,
        "repair": 21,
        "speech": 30,
        "barter": 24,
        "gambling": 30,
        "outdoorsman": 12,
    }


def test_skills_are_pure_function_of_special() -> None:
    special = Special(strength=3, agility=9, luck=2)
    assert Skills.from_special(special) == Skills.from_special(Special(strength=3, agility=9, luck=2))
    assert Skills.from_special(special).small_guns == 5 + 4 * 9


def test_skill_get_unknown_name_is_zero() -> None:
    skills = Skills.from_special(Special())
    assert skills.get("small_guns") == 25
    assert skills.get("explosives") == 0
