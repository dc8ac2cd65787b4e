from __future__ import annotations

import dataclasses

import pytest

from wasteland.data.errors import DataDecodeError
from wasteland.domain.items import (
    ArmorStats,
    Chem,
    DamageType,
    Food,
    Healing,
    Item,
    RadAway,
    WeaponClass,
    WeaponStats,
    armor_class_for,
    item_from_dict,
    item_to_dict,
)


def _pistol() -> Item:
    return Item.weapon("10mm_pistol", "10mm Pistol", "1d10+2", ap_cost=4, value=150)


@pytest.mark.parametrize("resistance", range(0, 50))
def test_armor_class_is_derived_from_damage_resistance(resistance: int) -> None:
    stats = ArmorStats(damage_resistance=resistance)
    assert stats.armor_class == 5 + resistance // 2
    assert stats.armor_class == armor_class_for(resistance)


def test_armor_stats_are_frozen() -> None:
    stats = ArmorStats(damage_resistance=10)
    with pytest.raises(dataclasses.FrozenInstanceError):
        stats.armor_class = 99  # type: ignore[misc]


def test_armor_class_cannot_be_passed_in() -> None:
    with pytest.raises(TypeError):
        ArmorStats(damage_resistance=10, armor_class=3)  # type: ignore[call-arg]


def test_named_constructors_pick_kind_and_defaults() -> None:
    weapon = _pistol()
    armor = Item.armor("leather_armor", "Leather Armor", 5)
    stimpak = Item.consumable("stimpak", "Stimpak", Healing(30))

    assert weapon.is_weapon and weapon.type_tag == "weapon"
    assert isinstance(weapon.kind, WeaponStats)
    assert weapon.kind.damage_type is DamageType.NORMAL
    assert weapon.weight == 3.0
    assert armor.is_armor and armor.type_tag == "armor"
    assert armor.kind.armor_class == 7  # type: ignore[union-attr]
    assert armor.weight == 8.0
    assert stimpak.is_consumable and stimpak.type_tag == "consumable"
    assert stimpak.weight == 0.5


def test_item_to_dict_flattens_payload_next_to_type() -> None:
    payload = item_to_dict(Item.armor("metal_armor", "Metal Armor", 10, radiation_resistance=5))
    assert payload["type"] == "armor"
    assert payload["damage_resistance"] == 10
    assert payload["radiation_resistance"] == 5
    assert payload["armor_class"] == 10
    assert "kind" not in payload


def test_consumable_effects_serialize_with_kind_tag() -> None:
    effects = [Healing(30), RadAway(50), Chem("Buffout", "strength", 2, 300), Food(15, 20)]
    kinds = [item_to_dict(Item.consumable("x", "X", effect))["effect"]["kind"] for effect in effects]
    assert kinds == ["healing", "radaway", "chem", "food"]


def test_item_from_dict_restores_equal_items() -> None:
    items = [
        _pistol(),
        Item.weapon("laser_rifle", "Laser Rifle", "2d10+6", damage_type=DamageType.LASER,
                    weapon_class=WeaponClass.ENERGY_WEAPON, ap_cost=5, weight=7.0),
        Item.armor("combat_armor", "Combat Armor", 15, radiation_resistance=10, quantity=2),
        Item.consumable("buffout", "Buffout", Chem("Buffout", "strength", 2, 300)),
    ]
    for item in items:
        assert item_from_dict(item_to_dict(item)) == item


def test_unknown_type_tag_is_rejected() -> None:
    payload = item_to_dict(_pistol())
    payload["type"] = "grenade"
    with pytest.raises(DataDecodeError) as excinfo:
        item_from_dict(payload)
    assert excinfo.value.location == "item.type"


def test_tampered_armor_class_is_rejected() -> None:
    payload = item_to_dict(Item.armor("leather_armor", "Leather Armor", 5))
    payload["armor_class"] = 50
    with pytest.raises(DataDecodeError) as excinfo:
        item_from_dict(payload, "character.inventory[4]")
    assert excinfo.value.location == "character.inventory[4].armor_class"


def test_unknown_field_is_rejected() -> None:
    payload = item_to_dict(_pistol())
    payload["durability"] = 100
    with pytest.raises(DataDecodeError, match="unknown keys"):
        item_from_dict(payload)


def test_missing_field_is_rejected() -> None:
    payload = item_to_dict(_pistol())
    del payload["ap_cost"]
    with pytest.raises(DataDecodeError, match="missing keys"):
        item_from_dict(payload)


def test_invalid_dice_is_rejected() -> None:
    payload = item_to_dict(_pistol())
    payload["damage"] = "lots"
    with pytest.raises(DataDecodeError) as excinfo:
        item_from_dict(payload)
    assert excinfo.value.location == "item.damage"


def test_unknown_enum_value_is_rejected() -> None:
    payload = item_to_dict(_pistol())
    payload["damage_type"] = "sonic"
    with pytest.raises(DataDecodeError) as excinfo:
        item_from_dict(payload)
    assert excinfo.value.location == "item.damage_type"


def test_unknown_consumable_effect_is_rejected() -> None:
    payload = item_to_dict(Item.consumable("stimpak", "Stimpak", Healing(30)))
    payload["effect"] = {"kind": "teleport", "amount": 1}
    with pytest.raises(DataDecodeError) as excinfo:
        item_from_dict(payload)
    assert excinfo.value.location == "item.effect.kind"


def test_items_compare_structurally() -> None:
    assert _pistol() == _pistol()
    assert _pistol() != dataclasses.replace(_pistol(), quantity=2)


@pytest.mark.parametrize(
    "build",
    [
        lambda: Item.weapon("pipe", "Lead Pipe", "d6"),
        lambda: Item.weapon("pipe", "Lead Pipe", "1d6", ap_cost=0),
        lambda: Item.armor("rags", "Rags", -1),
        lambda: Item.armor("rags", "Rags", 1, radiation_resistance=-5),
        lambda: Item.consumable("stimpak", "Stimpak", Healing(30), quantity=0),
        lambda: Item.consumable("stimpak", "Stimpak", Healing(-30)),
        lambda: Item.consumable("iguana", "Iguana-on-a-stick", Food(-1, 20)),
        lambda: Item.consumable("buffout", "Buffout", Chem("Buffout", "strength", 2, -1)),
        lambda: Item.weapon("pipe", "Lead Pipe", "1d6", value=-10),
    ],
)
def test_named_constructors_reject_values_the_decoder_rejects(build) -> None:
    with pytest.raises(ValueError):
        build()


def test_decoder_accepts_everything_the_constructors_build() -> None:
    payload = item_to_dict(Item.weapon("pipe", "Lead Pipe", "1d6", ap_cost=1, value=0, weight=0.0))
    assert item_from_dict(payload).kind.ap_cost == 1  # type: ignore[union-attr]
