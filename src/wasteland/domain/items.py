"""Item model: a shared envelope around a weapon, armor or consumable payload."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from wasteland.core.types import ItemTypeTag
from wasteland.data.errors import DataDecodeError
from wasteland.data.schema import (
    require_exact_keys,
    require_float,
    require_int,
    require_mapping,
    require_str,
)
from wasteland.domain.dice import is_valid_dice

DEFAULT_WEAPON_WEIGHT = 3.0
DEFAULT_ARMOR_WEIGHT = 8.0
DEFAULT_CONSUMABLE_WEIGHT = 0.5
ARMOR_CLASS_BASE = 5


class DamageType(Enum):
    NORMAL = "normal"
    LASER = "laser"
    PLASMA = "plasma"
    FIRE = "fire"
    EXPLOSIVE = "explosive"
    ELECTRIC = "electric"
    POISON = "poison"
    RADIATION = "radiation"


class WeaponClass(Enum):
    SMALL_GUN = "small_gun"
    BIG_GUN = "big_gun"
    ENERGY_WEAPON = "energy_weapon"
    MELEE = "melee"
    UNARMED = "unarmed"
    THROWING = "throwing"
    EXPLOSIVE = "explosive"


def armor_class_for(damage_resistance: int) -> int:
    """Armor class is a pure function of damage resistance."""
    return ARMOR_CLASS_BASE + damage_resistance // 2


def _require_non_negative(**values: float) -> None:
    for name, value in values.items():
        if value < 0:
            raise ValueError(f"{name} cannot be negative, got {value}")


@dataclass(frozen=True, slots=True)
class WeaponStats:
    damage: str
    damage_type: DamageType
    weapon_class: WeaponClass
    ap_cost: int

    def __post_init__(self) -> None:
        if not is_valid_dice(self.damage):
            raise ValueError(f"Invalid dice expression: {self.damage!r}")
        if self.ap_cost < 1:
            raise ValueError(f"AP cost must be at least 1, got {self.ap_cost}")


@dataclass(frozen=True, slots=True)
class ArmorStats:
    """Armor payload; ``armor_class`` is computed once from DR and frozen."""

    damage_resistance: int
    radiation_resistance: int = 0
    armor_class: int = field(init=False)

    def __post_init__(self) -> None:
        if self.damage_resistance < 0 or self.radiation_resistance < 0:
            raise ValueError("Resistances cannot be negative")
        object.__setattr__(self, "armor_class", armor_class_for(self.damage_resistance))


@dataclass(frozen=True, slots=True)
class Healing:
    amount: int

    def __post_init__(self) -> None:
        _require_non_negative(amount=self.amount)


@dataclass(frozen=True, slots=True)
class RadAway:
    amount: int

    def __post_init__(self) -> None:
        _require_non_negative(amount=self.amount)


@dataclass(frozen=True, slots=True)
class Chem:
    name: str
    stat: str
    magnitude: int
    duration: int

    def __post_init__(self) -> None:
        _require_non_negative(duration=self.duration)


@dataclass(frozen=True, slots=True)
class Food:
    hp: int
    hunger: int

    def __post_init__(self) -> None:
        _require_non_negative(hp=self.hp, hunger=self.hunger)


ConsumableEffect = Healing | RadAway | Chem | Food


@dataclass(frozen=True, slots=True)
class ConsumableStats:
    effect: ConsumableEffect


ItemKind = WeaponStats | ArmorStats | ConsumableStats


@dataclass(slots=True)
class Item:
    """An inventory entry. Entries with the same id stack by quantity."""

    id: str
    name: str
    description: str
    weight: float
    value: int
    quantity: int
    kind: ItemKind

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError(f"Quantity of '{self.id}' must be at least 1, got {self.quantity}")
        _require_non_negative(weight=self.weight, value=self.value)

    @classmethod
    def weapon(
        cls,
        item_id: str,
        name: str,
        damage: str,
        *,
        damage_type: DamageType = DamageType.NORMAL,
        weapon_class: WeaponClass = WeaponClass.SMALL_GUN,
        ap_cost: int = 4,
        description: str = "",
        weight: float = DEFAULT_WEAPON_WEIGHT,
        value: int = 0,
        quantity: int = 1,
    ) -> "Item":
        stats = WeaponStats(damage=damage, damage_type=damage_type, weapon_class=weapon_class, ap_cost=ap_cost)
        return cls(item_id, name, description, weight, value, quantity, stats)

    @classmethod
    def armor(
        cls,
        item_id: str,
        name: str,
        damage_resistance: int,
        *,
        radiation_resistance: int = 0,
        description: str = "",
        weight: float = DEFAULT_ARMOR_WEIGHT,
        value: int = 0,
        quantity: int = 1,
    ) -> "Item":
        stats = ArmorStats(damage_resistance=damage_resistance, radiation_resistance=radiation_resistance)
        return cls(item_id, name, description, weight, value, quantity, stats)

    @classmethod
    def consumable(
        cls,
        item_id: str,
        name: str,
        effect: ConsumableEffect,
        *,
        description: str = "",
        weight: float = DEFAULT_CONSUMABLE_WEIGHT,
        value: int = 0,
        quantity: int = 1,
    ) -> "Item":
        return cls(item_id, name, description, weight, value, quantity, ConsumableStats(effect))

    @property
    def type_tag(self) -> ItemTypeTag:
        if isinstance(self.kind, WeaponStats):
            return "weapon"
        if isinstance(self.kind, ArmorStats):
            return "armor"
        return "consumable"

    @property
    def is_weapon(self) -> bool:
        return isinstance(self.kind, WeaponStats)

    @property
    def is_armor(self) -> bool:
        return isinstance(self.kind, ArmorStats)

    @property
    def is_consumable(self) -> bool:
        return isinstance(self.kind, ConsumableStats)


# ---- Serialization ----

_ENVELOPE_KEYS = frozenset({"id", "name", "description", "weight", "value", "quantity", "type"})
_BODY_KEYS: Dict[str, frozenset[str]] = {
    "weapon": frozenset({"damage", "damage_type", "weapon_class", "ap_cost"}),
    "armor": frozenset({"damage_resistance", "radiation_resistance", "armor_class"}),
    "consumable": frozenset({"effect"}),
}
_EFFECT_KEYS: Dict[str, frozenset[str]] = {
    "healing": frozenset({"kind", "amount"}),
    "radaway": frozenset({"kind", "amount"}),
    "chem": frozenset({"kind", "name", "stat", "magnitude", "duration"}),
    "food": frozenset({"kind", "hp", "hunger"}),
}


def item_to_dict(item: Item) -> Dict[str, Any]:
    """Flatten the payload fields next to the ``type`` tag."""
    payload: Dict[str, Any] = {
        "id": item.id,
        "name": item.name,
        "description": item.description,
        "weight": item.weight,
        "value": item.value,
        "quantity": item.quantity,
        "type": item.type_tag,
    }
    kind = item.kind
    if isinstance(kind, WeaponStats):
        payload.update(
            damage=kind.damage,
            damage_type=kind.damage_type.value,
            weapon_class=kind.weapon_class.value,
            ap_cost=kind.ap_cost,
        )
    elif isinstance(kind, ArmorStats):
        payload.update(
            damage_resistance=kind.damage_resistance,
            radiation_resistance=kind.radiation_resistance,
            armor_class=kind.armor_class,
        )
    else:
        payload["effect"] = _effect_to_dict(kind.effect)
    return payload


def item_from_dict(value: Any, location: str = "item") -> Item:
    """Decode an item, rejecting unknown tags, unknown fields and a stale armor class."""
    payload = require_mapping(value, location)
    tag = require_str(payload.get("type"), f"{location}.type")
    if tag not in _BODY_KEYS:
        raise DataDecodeError(f"{location}.type", f"unknown item type '{tag}'")
    require_exact_keys(payload, _ENVELOPE_KEYS | _BODY_KEYS[tag], location)

    kind: ItemKind
    if tag == "weapon":
        damage = require_str(payload["damage"], f"{location}.damage")
        if not is_valid_dice(damage):
            raise DataDecodeError(f"{location}.damage", f"invalid dice expression '{damage}'")
        kind = WeaponStats(
            damage=damage,
            damage_type=_require_enum(DamageType, payload["damage_type"], f"{location}.damage_type"),
            weapon_class=_require_enum(WeaponClass, payload["weapon_class"], f"{location}.weapon_class"),
            ap_cost=require_int(payload["ap_cost"], f"{location}.ap_cost", minimum=1),
        )
    elif tag == "armor":
        kind = ArmorStats(
            damage_resistance=require_int(payload["damage_resistance"], f"{location}.damage_resistance", minimum=0),
            radiation_resistance=require_int(
                payload["radiation_resistance"], f"{location}.radiation_resistance", minimum=0
            ),
        )
        stored = require_int(payload["armor_class"], f"{location}.armor_class")
        if stored != kind.armor_class:
            raise DataDecodeError(
                f"{location}.armor_class",
                f"stored value {stored} does not match {kind.armor_class} derived from damage resistance",
            )
    else:
        kind = ConsumableStats(_effect_from_dict(payload["effect"], f"{location}.effect"))

    return Item(
        id=require_str(payload["id"], f"{location}.id"),
        name=require_str(payload["name"], f"{location}.name"),
        description=require_str(payload["description"], f"{location}.description"),
        weight=require_float(payload["weight"], f"{location}.weight", minimum=0.0),
        value=require_int(payload["value"], f"{location}.value", minimum=0),
        quantity=require_int(payload["quantity"], f"{location}.quantity", minimum=1),
        kind=kind,
    )


def _effect_to_dict(effect: ConsumableEffect) -> Dict[str, Any]:
    if isinstance(effect, Healing):
        return {"kind": "healing", "amount": effect.amount}
    if isinstance(effect, RadAway):
        return {"kind": "radaway", "amount": effect.amount}
    if isinstance(effect, Chem):
        return {
            "kind": "chem",
            "name": effect.name,
            "stat": effect.stat,
            "magnitude": effect.magnitude,
            "duration": effect.duration,
        }
    return {"kind": "food", "hp": effect.hp, "hunger": effect.hunger}


def _effect_from_dict(value: Any, location: str) -> ConsumableEffect:
    payload = require_mapping(value, location)
    kind = require_str(payload.get("kind"), f"{location}.kind")
    if kind not in _EFFECT_KEYS:
        raise DataDecodeError(f"{location}.kind", f"unknown consumable effect '{kind}'")
    require_exact_keys(payload, _EFFECT_KEYS[kind], location)
    if kind == "healing":
        return Healing(require_int(payload["amount"], f"{location}.amount", minimum=0))
    if kind == "radaway":
        return RadAway(require_int(payload["amount"], f"{location}.amount", minimum=0))
    if kind == "chem":
        return Chem(
            name=require_str(payload["name"], f"{location}.name"),
            stat=require_str(payload["stat"], f"{location}.stat"),
            magnitude=require_int(payload["magnitude"], f"{location}.magnitude"),
            duration=require_int(payload["duration"], f"{location}.duration", minimum=0),
        )
    return Food(
        hp=require_int(payload["hp"], f"{location}.hp", minimum=0),
        hunger=require_int(payload["hunger"], f"{location}.hunger", minimum=0),
    )


def _require_enum(enum_type: type[Enum], value: Any, location: str) -> Any:
    raw = require_str(value, location)
    try:
        return enum_type(raw)
    except ValueError as exc:
        raise DataDecodeError(location, f"unknown value '{raw}'") from exc
