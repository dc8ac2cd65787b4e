"""Player character model."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import List

from wasteland.core.validation import (
    ValidationError,
    validate_character_name,
    validate_special_stat,
    validate_special_values,
)
from wasteland.domain.errors import RuleError
from wasteland.domain.items import (
    ArmorStats,
    ConsumableStats,
    Food,
    Healing,
    Item,
    RadAway,
    WeaponClass,
    WeaponStats,
)

from .skills import Skills
from .special import STAT_NAMES, Special

logger = logging.getLogger(__name__)

BASE_HP = 15
BASE_AP = 5
XP_PER_LEVEL = 1000
LEVEL_UP_BASE_HP = 5
DEFAULT_CAPS = 500
BASE_DEFENSE = 10
UNARMED_DAMAGE = "1d4"

WEAPON_CLASS_SKILLS = {
    WeaponClass.SMALL_GUN: "small_guns",
    WeaponClass.BIG_GUN: "big_guns",
    WeaponClass.ENERGY_WEAPON: "energy_weapons",
    WeaponClass.MELEE: "melee_weapons",
    WeaponClass.UNARMED: "unarmed",
    WeaponClass.THROWING: "throwing",
    WeaponClass.EXPLOSIVE: "throwing",
}


def derive_max_hp(special: Special) -> int:
    return BASE_HP + special.strength + 2 * special.endurance


def derive_max_ap(special: Special) -> int:
    return BASE_AP + special.agility // 2


def level_up_hp_gain(special: Special) -> int:
    return LEVEL_UP_BASE_HP + special.endurance


@dataclass(slots=True)
class ConsumableResult:
    """Outcome of using one consumable from the inventory."""

    item_id: str
    message: str
    hp_restored: int = 0


@dataclass(slots=True)
class Character:
    """The player character. Owns its inventory; equipment slots hold item ids."""

    name: str
    special: Special
    skills: Skills
    max_hp: int
    current_hp: int
    max_ap: int
    current_ap: int
    level: int = 1
    experience: int = 0
    caps: int = DEFAULT_CAPS
    inventory: List[Item] = field(default_factory=list)
    equipped_weapon: str | None = None
    equipped_armor: str | None = None

    @classmethod
    def create(cls, name: str, special: Special, *, caps: int = DEFAULT_CAPS) -> "Character":
        """Build a level 1 character with every derived stat filled from SPECIAL."""
        validate_character_name(name)
        validate_special_values((stat, special.get(stat)) for stat in STAT_NAMES)
        max_hp = derive_max_hp(special)
        max_ap = derive_max_ap(special)
        return cls(
            name=name,
            special=replace(special),
            skills=Skills.from_special(special),
            max_hp=max_hp,
            current_hp=max_hp,
            max_ap=max_ap,
            current_ap=max_ap,
            caps=caps,
        )

    # ---- Health and action points ----

    def is_alive(self) -> bool:
        return self.current_hp > 0

    def take_damage(self, amount: int) -> None:
        """Apply damage that has already been reduced by armor."""
        self.current_hp = max(0, self.current_hp - max(0, amount))

    def heal(self, amount: int) -> int:
        """Restore HP up to the maximum; returns the amount actually restored."""
        before = self.current_hp
        self.current_hp = min(self.max_hp, self.current_hp + max(0, amount))
        return self.current_hp - before

    def use_ap(self, amount: int) -> bool:
        if amount < 0 or self.current_ap < amount:
            return False
        self.current_ap -= amount
        return True

    def regen_ap(self, amount: int) -> None:
        self.current_ap = min(self.max_ap, self.current_ap + max(0, amount))

    def restore_ap(self) -> None:
        self.current_ap = self.max_ap

    # ---- Experience ----

    def add_experience(self, amount: int) -> int:
        """Accumulate experience and apply every level-up it unlocks.

        Returns the number of levels gained. Each level adds ``5 + endurance``
        max HP and restores HP to full.
        """
        if amount < 0:
            raise RuleError("Experience cannot be negative.")
        self.experience += amount
        gained = 0
        while self.experience >= XP_PER_LEVEL * self.level:
            self.level += 1
            self.max_hp += level_up_hp_gain(self.special)
            gained += 1
        if gained:
            self.current_hp = self.max_hp
            logger.debug("%s reached level %d", self.name, self.level)
        return gained

    def experience_to_next_level(self) -> int:
        return XP_PER_LEVEL * self.level - self.experience

    # ---- Inventory ----

    def find_item(self, item_id: str) -> Item | None:
        for item in self.inventory:
            if item.id == item_id:
                return item
        return None

    def add_item(self, item: Item) -> None:
        """Add an item, stacking onto an existing entry with the same id."""
        if item.quantity < 1:
            raise RuleError(f"Cannot add {item.quantity} of '{item.id}'.")
        existing = self.find_item(item.id)
        if existing is not None:
            existing.quantity += item.quantity
            return
        self.inventory.append(replace(item))

    def remove_item(self, item_id: str, quantity: int = 1) -> bool:
        """Remove ``quantity`` units; the entry is dropped (and unequipped) at zero."""
        existing = self.find_item(item_id)
        if existing is None or quantity < 1 or existing.quantity < quantity:
            return False
        existing.quantity -= quantity
        if existing.quantity == 0:
            self.inventory.remove(existing)
            if self.equipped_weapon == item_id:
                self.equipped_weapon = None
            if self.equipped_armor == item_id:
                self.equipped_armor = None
        return True

    def equip_weapon(self, item_id: str) -> None:
        item = self._require_item(item_id)
        if not item.is_weapon:
            raise RuleError(f"'{item.name}' is not a weapon.")
        self.equipped_weapon = item_id

    def equip_armor(self, item_id: str) -> None:
        item = self._require_item(item_id)
        if not item.is_armor:
            raise RuleError(f"'{item.name}' is not armor.")
        self.equipped_armor = item_id

    def unequip_weapon(self) -> None:
        self.equipped_weapon = None

    def unequip_armor(self) -> None:
        self.equipped_armor = None

    def use_consumable(self, item_id: str) -> ConsumableResult:
        """Consume one unit of a consumable and apply its effect."""
        item = self._require_item(item_id)
        if not isinstance(item.kind, ConsumableStats):
            raise RuleError(f"'{item.name}' is not consumable.")
        effect = item.kind.effect
        restored = 0
        if isinstance(effect, Healing):
            restored = self.heal(effect.amount)
            message = f"Healed {restored} HP"
        elif isinstance(effect, Food):
            restored = self.heal(effect.hp)
            message = f"Recovered {restored} HP"
        elif isinstance(effect, RadAway):
            message = f"Removed {effect.amount} rads"
        else:
            message = f"Gained +{effect.magnitude} {effect.stat} for {effect.duration} rounds"
        self.remove_item(item_id, 1)
        return ConsumableResult(item_id=item_id, message=message, hp_restored=restored)

    # ---- Equipment-derived values ----

    def equipped_weapon_stats(self) -> WeaponStats | None:
        if self.equipped_weapon is None:
            return None
        item = self.find_item(self.equipped_weapon)
        if item is None or not isinstance(item.kind, WeaponStats):
            return None
        return item.kind

    def equipped_armor_stats(self) -> ArmorStats | None:
        if self.equipped_armor is None:
            return None
        item = self.find_item(self.equipped_armor)
        if item is None or not isinstance(item.kind, ArmorStats):
            return None
        return item.kind

    def equipped_damage(self) -> str:
        weapon = self.equipped_weapon_stats()
        return weapon.damage if weapon is not None else UNARMED_DAMAGE

    def weapon_skill(self) -> int:
        weapon = self.equipped_weapon_stats()
        if weapon is None:
            return self.skills.unarmed
        return self.skills.get(WEAPON_CLASS_SKILLS[weapon.weapon_class])

    def damage_resistance(self) -> int:
        armor = self.equipped_armor_stats()
        return armor.damage_resistance if armor is not None else 0

    def defense_class(self) -> int:
        """Target number enemies roll against."""
        return BASE_DEFENSE + self.special.agility

    # ---- Consistency ----

    def check_invariants(self) -> List[str]:
        """Return a description of every broken invariant (empty when valid)."""
        problems: List[str] = []
        try:
            validate_character_name(self.name)
        except ValidationError as exc:
            problems.append(str(exc))
        for stat in STAT_NAMES:
            try:
                validate_special_stat(stat, self.special.get(stat))
            except ValidationError as exc:
                problems.append(str(exc))
        if self.level < 1:
            problems.append("level must be at least 1")
        if self.experience < 0:
            problems.append("experience must be non-negative")
        if self.caps < 0:
            problems.append("caps must be non-negative")
        if self.max_hp < 1:
            problems.append("max_hp must be at least 1")
        if not 0 <= self.current_hp <= self.max_hp:
            problems.append(f"current_hp {self.current_hp} outside 0..{self.max_hp}")
        if self.max_ap != derive_max_ap(self.special):
            problems.append(f"max_ap {self.max_ap} does not match SPECIAL")
        if not 0 <= self.current_ap <= self.max_ap:
            problems.append(f"current_ap {self.current_ap} outside 0..{self.max_ap}")
        if self.skills != Skills.from_special(self.special):
            problems.append("skills do not match SPECIAL")
        seen: set[str] = set()
        for item in self.inventory:
            if item.id in seen:
                problems.append(f"inventory holds '{item.id}' twice")
            if item.quantity < 1:
                problems.append(f"inventory holds {item.quantity} of '{item.id}'")
            seen.add(item.id)
        if self.equipped_weapon is not None:
            weapon = self.find_item(self.equipped_weapon)
            if weapon is None or not weapon.is_weapon:
                problems.append(f"equipped weapon '{self.equipped_weapon}' is not a weapon in inventory")
        if self.equipped_armor is not None:
            armor = self.find_item(self.equipped_armor)
            if armor is None or not armor.is_armor:
                problems.append(f"equipped armor '{self.equipped_armor}' is not armor in inventory")
        return problems

    def _require_item(self, item_id: str) -> Item:
        item = self.find_item(item_id)
        if item is None:
            raise RuleError(f"Item '{item_id}' not found in inventory.")
        return item
