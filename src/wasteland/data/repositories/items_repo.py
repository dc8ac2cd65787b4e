"""Item catalogue repository."""
from __future__ import annotations

from dataclasses import replace
from typing import Dict

from wasteland.data.errors import DataValidationError
from wasteland.data.repositories.base import RepositoryBase
from wasteland.data.schema import require_exact_keys, require_str
from wasteland.domain.items import (
    DEFAULT_ARMOR_WEIGHT,
    DEFAULT_CONSUMABLE_WEIGHT,
    DEFAULT_WEAPON_WEIGHT,
    Item,
    armor_class_for,
    item_from_dict,
)

_DEFAULT_WEIGHTS = {
    "weapon": DEFAULT_WEAPON_WEIGHT,
    "armor": DEFAULT_ARMOR_WEIGHT,
    "consumable": DEFAULT_CONSUMABLE_WEIGHT,
}
_CATALOGUE_FIELDS = {
    "weapon": {"damage", "damage_type", "weapon_class", "ap_cost"},
    "armor": {"damage_resistance", "radiation_resistance"},
    "consumable": {"effect"},
}


class ItemsRepository(RepositoryBase[Item]):
    """Loads the immutable item catalogue.

    Catalogue entries omit ``id``, ``quantity`` and ``armor_class``; the
    repository fills them in and then decodes through the save-file codec so
    both paths share one set of rules.
    """

    def __init__(self, base_path=None) -> None:
        super().__init__("items.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, Item]:
        items: Dict[str, Item] = {}
        for raw_id, payload in raw.items():
            context = f"items.{raw_id}"
            item_data = self._require_mapping(payload, context)
            item_type = require_str(item_data.get("type"), f"{context}.type")
            if item_type not in _CATALOGUE_FIELDS:
                raise DataValidationError(f"{context}.type", f"unknown item type '{item_type}'")
            require_exact_keys(
                item_data,
                {"type", "name", "value"} | _CATALOGUE_FIELDS[item_type],
                context,
                optional={"description", "weight"},
            )
            full = dict(item_data)
            full["id"] = raw_id
            full["quantity"] = 1
            full.setdefault("description", "")
            full.setdefault("weight", _DEFAULT_WEIGHTS[item_type])
            if item_type == "armor":
                resistance = full.get("damage_resistance")
                if isinstance(resistance, int) and not isinstance(resistance, bool):
                    full["armor_class"] = armor_class_for(resistance)
                else:
                    full["armor_class"] = 0
            items[raw_id] = item_from_dict(full, context)
        return items

    def create(self, item_id: str, quantity: int = 1) -> Item:
        """Return a fresh, independently owned copy of a catalogue item."""
        template = self.get(item_id)
        return replace(template, quantity=quantity)
