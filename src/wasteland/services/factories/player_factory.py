"""Factory for creating new player characters."""
from __future__ import annotations

import logging

from wasteland.config import GameConfig
from wasteland.data.repositories import ItemsRepository
from wasteland.domain.entities import Character, Special
from wasteland.services.errors import FactoryError

logger = logging.getLogger(__name__)

STARTING_KIT: tuple[str, ...] = ("10mm_pistol", "baseball_bat", "stimpak", "radaway", "leather_armor")
STARTING_WEAPON_ID = "10mm_pistol"


def create_character(
    name: str,
    special: Special | None = None,
    *,
    items_repo: ItemsRepository | None = None,
    config: GameConfig | None = None,
) -> Character:
    """Validate the name and SPECIAL spread, then build a level 1 character with the starting kit."""
    special = special if special is not None else Special()
    config = config or GameConfig()
    items_repo = items_repo or ItemsRepository()

    character = Character.create(name, special, caps=config.starting_caps)
    for item_id in STARTING_KIT:
        try:
            item = items_repo.create(item_id)
        except KeyError as exc:
            raise FactoryError(f"Starting item '{item_id}' not found in the item catalogue.") from exc
        character.add_item(item)
    character.equip_weapon(STARTING_WEAPON_ID)
    logger.debug("Created character %s with SPECIAL %s", name, special.as_tuple())
    return character
