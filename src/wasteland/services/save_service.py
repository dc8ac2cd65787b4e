"""Serialization of a GameState to and from a validated save payload."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

from wasteland.core.validation import ValidationError, validate_character_name, validate_special_stat
from wasteland.data.errors import DataDecodeError, DataEncodeError
from wasteland.data.schema import (
    optional_str,
    require_bool,
    require_exact_keys,
    require_int,
    require_list,
    require_mapping,
    require_str,
    require_str_list,
)
from wasteland.domain.combat import CombatEncounter
from wasteland.domain.conversation import Conversation
from wasteland.domain.dice import is_valid_dice
from wasteland.domain.entities import SKILL_TABLE, STAT_NAMES, Character, Enemy, Skills, Special
from wasteland.domain.items import item_from_dict, item_to_dict
from wasteland.domain.state import GameState
from wasteland.domain.worldbook import Worldbook

logger = logging.getLogger(__name__)

SavePayload = Dict[str, Any]

_STATE_KEYS = frozenset(
    {"character", "combat", "worldbook", "conversation", "story", "location", "day", "quest_log"}
)
_CHARACTER_KEYS = frozenset(
    {
        "name",
        "special",
        "skills",
        "level",
        "experience",
        "max_hp",
        "current_hp",
        "max_ap",
        "current_ap",
        "caps",
        "inventory",
        "equipped_weapon",
        "equipped_armor",
    }
)
_COMBAT_KEYS = frozenset({"active", "enemies", "round", "turn"})
_ENEMY_KEYS = frozenset(
    {"name", "level", "max_hp", "current_hp", "armor_class", "skill", "damage", "ap", "xp_reward", "strength"}
)


class SaveService:
    """Converts runtime state to/from a validated, versioned payload.

    Decoding re-checks every state invariant and recomputes derived values
    (armor class, skills, max AP); any mismatch is a DataDecodeError.
    """

    SAVE_VERSION = 1

    def serialize(self, state: GameState) -> SavePayload:
        """Return a JSON-serializable payload for disk persistence.

        A state that breaks an invariant is refused so that every written save
        can be loaded back.
        """
        problems = state.check_invariants()
        if problems:
            raise DataEncodeError(f"Refusing to save inconsistent state: {problems[0]}")
        return {
            "save_version": self.SAVE_VERSION,
            "character": self._serialize_character(state.character),
            "combat": self._serialize_combat(state.combat),
            "worldbook": state.worldbook.to_dict(),
            "conversation": state.conversation.to_dict(),
            "story": list(state.story),
            "location": state.location,
            "day": state.day,
            "quest_log": list(state.quest_log),
        }

    def deserialize(self, payload: Mapping[str, Any]) -> GameState:
        """Rehydrate a GameState from a persisted payload."""
        data = require_mapping(payload, "save")
        require_exact_keys(data, _STATE_KEYS, "save", optional={"save_version"})
        version = data.get("save_version", self.SAVE_VERSION)
        if version != self.SAVE_VERSION:
            raise DataDecodeError("save.save_version", f"unsupported version {version!r}")

        state = GameState(
            character=self._coerce_character(data["character"], "character"),
            combat=self._coerce_combat(data["combat"], "combat"),
            worldbook=Worldbook.from_dict(data["worldbook"], "worldbook"),
            conversation=Conversation.from_dict(data["conversation"], "conversation"),
            story=require_str_list(data["story"], "story"),
            location=require_str(data["location"], "location"),
            day=require_int(data["day"], "day", minimum=1),
            quest_log=require_str_list(data["quest_log"], "quest_log"),
        )
        problems = state.check_invariants()
        if problems:
            raise DataDecodeError("save", problems[0])
        logger.debug("Decoded save for %s on day %d", state.character.name, state.day)
        return state

    # ---- Encoding ----

    @staticmethod
    def _serialize_character(character: Character) -> Dict[str, Any]:
        return {
            "name": character.name,
            "special": character.special.to_dict(),
            "skills": character.skills.to_dict(),
            "level": character.level,
            "experience": character.experience,
            "max_hp": character.max_hp,
            "current_hp": character.current_hp,
            "max_ap": character.max_ap,
            "current_ap": character.current_ap,
            "caps": character.caps,
            "inventory": [item_to_dict(item) for item in character.inventory],
            "equipped_weapon": character.equipped_weapon,
            "equipped_armor": character.equipped_armor,
        }

    @staticmethod
    def _serialize_combat(combat: CombatEncounter) -> Dict[str, Any]:
        return {
            "active": combat.active,
            "round": combat.round,
            "turn": combat.turn,
            "enemies": [
                {
                    "name": enemy.name,
                    "level": enemy.level,
                    "max_hp": enemy.max_hp,
                    "current_hp": enemy.current_hp,
                    "armor_class": enemy.armor_class,
                    "skill": enemy.skill,
                    "damage": enemy.damage,
                    "ap": enemy.ap,
                    "xp_reward": enemy.xp_reward,
                    "strength": enemy.strength,
                }
                for enemy in combat.enemies
            ],
        }

    # ---- Decoding ----

    def _coerce_character(self, value: Any, context: str) -> Character:
        data = require_mapping(value, context)
        require_exact_keys(data, _CHARACTER_KEYS, context)
        name = require_str(data["name"], f"{context}.name")
        try:
            validate_character_name(name)
        except ValidationError as exc:
            raise DataDecodeError(f"{context}.name", str(exc)) from exc

        inventory = [
            item_from_dict(entry, f"{context}.inventory[{index}]")
            for index, entry in enumerate(require_list(data["inventory"], f"{context}.inventory"))
        ]
        return Character(
            name=name,
            special=self._coerce_special(data["special"], f"{context}.special"),
            skills=self._coerce_skills(data["skills"], f"{context}.skills"),
            level=require_int(data["level"], f"{context}.level", minimum=1),
            experience=require_int(data["experience"], f"{context}.experience", minimum=0),
            max_hp=require_int(data["max_hp"], f"{context}.max_hp", minimum=1),
            current_hp=require_int(data["current_hp"], f"{context}.current_hp"),
            max_ap=require_int(data["max_ap"], f"{context}.max_ap", minimum=0),
            current_ap=require_int(data["current_ap"], f"{context}.current_ap"),
            caps=require_int(data["caps"], f"{context}.caps", minimum=0),
            inventory=inventory,
            equipped_weapon=optional_str(data["equipped_weapon"], f"{context}.equipped_weapon"),
            equipped_armor=optional_str(data["equipped_armor"], f"{context}.equipped_armor"),
        )

    @staticmethod
    def _coerce_special(value: Any, context: str) -> Special:
        data = require_mapping(value, context)
        require_exact_keys(data, set(STAT_NAMES), context)
        values: List[int] = []
        for stat in STAT_NAMES:
            stat_value = require_int(data[stat], f"{context}.{stat}")
            try:
                validate_special_stat(stat, stat_value)
            except ValidationError as exc:
                raise DataDecodeError(f"{context}.{stat}", str(exc)) from exc
            values.append(stat_value)
        return Special.from_values(values)

    @staticmethod
    def _coerce_skills(value: Any, context: str) -> Skills:
        data = require_mapping(value, context)
        require_exact_keys(data, set(SKILL_TABLE), context)
        return Skills(**{skill: require_int(data[skill], f"{context}.{skill}") for skill in SKILL_TABLE})

    def _coerce_combat(self, value: Any, context: str) -> CombatEncounter:
        data = require_mapping(value, context)
        require_exact_keys(data, _COMBAT_KEYS, context)
        enemies = [
            self._coerce_enemy(entry, f"{context}.enemies[{index}]")
            for index, entry in enumerate(require_list(data["enemies"], f"{context}.enemies"))
        ]
        return CombatEncounter(
            active=require_bool(data["active"], f"{context}.active"),
            enemies=enemies,
            round=require_int(data["round"], f"{context}.round", minimum=0),
            turn=require_int(data["turn"], f"{context}.turn", minimum=0),
        )

    @staticmethod
    def _coerce_enemy(value: Any, context: str) -> Enemy:
        data = require_mapping(value, context)
        require_exact_keys(data, _ENEMY_KEYS, context)
        damage = require_str(data["damage"], f"{context}.damage")
        if not is_valid_dice(damage):
            raise DataDecodeError(f"{context}.damage", f"invalid dice expression '{damage}'")
        return Enemy(
            name=require_str(data["name"], f"{context}.name"),
            level=require_int(data["level"], f"{context}.level", minimum=1),
            max_hp=require_int(data["max_hp"], f"{context}.max_hp", minimum=1),
            current_hp=require_int(data["current_hp"], f"{context}.current_hp"),
            armor_class=require_int(data["armor_class"], f"{context}.armor_class", minimum=0),
            skill=require_int(data["skill"], f"{context}.skill", minimum=0),
            damage=damage,
            ap=require_int(data["ap"], f"{context}.ap", minimum=0),
            xp_reward=require_int(data["xp_reward"], f"{context}.xp_reward", minimum=0),
            strength=require_int(data["strength"], f"{context}.strength"),
        )
