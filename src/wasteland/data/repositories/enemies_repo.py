"""Enemy template repository."""
from __future__ import annotations

from typing import Dict

from wasteland.data.errors import DataValidationError
from wasteland.data.repositories.base import RepositoryBase
from wasteland.data.schema import require_exact_keys, require_int, require_mapping, require_str
from wasteland.domain.defs import DamageScaling, EnemyTemplateDef, LinearStat

_SCALED_FIELDS = ("hp", "armor_class", "skill", "strength", "ap", "xp")


class EnemiesRepository(RepositoryBase[EnemyTemplateDef]):
    """Loads and validates enemy templates.

    A scaled stat is either a plain integer (constant) or an object with
    ``base`` and optional ``per_level``, ``step`` and ``cap``. Negative
    ``per_level`` values are rejected so every template is monotonic in level.
    """

    def __init__(self, base_path=None) -> None:
        super().__init__("enemies.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, EnemyTemplateDef]:
        templates: Dict[str, EnemyTemplateDef] = {}
        for raw_id, payload in raw.items():
            context = f"enemies.{raw_id}"
            data = self._require_mapping(payload, context)
            require_exact_keys(data, {"name", "level_offset", "damage", *_SCALED_FIELDS}, context)
            scaled = {name: self._parse_linear(data[name], f"{context}.{name}") for name in _SCALED_FIELDS}
            templates[raw_id] = EnemyTemplateDef(
                id=raw_id,
                name=require_str(data["name"], f"{context}.name"),
                level_offset=require_int(data["level_offset"], f"{context}.level_offset", minimum=0),
                damage=self._parse_damage(data["damage"], f"{context}.damage"),
                **scaled,
            )
        return templates

    def _parse_damage(self, value: object, context: str) -> DamageScaling:
        data = require_mapping(value, context)
        require_exact_keys(data, {"dice", "die", "bonus"}, context)
        dice = self._parse_linear(data["dice"], f"{context}.dice")
        if dice.base < 1:
            raise DataValidationError(f"{context}.dice", "must roll at least one die")
        return DamageScaling(
            dice=dice,
            die=require_int(data["die"], f"{context}.die", minimum=2),
            bonus=self._parse_linear(data["bonus"], f"{context}.bonus"),
        )

    @staticmethod
    def _parse_linear(value: object, context: str) -> LinearStat:
        if isinstance(value, int) and not isinstance(value, bool):
            return LinearStat(base=value)
        data = require_mapping(value, context)
        require_exact_keys(data, {"base"}, context, optional={"per_level", "step", "cap"})
        cap = data.get("cap")
        return LinearStat(
            base=require_int(data["base"], f"{context}.base"),
            per_level=require_int(data.get("per_level", 0), f"{context}.per_level", minimum=0),
            step=require_int(data.get("step", 1), f"{context}.step", minimum=1),
            cap=None if cap is None else require_int(cap, f"{context}.cap", minimum=0),
        )
