"""Domain definition exports."""

from .enemy_def import DamageScaling, EnemyTemplateDef, LinearStat

__all__ = [
    "DamageScaling",
    "EnemyTemplateDef",
    "LinearStat",
]
