"""Repository exports."""

from .enemies_repo import EnemiesRepository
from .items_repo import ItemsRepository

__all__ = [
    "EnemiesRepository",
    "ItemsRepository",
]
