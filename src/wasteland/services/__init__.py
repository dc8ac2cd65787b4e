"""Service layer exports."""

from .combat_service import CombatService
from .errors import FactoryError
from .persistence import delete_save, list_save_files, load_from_file, save_to_file
from .save_service import SaveService

__all__ = [
    "CombatService",
    "FactoryError",
    "SaveService",
    "delete_save",
    "list_save_files",
    "load_from_file",
    "save_to_file",
]
