"""Data layer: JSON definitions, decode helpers and the save file store."""

from .errors import (
    DataDecodeError,
    DataEncodeError,
    DataError,
    DataIOError,
    DataNotFoundError,
    DataValidationError,
)
from .paths import get_definitions_path, get_save_dir

__all__ = [
    "DataDecodeError",
    "DataEncodeError",
    "DataError",
    "DataIOError",
    "DataNotFoundError",
    "DataValidationError",
    "get_definitions_path",
    "get_save_dir",
]
