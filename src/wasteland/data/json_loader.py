"""Low-level JSON helpers shared by repositories, the worldbook and saves."""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from .errors import DataDecodeError, DataEncodeError, DataIOError, DataNotFoundError

logger = logging.getLogger(__name__)


def load_json(path: Path) -> object:
    """Load JSON from disk, mapping failures onto the data error taxonomy."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DataNotFoundError(f"File not found: {path}") from exc
    except UnicodeDecodeError as exc:
        raise DataDecodeError(str(path), f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise DataIOError(f"Unable to read {path}: {exc.strerror or exc}") from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataDecodeError(f"{path}:{exc.lineno}:{exc.colno}", exc.msg) from exc


def encode_canonical(payload: object) -> bytes:
    """Return the pretty, key-sorted UTF-8 JSON used for every file we write.

    Values JSON cannot represent and strings UTF-8 cannot encode (lone
    surrogates) raise DataEncodeError before anything touches the disk.
    """
    try:
        text = json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False, allow_nan=False) + "\n"
        return text.encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise DataEncodeError(f"Unable to encode payload: {exc}") from exc


def dumps_canonical(payload: object) -> str:
    return encode_canonical(payload).decode("utf-8")


def write_json_atomic(path: Path, payload: object) -> None:
    """Write JSON next to ``path`` in a temp file, then rename it into place.

    The destination is never truncated in place: readers either see the old
    file or the complete new one.
    """
    data = encode_canonical(payload)
    directory = path.parent
    try:
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=directory)
    except OSError as exc:
        raise DataIOError(f"Unable to prepare {directory}: {exc.strerror or exc}") from exc

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    except OSError as exc:
        raise DataIOError(f"Unable to write {path}: {exc.strerror or exc}") from exc
    finally:
        # After a successful replace the temp name no longer exists.
        tmp_path.unlink(missing_ok=True)
    _fsync_directory(directory)
    logger.debug("Wrote %s (%d bytes)", path, len(data))


def _fsync_directory(directory: Path) -> None:
    if os.name != "posix":
        return
    try:
        dir_fd = os.open(directory, os.O_RDONLY)
    except OSError as exc:
        raise DataIOError(f"Unable to open {directory}: {exc.strerror or exc}") from exc
    try:
        os.fsync(dir_fd)
    except OSError as exc:
        raise DataIOError(f"Unable to sync {directory}: {exc.strerror or exc}") from exc
    finally:
        os.close(dir_fd)
