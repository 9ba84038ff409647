"""JSON file I/O with atomic write semantics.

Writes go to a uniquely named sibling temp file which is then renamed
onto the target. Rename within one directory is atomic on POSIX, so a
concurrent reader sees either the old complete file or the new one.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any
from uuid import uuid4

import structlog

from proofstore.exceptions import DeserializationError, InvalidArgumentError

logger = structlog.get_logger()

DIR_MODE = 0o755
TEMP_SUFFIX = ".tmp"


def encode_json(data: Any) -> str:
    """Serialize to 2-space-indented, human-readable JSON.

    Raises:
        InvalidArgumentError: If the data is not JSON-serializable.
    """
    try:
        return json.dumps(data, indent=2, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"value is not JSON-serializable: {exc}") from exc


def temp_path_for(path: str | os.PathLike[str]) -> str:
    """Return a unique sibling temp path, e.g. ``e1.json.3f9a0c21b7d4.tmp``."""
    path = os.fspath(path)
    return f"{path}.{uuid4().hex[:12]}{TEMP_SUFFIX}"


def ensure_dir(directory: str | os.PathLike[str]) -> None:
    """Create a directory and any missing parents (mode 0755). Idempotent."""
    Path(directory).mkdir(mode=DIR_MODE, parents=True, exist_ok=True)


def _discard_temp(temp_path: str) -> None:
    try:
        os.remove(temp_path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Failed to remove temp file", path=temp_path, error=str(exc))


def write_text_atomic(path: str | os.PathLike[str], text: str) -> None:
    """Write text to ``path`` via temp file + rename.

    On any failure the temp file is removed (best effort) and the
    original error is re-raised. The previously committed file, if
    any, is left intact.
    """
    path = os.fspath(path)
    temp_path = temp_path_for(path)

    try:
        with open(temp_path, "x", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
    except OSError:
        _discard_temp(temp_path)
        raise

    try:
        os.replace(temp_path, path)
    except OSError:
        _discard_temp(temp_path)
        raise


def write_text_exclusive(path: str | os.PathLike[str], text: str) -> bool:
    """Write text to ``path`` only if nothing exists there yet.

    The content is fully written and synced to a temp file, then
    hard-linked onto the target, so ``path`` either does not exist or
    holds the complete text. Returns False if an entry already exists
    at ``path``. The temp file is always removed.
    """
    path = os.fspath(path)
    temp_path = temp_path_for(path)

    try:
        with open(temp_path, "x", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.link(temp_path, path)
    except FileExistsError:
        return False
    finally:
        _discard_temp(temp_path)
    return True


def write_json_atomic(path: str | os.PathLike[str], data: Any) -> None:
    """Serialize ``data`` and write it atomically, creating parent directories."""
    text = encode_json(data)
    ensure_dir(os.path.dirname(os.fspath(path)) or ".")
    write_text_atomic(path, text)


def decode_json(raw: bytes, path: str | None = None) -> Any:
    """Decode UTF-8 JSON bytes.

    Raises:
        DeserializationError: On invalid UTF-8, empty input, or malformed JSON.
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DeserializationError(f"invalid UTF-8: {exc}", path=path) from exc
    if not text.strip():
        raise DeserializationError("empty JSON document", path=path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DeserializationError(f"malformed JSON: {exc}", path=path) from exc


def read_json(path: str | os.PathLike[str]) -> Any:
    """Read and decode a JSON file.

    FileNotFoundError and other OSErrors propagate unchanged.
    """
    path = os.fspath(path)
    with open(path, "rb") as f:
        raw = f.read()
    return decode_json(raw, path=path)
