"""RecordStore — one JSON file per record inside a workspace subdirectory.

Records are either Pydantic models (when the store is bound to a model
class) or plain JSON objects carrying a string identifier. The store
holds no cache: the filesystem is the only source of truth, and a
record lives exactly as long as its ``<id>.json`` file.

No locking is performed. Writes are atomic per record (temp file +
rename); concurrent writers to the same identifier race and the last
rename wins.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import BaseModel, ValidationError

from proofstore.exceptions import (
    DeserializationError,
    InvalidArgumentError,
    RecordNotFoundError,
)
from proofstore.storage.json_io import encode_json, ensure_dir, read_json, write_text_atomic
from proofstore.storage.paths import (
    RECORD_SUFFIX,
    resolve_record_path,
    validate_record_id,
    validate_root,
)

logger = structlog.get_logger()


class RecordStore:
    """Keyed JSON record storage bound to one workspace subdirectory.

    Every operation takes the workspace root explicitly, so a single
    store instance serves any number of workspaces.
    """

    def __init__(
        self,
        subdir: str,
        model: type[BaseModel] | None = None,
        id_field: str = "id",
    ) -> None:
        self._subdir = subdir
        self._model = model
        self._id_field = id_field

    @property
    def subdir(self) -> str:
        return self._subdir

    def directory(self, root: str | os.PathLike[str]) -> str:
        """Absolute-or-relative path of this store's subdirectory under ``root``."""
        return os.path.join(validate_root(root), self._subdir)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def write(self, root: str | os.PathLike[str], record: BaseModel | Mapping[str, Any]) -> None:
        """Persist a record as ``<subdir>/<id>.json``, overwriting silently.

        Raises:
            InvalidArgumentError: Bad root, missing record, blank or unsafe
                identifier, or a payload that is not JSON-serializable.
            OSError: Any filesystem failure, unchanged.
        """
        directory = self.directory(root)
        if record is None:
            raise InvalidArgumentError(f"{self._kind} cannot be None")

        payload = self._to_payload(record)
        record_id = validate_record_id(payload.get(self._id_field), self._kind)
        path = resolve_record_path(directory, record_id)
        if path is None:
            raise InvalidArgumentError(
                f"{self._kind} ID {record_id!r} is not a valid file name",
                path=directory,
            )
        text = encode_json(payload)

        try:
            ensure_dir(directory)
            write_text_atomic(path, text)
        except OSError as exc:
            logger.error(
                "Record write failed",
                subdir=self._subdir,
                record_id=record_id,
                path=path,
                error=str(exc),
            )
            raise

        logger.debug("Record stored", subdir=self._subdir, record_id=record_id)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def read(self, root: str | os.PathLike[str], record_id: str) -> Any:
        """Load a record by identifier.

        Returns a model instance when the store is bound to a model,
        otherwise the decoded JSON object.

        Raises:
            InvalidArgumentError: Bad root or blank identifier.
            RecordNotFoundError: No such record, or an unsafe identifier.
            DeserializationError: Stored content is not a valid record.
            OSError: Any other filesystem failure, unchanged.
        """
        path = self._checked_path(root, record_id)

        try:
            data = read_json(path)
        except FileNotFoundError:
            raise self._not_found(record_id) from None
        except OSError as exc:
            logger.error(
                "Record read failed",
                subdir=self._subdir,
                record_id=record_id,
                path=path,
                error=str(exc),
            )
            raise

        return self._from_payload(data, path)

    def list(self, root: str | os.PathLike[str]) -> list[str]:
        """Return the identifiers of all records in the subdirectory.

        Only regular, non-hidden ``*.json`` files count. Order follows
        filesystem enumeration; sort if a stable order is needed. A
        subdirectory that does not exist yet holds no records.
        """
        directory = self.directory(root)

        try:
            with os.scandir(directory) as entries:
                ids = [
                    entry.name[: -len(RECORD_SUFFIX)]
                    for entry in entries
                    if entry.is_file(follow_symlinks=False)
                    and not entry.name.startswith(".")
                    and entry.name.endswith(RECORD_SUFFIX)
                ]
        except FileNotFoundError:
            logger.debug("Record directory missing", subdir=self._subdir, path=directory)
            return []

        return ids

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete(self, root: str | os.PathLike[str], record_id: str) -> None:
        """Remove a record file. Sibling records are untouched.

        Raises:
            InvalidArgumentError: Bad root or blank identifier.
            RecordNotFoundError: No such record, or an unsafe identifier.
            OSError: Any other filesystem failure, unchanged.
        """
        path = self._checked_path(root, record_id)

        try:
            os.remove(path)
        except FileNotFoundError:
            raise self._not_found(record_id) from None
        except OSError as exc:
            logger.error(
                "Record delete failed",
                subdir=self._subdir,
                record_id=record_id,
                path=path,
                error=str(exc),
            )
            raise

        logger.debug("Record deleted", subdir=self._subdir, record_id=record_id)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @property
    def _kind(self) -> str:
        return self._subdir.removesuffix("s") or "record"

    def _checked_path(self, root: str | os.PathLike[str], record_id: str) -> str:
        directory = self.directory(root)
        validate_record_id(record_id, self._kind)
        path = resolve_record_path(directory, record_id)
        if path is None:
            raise self._not_found(record_id)
        return path

    def _not_found(self, record_id: str) -> RecordNotFoundError:
        return RecordNotFoundError(
            f"{self._kind} {record_id!r} not found",
            record_id=record_id,
            subdir=self._subdir,
        )

    def _to_payload(self, record: BaseModel | Mapping[str, Any]) -> dict[str, Any]:
        if isinstance(record, BaseModel):
            if self._model is not None and not isinstance(record, self._model):
                raise InvalidArgumentError(
                    f"expected {self._model.__name__}, got {type(record).__name__}"
                )
            return record.model_dump(mode="json")
        if isinstance(record, Mapping):
            if self._model is None:
                return dict(record)
            try:
                return self._model.model_validate(dict(record)).model_dump(mode="json")
            except ValidationError as exc:
                raise InvalidArgumentError(f"invalid {self._kind}: {exc}") from exc
        raise InvalidArgumentError(
            f"{self._kind} must be a model or mapping, got {type(record).__name__}"
        )

    def _from_payload(self, data: Any, path: str) -> Any:
        if not isinstance(data, dict):
            raise DeserializationError(
                f"expected a JSON object, got {type(data).__name__}", path=path
            )
        if self._model is not None:
            try:
                return self._model.model_validate(data)
            except ValidationError as exc:
                raise DeserializationError(f"invalid {self._kind}: {exc}", path=path) from exc

        record_id = data.get(self._id_field)
        if not isinstance(record_id, str) or not record_id.strip():
            raise DeserializationError(
                f"record is missing a string {self._id_field!r} field", path=path
            )
        return data
