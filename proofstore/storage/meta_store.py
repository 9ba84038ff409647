"""Read and write the workspace metadata file."""

from __future__ import annotations

import os

import structlog
from pydantic import ValidationError

from proofstore.config.layout import DEFAULT_LAYOUT, WorkspaceLayout
from proofstore.exceptions import (
    DeserializationError,
    InvalidArgumentError,
    RecordNotFoundError,
)
from proofstore.schemas.meta import WorkspaceMeta
from proofstore.storage.json_io import read_json, write_json_atomic
from proofstore.storage.paths import WorkspacePaths

logger = structlog.get_logger()


def read_meta(
    root: str | os.PathLike[str],
    layout: WorkspaceLayout = DEFAULT_LAYOUT,
) -> WorkspaceMeta:
    """Load the metadata file of a workspace.

    Raises:
        InvalidArgumentError: Bad root path.
        RecordNotFoundError: The metadata file does not exist.
        DeserializationError: The file is not a valid metadata object.
    """
    path = WorkspacePaths(root, layout).meta
    try:
        data = read_json(path)
    except FileNotFoundError:
        raise RecordNotFoundError(f"{path.name} not found", path=str(path)) from None

    if not isinstance(data, dict):
        raise DeserializationError(
            f"expected a JSON object, got {type(data).__name__}", path=str(path)
        )
    try:
        return WorkspaceMeta.model_validate(data)
    except ValidationError as exc:
        raise DeserializationError(f"invalid metadata: {exc}", path=str(path)) from exc


def write_meta(
    root: str | os.PathLike[str],
    meta: WorkspaceMeta,
    layout: WorkspaceLayout = DEFAULT_LAYOUT,
) -> None:
    """Atomically overwrite the metadata file of a workspace."""
    paths = WorkspacePaths(root, layout)
    if meta is None:
        raise InvalidArgumentError("meta cannot be None")

    write_json_atomic(paths.meta, meta.model_dump(mode="json", exclude_none=True))
    logger.debug("Workspace metadata written", path=str(paths.meta), version=meta.version)
