"""Workspace directory initialization.

Creates the workspace root, its fixed set of subdirectories, and a
default metadata file. Safe to call repeatedly: existing directories,
their contents, and an existing metadata file are never modified.
"""

from __future__ import annotations

import os

import structlog

from proofstore.config.layout import DEFAULT_LAYOUT, WorkspaceLayout
from proofstore.storage.json_io import encode_json, ensure_dir, write_text_exclusive
from proofstore.storage.paths import WorkspacePaths

logger = structlog.get_logger()


def init_workspace(
    root: str | os.PathLike[str],
    layout: WorkspaceLayout = DEFAULT_LAYOUT,
) -> WorkspacePaths:
    """Create the workspace layout under ``root``.

    Directories are created with mode 0755 along with any missing
    parents. The metadata file is created only if nothing exists at its
    path, and is never left partially written. No rollback of created
    directories is performed on failure.

    Raises:
        InvalidArgumentError: If root is empty, whitespace-only, or
            contains a null byte.
        OSError: Any filesystem failure, unchanged.
    """
    paths = WorkspacePaths(root, layout)

    ensure_dir(paths.base)
    for name in layout.subdirectories:
        ensure_dir(paths.subdirectory(name))

    created = _create_meta_if_absent(paths, layout)
    logger.info(
        "Workspace initialized",
        root=str(paths.base),
        subdirectories=len(layout.subdirectories),
        meta_created=created,
    )
    return paths


def is_initialized(
    root: str | os.PathLike[str],
    layout: WorkspaceLayout = DEFAULT_LAYOUT,
) -> bool:
    """True if every layout subdirectory and the metadata file exist."""
    paths = WorkspacePaths(root, layout)
    if not paths.meta.is_file():
        return False
    return all(paths.subdirectory(name).is_dir() for name in layout.subdirectories)


def _create_meta_if_absent(paths: WorkspacePaths, layout: WorkspaceLayout) -> bool:
    """Publish the default metadata file. Returns False if it already exists."""
    created = write_text_exclusive(paths.meta, encode_json(layout.default_meta))
    if not created:
        logger.debug("Metadata file exists, leaving untouched", path=str(paths.meta))
    return created
