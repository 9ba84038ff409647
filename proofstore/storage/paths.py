"""Path validation and resolution for workspace storage.

Record identifiers become filenames, so every lookup goes through two
independent checks: marker rejection before any path is built, then a
lexical containment check on the resolved path.
"""

from __future__ import annotations

import os
from pathlib import Path

from proofstore.config.layout import DEFAULT_LAYOUT, WorkspaceLayout
from proofstore.exceptions import InvalidArgumentError

RECORD_SUFFIX = ".json"

_TRAVERSAL_MARKERS = ("..", "/", "\\", "%2f", "%2F", "\x00")


def validate_root(root: str | os.PathLike[str]) -> str:
    """Validate a workspace root path and return it as a string.

    Raises:
        InvalidArgumentError: If the path is empty, whitespace-only,
            or contains a null byte.
    """
    if root is None:
        raise InvalidArgumentError("path cannot be empty")
    path = os.fspath(root)
    if path == "":
        raise InvalidArgumentError("path cannot be empty")
    if not path.strip():
        raise InvalidArgumentError("path cannot be whitespace-only", path=path)
    if "\x00" in path:
        raise InvalidArgumentError("path cannot contain null byte")
    return path


def validate_record_id(record_id: str | None, kind: str = "record") -> str:
    """Validate that a record identifier is a non-blank string."""
    if not isinstance(record_id, str) or not record_id.strip():
        raise InvalidArgumentError(f"{kind} ID cannot be empty")
    return record_id


def contains_path_traversal(record_id: str) -> bool:
    """Return True if the identifier could address a path outside its directory."""
    if any(marker in record_id for marker in _TRAVERSAL_MARKERS):
        return True
    if os.sep in record_id:
        return True
    return bool(os.altsep and os.altsep in record_id)


def resolve_record_path(directory: str, record_id: str) -> str | None:
    """Build ``<directory>/<record_id>.json`` if it stays inside ``directory``.

    Returns None when the identifier carries traversal markers or the
    normalized absolute path escapes the directory.
    """
    if contains_path_traversal(record_id):
        return None

    candidate = os.path.join(directory, record_id + RECORD_SUFFIX)
    clean_candidate = os.path.normpath(os.path.abspath(candidate))
    clean_directory = os.path.normpath(os.path.abspath(directory))
    if not clean_candidate.startswith(clean_directory + os.sep):
        return None
    return candidate


class WorkspacePaths:
    """Standardized path resolution for a workspace root."""

    def __init__(
        self,
        root: str | os.PathLike[str],
        layout: WorkspaceLayout = DEFAULT_LAYOUT,
    ) -> None:
        self._base = Path(validate_root(root))
        self._layout = layout

    @property
    def base(self) -> Path:
        return self._base

    @property
    def layout(self) -> WorkspaceLayout:
        return self._layout

    def subdirectory(self, name: str) -> Path:
        """Path of a named subdirectory of the layout."""
        if name not in self._layout.subdirectories:
            raise InvalidArgumentError(f"Unknown workspace subdirectory: {name}")
        return self._base / name

    @property
    def ledger(self) -> Path:
        return self.subdirectory("ledger")

    @property
    def nodes(self) -> Path:
        return self.subdirectory("nodes")

    @property
    def defs(self) -> Path:
        return self.subdirectory("defs")

    @property
    def assumptions(self) -> Path:
        return self.subdirectory("assumptions")

    @property
    def externals(self) -> Path:
        return self.subdirectory("externals")

    @property
    def lemmas(self) -> Path:
        return self.subdirectory("lemmas")

    @property
    def locks(self) -> Path:
        return self.subdirectory("locks")

    @property
    def meta(self) -> Path:
        return self._base / self._layout.meta_filename
