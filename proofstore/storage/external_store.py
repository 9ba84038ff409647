"""External reference persistence under ``<root>/externals/``."""

from __future__ import annotations

import os

from proofstore.config.layout import EXTERNALS_DIR
from proofstore.schemas.external import External
from proofstore.storage.record_store import RecordStore

external_store = RecordStore(EXTERNALS_DIR, model=External)


def write_external(root: str | os.PathLike[str], ext: External) -> None:
    """Write an external reference to ``externals/<id>.json`` atomically."""
    external_store.write(root, ext)


def read_external(root: str | os.PathLike[str], ext_id: str) -> External:
    """Read an external reference by id."""
    return external_store.read(root, ext_id)


def list_externals(root: str | os.PathLike[str]) -> list[str]:
    """Return all external ids, in filesystem order."""
    return external_store.list(root)


def delete_external(root: str | os.PathLike[str], ext_id: str) -> None:
    """Remove an external reference file."""
    external_store.delete(root, ext_id)
