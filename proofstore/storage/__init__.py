"""Storage layer — JSON-file persistence for workspace records.

Each record is one ``<id>.json`` file inside a workspace subdirectory,
written atomically and looked up through a path-traversal guard.
"""

from proofstore.storage.external_store import (
    delete_external,
    external_store,
    list_externals,
    read_external,
    write_external,
)
from proofstore.storage.meta_store import read_meta, write_meta
from proofstore.storage.paths import WorkspacePaths
from proofstore.storage.record_store import RecordStore

__all__ = [
    "RecordStore",
    "WorkspacePaths",
    "delete_external",
    "external_store",
    "list_externals",
    "read_external",
    "read_meta",
    "write_external",
    "write_meta",
]
