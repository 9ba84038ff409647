"""proofstore utilities — hashing, logging, and shared helpers."""

from proofstore.utils.hashing import compute_source_hash
from proofstore.utils.logging import configure_logging, get_logger

__all__ = [
    "compute_source_hash",
    "configure_logging",
    "get_logger",
]
