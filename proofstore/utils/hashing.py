"""Deterministic hashing utilities for proofstore.

All hashing uses SHA-256 so identical content always produces an
identical hex digest.
"""

import hashlib


def compute_source_hash(source: str) -> str:
    """Compute the SHA-256 hex digest of a source string (UTF-8)."""
    return hashlib.sha256(source.encode("utf-8")).hexdigest()
