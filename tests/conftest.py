"""Shared test fixtures for proofstore tests.

Provides workspace roots and sample External records that can be
reused across test modules.
"""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from proofstore.schemas.external import External
from proofstore.workspace.initializer import init_workspace


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------
SAMPLE_TIMESTAMP = datetime(2026, 2, 9, 14, 30, 0, 123456, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Workspace fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """An initialized workspace root."""
    root = tmp_path / "proof"
    init_workspace(root)
    return root


@pytest.fixture
def bare_root(tmp_path: Path) -> Path:
    """A workspace root path that has not been initialized."""
    return tmp_path / "bare"


# ---------------------------------------------------------------------------
# External fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def sample_external() -> External:
    """A fully populated External reference."""
    return External(
        id="ext-001",
        name="Fermat's Little Theorem",
        source="Hardy & Wright, An Introduction to the Theory of Numbers, Thm 71",
        content_hash="a" * 64,
        created=SAMPLE_TIMESTAMP,
        notes="Standard reference",
    )


@pytest.fixture
def make_external():
    """Factory for Externals with a given id."""

    def _make(ext_id: str, name: str = "Lemma", source: str = "Some book") -> External:
        return External(
            id=ext_id,
            name=name,
            source=source,
            content_hash="b" * 64,
            created=SAMPLE_TIMESTAMP,
        )

    return _make
