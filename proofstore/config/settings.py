"""Centralized environment-based settings for proofstore.

Reads configuration from environment variables with sensible defaults.

Usage:
    from proofstore.config.settings import get_settings
    settings = get_settings()
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class ProofStoreSettings:
    """Immutable application settings loaded from environment."""

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    # Workspace
    workspace_dir: Path = Path(".")
    layout_file: Optional[Path] = None


def get_settings() -> ProofStoreSettings:
    """Load settings from environment variables.

    Environment variables (all optional):
        PROOFSTORE_LOG_LEVEL: Logging level (default: INFO)
        PROOFSTORE_JSON_LOGS: Render logs as JSON (default: false)
        PROOFSTORE_DIR: Default workspace root (default: .)
        PROOFSTORE_LAYOUT_FILE: YAML file overriding the workspace layout
    """
    def _bool(key: str, default: bool = False) -> bool:
        val = os.environ.get(key, "").lower()
        if val in ("1", "true", "yes"):
            return True
        if val in ("0", "false", "no"):
            return False
        return default

    layout_raw = os.environ.get("PROOFSTORE_LAYOUT_FILE", "")

    return ProofStoreSettings(
        log_level=os.environ.get("PROOFSTORE_LOG_LEVEL", "INFO").upper(),
        json_logs=_bool("PROOFSTORE_JSON_LOGS", False),
        workspace_dir=Path(os.environ.get("PROOFSTORE_DIR", ".")),
        layout_file=Path(layout_raw) if layout_raw.strip() else None,
    )
