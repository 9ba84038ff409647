"""Workspace layout configuration.

Defines the fixed, ordered set of subdirectories a workspace contains,
the metadata filename, and the default metadata payload. The default
layout is a module-level constant; alternative layouts can be loaded
from YAML.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

EXTERNALS_DIR = "externals"

DEFAULT_SUBDIRECTORIES: tuple[str, ...] = (
    "ledger",
    "nodes",
    "defs",
    "assumptions",
    EXTERNALS_DIR,
    "lemmas",
    "locks",
)

DEFAULT_META_FILENAME = "meta.json"
DEFAULT_META_VERSION = "1.0"


def _check_component(name: str) -> str:
    if not name or not name.strip():
        raise ValueError("name cannot be empty")
    if name in (".", "..") or "/" in name or "\\" in name or "\x00" in name:
        raise ValueError(f"name must be a single path component, got: {name!r}")
    return name


class WorkspaceLayout(BaseModel):
    """Directory layout of a workspace root."""

    model_config = ConfigDict(frozen=True)

    subdirectories: tuple[str, ...] = Field(
        default=DEFAULT_SUBDIRECTORIES,
        description="Subdirectories created under the root, in creation order",
    )
    meta_filename: str = Field(
        default=DEFAULT_META_FILENAME,
        description="Metadata file created under the root if absent",
    )
    default_meta: dict[str, Any] = Field(
        default_factory=lambda: {"version": DEFAULT_META_VERSION},
        description="Payload written to a freshly created metadata file",
    )

    @field_validator("subdirectories")
    @classmethod
    def subdirectories_are_components(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Each subdirectory must be a unique single path component."""
        for name in v:
            _check_component(name)
        if len(set(v)) != len(v):
            raise ValueError(f"subdirectories must be unique, got: {list(v)}")
        return v

    @field_validator("meta_filename")
    @classmethod
    def meta_filename_is_component(cls, v: str) -> str:
        return _check_component(v)

    @field_validator("default_meta")
    @classmethod
    def default_meta_has_version(cls, v: dict[str, Any]) -> dict[str, Any]:
        """The default metadata must carry a version string."""
        if not isinstance(v.get("version"), str) or not v["version"].strip():
            raise ValueError("default_meta must contain a non-empty 'version' string")
        return v

    @classmethod
    def from_yaml(cls, path: str | Path) -> "WorkspaceLayout":
        """Load a layout from a YAML file.

        A missing file yields the default layout. Expected structure:
            workspace:
              subdirectories: [ledger, nodes, defs, ...]
              meta_filename: meta.json
              default_meta:
                version: "1.0"
        """
        path = Path(path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        section: dict[str, Any] = raw.get("workspace", {}) or {}
        kwargs: dict[str, Any] = {}
        if "subdirectories" in section:
            kwargs["subdirectories"] = tuple(section["subdirectories"])
        if "meta_filename" in section:
            kwargs["meta_filename"] = section["meta_filename"]
        if "default_meta" in section:
            kwargs["default_meta"] = dict(section["default_meta"])
        return cls(**kwargs)


DEFAULT_LAYOUT = WorkspaceLayout()
