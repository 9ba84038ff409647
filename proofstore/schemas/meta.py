"""Workspace metadata stored in the root ``meta.json`` file."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WorkspaceMeta(BaseModel):
    """Metadata describing a workspace. Unknown keys are preserved."""

    model_config = ConfigDict(extra="allow")

    version: str = Field(..., description="Workspace format version")
    conjecture: Optional[str] = Field(default=None, description="Statement being worked on")
    created_at: Optional[datetime] = Field(default=None, description="Creation time")

    @field_validator("version")
    @classmethod
    def version_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("version cannot be empty")
        return v
