"""External reference record — a cited theorem, paper, or other source.

Stored one-per-file under the workspace ``externals/`` subdirectory.
Field order here is the on-disk field order.
"""

import secrets
from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator

from proofstore.exceptions import InvalidArgumentError
from proofstore.utils.hashing import compute_source_hash

VERIFICATION_MARKER = "[VERIFIED:"


def generate_external_id() -> str:
    """Random 16-hex-char identifier."""
    return secrets.token_hex(8)


class External(BaseModel):
    """A reference to a source outside the workspace."""

    id: str = Field(..., description="Unique identifier, also the file stem")
    name: str = Field(default="", description="Human-readable name")
    source: str = Field(default="", description="Citation or location of the source")
    content_hash: str = Field(default="", description="SHA-256 hex digest of source")
    created: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation time (UTC)",
    )
    notes: str = Field(default="", description="Free-form notes")

    @field_validator("created")
    @classmethod
    def normalize_to_utc(cls, v: datetime) -> datetime:
        """Naive timestamps are taken as UTC; aware ones are converted."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @classmethod
    def new(cls, name: str, source: str, notes: str = "") -> "External":
        """Create an External with a fresh id, source hash, and timestamp."""
        return cls(
            id=generate_external_id(),
            name=name,
            source=source,
            content_hash=compute_source_hash(source),
            created=datetime.now(timezone.utc),
            notes=notes,
        )

    def validate_fields(self) -> None:
        """Check that name and source are non-blank.

        Raises:
            InvalidArgumentError: If name or source is empty or whitespace.
        """
        if not self.name.strip():
            raise InvalidArgumentError("external reference name cannot be empty")
        if not self.source.strip():
            raise InvalidArgumentError("external reference source cannot be empty")

    def source_matches(self, source: str) -> bool:
        """True if ``source`` hashes to the stored content hash."""
        return compute_source_hash(source) == self.content_hash

    @property
    def is_verified(self) -> bool:
        return VERIFICATION_MARKER in self.notes

    def mark_verified(self, at: datetime | None = None) -> bool:
        """Append a verification marker to notes.

        Returns False (and changes nothing) if already verified.
        """
        if self.is_verified:
            return False
        stamp = (at or datetime.now(timezone.utc)).astimezone(timezone.utc)
        marker = f"{VERIFICATION_MARKER} {stamp.strftime('%Y-%m-%dT%H:%M:%SZ')}]"
        self.notes = f"{self.notes} {marker}" if self.notes.strip() else marker
        return True
