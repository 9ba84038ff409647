"""proofstore schemas — record types persisted in a workspace."""

from proofstore.schemas.external import External, generate_external_id
from proofstore.schemas.meta import WorkspaceMeta

__all__ = [
    "External",
    "WorkspaceMeta",
    "generate_external_id",
]
