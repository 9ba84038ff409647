"""proofstore exception hierarchy.

All custom exceptions inherit from ProofStoreError, allowing callers
to catch broad or specific error categories as needed.

Filesystem failures (permission denied, disk full, not-a-directory)
are not wrapped: the underlying OSError propagates unchanged and
carries its own filename and errno.
"""


class ProofStoreError(Exception):
    """Base exception for all proofstore errors."""

    def __init__(self, message: str = "", path: str | None = None) -> None:
        self.path = path
        super().__init__(message)


class InvalidArgumentError(ProofStoreError, ValueError):
    """Raised when a caller-supplied argument is rejected before any I/O.

    Examples: empty or whitespace-only workspace root, root containing a
    null byte, missing record, blank record identifier.
    """


class RecordNotFoundError(ProofStoreError):
    """Raised when a record does not exist or its identifier is unsafe.

    Identifiers that fail path-traversal sanitization raise this error
    too, so a caller cannot discover files outside the subdirectory.
    """

    def __init__(
        self,
        message: str = "",
        path: str | None = None,
        record_id: str | None = None,
        subdir: str | None = None,
    ) -> None:
        self.record_id = record_id
        self.subdir = subdir
        super().__init__(message, path)


class DeserializationError(ProofStoreError):
    """Raised when stored content cannot be decoded into a record.

    Examples: invalid UTF-8, empty file, malformed JSON, a JSON value
    that is not an object, or an object failing model validation.
    """
