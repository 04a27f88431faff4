"""Typed errors for pastecas."""


class PastecasError(Exception):
    """Base exception for all pastecas errors."""


class InvalidIdError(PastecasError, ValueError):
    """Raised when a malformed full or short identifier is supplied to a lookup."""

    def __init__(self, value: str, kind: str = "full") -> None:
        """Initialize with the rejected value and the expected id kind."""
        self.value = value
        self.kind = kind
        super().__init__(f"Invalid {kind} id: {value!r}")


class BlobNotFoundError(PastecasError):
    """Raised when a caller requires a blob that is not stored."""

    def __init__(self, blob_id: str) -> None:
        """Initialize with the missing blob's ID."""
        self.blob_id = blob_id
        super().__init__(f"Blob not found: {blob_id}")


class AmbiguousShortIdError(PastecasError):
    """Raised under the strict policy when a short id matches several blobs."""

    def __init__(self, short_id: str, matches: tuple[str, ...]) -> None:
        """Initialize with the short id and every full id it matched."""
        self.short_id = short_id
        self.matches = matches
        super().__init__(f"Short id {short_id} is ambiguous: {len(matches)} matches")


class StorageFaultError(PastecasError):
    """Raised when the persistence medium fails to read or write."""

    def __init__(self, key: str, operation: str) -> None:
        """Initialize with the affected key and the failed operation."""
        self.key = key
        self.operation = operation
        super().__init__(f"Storage fault during {operation} of {key}")
