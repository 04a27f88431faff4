"""KeyValueBackend: protocol for blob persistence backends."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueBackend(Protocol):
    """Key-value persistence protocol.

    Keys are full ids. Implementations must make ``write_if_absent`` atomic per
    key: a concurrent reader sees either no record or the complete bytes, and
    at most one writer ever persists a given key.
    """

    def exists(self, key: str) -> bool:
        """Check whether a record is stored under ``key``."""
        ...

    def write_if_absent(self, key: str, data: bytes) -> bool:
        """Store ``data`` unless ``key`` exists. Return ``True`` when this call wrote."""
        ...

    def read(self, key: str) -> bytes | None:
        """Return the bytes stored under ``key``, or ``None`` when absent."""
        ...

    def enumerate_keys(self) -> tuple[str, ...]:
        """Return every stored key. Order is unspecified."""
        ...
