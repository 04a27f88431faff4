"""InMemoryBackend: dict-based persistence for development and testing."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


class InMemoryBackend:
    """In-memory key-value backend for development and testing."""

    def __init__(self) -> None:
        """Initialize an empty in-memory backend."""
        self._records: dict[str, bytes] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_preloaded(cls, records: Mapping[str, bytes]) -> InMemoryBackend:
        """Build a backend from preloaded ``key -> bytes`` records.

        Keys are taken as given and are not checked against their content.
        """
        backend = cls()
        for key, data in records.items():
            backend._records[key] = bytes(data)
        return backend

    def exists(self, key: str) -> bool:
        """Check whether a record exists."""
        return key in self._records

    def write_if_absent(self, key: str, data: bytes) -> bool:
        """Store a copy of ``data`` unless the key is taken."""
        with self._lock:
            if key in self._records:
                return False
            self._records[key] = bytes(data)
            return True

    def read(self, key: str) -> bytes | None:
        """Return the stored bytes or ``None``."""
        return self._records.get(key)

    def enumerate_keys(self) -> tuple[str, ...]:
        """Return a snapshot of stored keys."""
        with self._lock:
            return tuple(self._records)
