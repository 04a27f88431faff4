"""PrefixIndex: sorted key list with binary search by prefix."""

from __future__ import annotations

import bisect
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class PrefixIndex:
    """Sorted set of full ids supporting prefix lookups in ``O(log n + k)``."""

    def __init__(self, keys: Iterable[str] = ()) -> None:
        """Initialize from any iterable of keys; duplicates are dropped."""
        self._keys: list[str] = sorted(set(keys))

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        position = bisect.bisect_left(self._keys, key)
        return position < len(self._keys) and self._keys[position] == key

    def add(self, key: str) -> bool:
        """Insert ``key``. Return ``False`` when it was already indexed."""
        position = bisect.bisect_left(self._keys, key)
        if position < len(self._keys) and self._keys[position] == key:
            return False
        self._keys.insert(position, key)
        return True

    def update(self, keys: Iterable[str]) -> None:
        """Merge ``keys`` into the index."""
        new_keys = set(keys).difference(self._keys)
        if new_keys:
            self._keys = sorted([*self._keys, *new_keys])

    def with_prefix(self, prefix: str) -> tuple[str, ...]:
        """Return every indexed key starting with ``prefix``, in ascending order."""
        position = bisect.bisect_left(self._keys, prefix)
        matches: list[str] = []
        while position < len(self._keys) and self._keys[position].startswith(prefix):
            matches.append(self._keys[position])
            position += 1
        return tuple(matches)

    def keys(self) -> tuple[str, ...]:
        """Return all indexed keys in ascending order."""
        return tuple(self._keys)
