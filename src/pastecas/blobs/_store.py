"""BlobStore: content-addressed put and lookup over a key-value backend."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import TYPE_CHECKING

from pastecas.addressing import Address, address, normalize_full_id, normalize_short_id
from pastecas.blobs._index import PrefixIndex
from pastecas.errors import AmbiguousShortIdError, BlobNotFoundError

if TYPE_CHECKING:
    from pastecas.blobs._backend import KeyValueBackend

logger = logging.getLogger(__name__)


class ShortIdPolicy(str, Enum):
    """How a short id that matches several full ids is resolved."""

    FIRST_MATCH = "first_match"
    STRICT = "strict"


class BlobStore:
    """Content-addressed blob store.

    Blobs are keyed by the SHA-256 hex digest of their bytes. Writes are
    idempotent; lookups accept a full id or an 8-character short id.

    With ``use_index`` enabled, short-id lookups go through a ``PrefixIndex``
    built lazily from the backend. Without it every lookup scans the backend's
    key space. Unless ``exclusive_writer`` is set, each indexed lookup first
    merges the backend's current keys, so other writers sharing the backend
    are seen exactly as a scan would see them. An exclusive writer trusts its
    index and only goes back to the backend when a prefix has no match.
    """

    def __init__(
        self,
        backend: KeyValueBackend,
        *,
        short_id_policy: ShortIdPolicy | str = ShortIdPolicy.FIRST_MATCH,
        use_index: bool = True,
        exclusive_writer: bool = False,
    ) -> None:
        """Initialize over ``backend`` with a short-id policy."""
        self._backend = backend
        self._policy = ShortIdPolicy(short_id_policy)
        self._use_index = use_index
        self._exclusive_writer = exclusive_writer
        self._index: PrefixIndex | None = None
        self._index_lock = threading.Lock()

    @property
    def backend(self) -> KeyValueBackend:
        """Return the underlying backend."""
        return self._backend

    @property
    def short_id_policy(self) -> ShortIdPolicy:
        """Return the ambiguity policy for short ids."""
        return self._policy

    def put(self, content: bytes) -> str:
        """Store ``content`` if new and return its full id."""
        return self.put_address(content).full_id

    def put_address(self, content: bytes) -> Address:
        """Store ``content`` if new and return both of its ids."""
        addr = address(content)
        if self._backend.exists(addr.full_id):
            logger.debug("Blob %s already stored; skipping write", addr.short_id)
        elif self._backend.write_if_absent(addr.full_id, bytes(content)):
            logger.debug("Stored blob %s (%d bytes)", addr.full_id, len(content))
        else:
            logger.debug("Blob %s written concurrently; skipping write", addr.short_id)
        self._remember(addr.full_id)
        return addr

    def has(self, full_id: str) -> bool:
        """Check whether a blob exists under ``full_id``."""
        return self._backend.exists(normalize_full_id(full_id))

    def get_by_full_id(self, full_id: str) -> bytes | None:
        """Return the blob stored under ``full_id``, or ``None`` when absent."""
        return self._backend.read(normalize_full_id(full_id))

    def get_raw(self, full_id: str) -> bytes | None:
        """Return the stored bytes unmodified, for plain-text delivery."""
        return self.get_by_full_id(full_id)

    def require(self, full_id: str) -> bytes:
        """Return the blob stored under ``full_id`` or raise ``BlobNotFoundError``."""
        data = self.get_by_full_id(full_id)
        if data is None:
            raise BlobNotFoundError(full_id)
        return data

    def matching_ids(self, short_id: str) -> tuple[str, ...]:
        """Return every stored full id starting with ``short_id``, sorted."""
        prefix = normalize_short_id(short_id)
        if not self._use_index:
            return tuple(sorted(key for key in self._backend.enumerate_keys() if key.startswith(prefix)))

        if not self._exclusive_writer:
            # Other writers may have added keys behind this store's back.
            return self._refresh_index(prefix)

        with self._index_lock:
            loaded = self._index is not None
            matches = self._index.with_prefix(prefix) if self._index is not None else ()
        if not matches:
            if loaded:
                logger.debug("No indexed match for %s; refreshing from backend", prefix)
            matches = self._refresh_index(prefix)
        return matches

    def resolve_short_id(self, short_id: str) -> str | None:
        """Resolve ``short_id`` to a full id according to the store's policy.

        Zero matches resolve to ``None``. Several matches resolve to the
        lexicographically smallest full id under ``FIRST_MATCH`` and raise
        ``AmbiguousShortIdError`` under ``STRICT``.
        """
        prefix = normalize_short_id(short_id)
        matches = self.matching_ids(prefix)
        if not matches:
            return None
        if len(matches) > 1:
            if self._policy is ShortIdPolicy.STRICT:
                raise AmbiguousShortIdError(prefix, matches)
            logger.warning("Short id %s matches %d blobs; using %s", prefix, len(matches), matches[0])
        return matches[0]

    def get_by_short_id(self, short_id: str) -> bytes | None:
        """Return the blob a short id resolves to, or ``None`` when nothing matches."""
        full_id = self.resolve_short_id(short_id)
        if full_id is None:
            return None
        return self._backend.read(full_id)

    def list_ids(self) -> tuple[str, ...]:
        """Return every stored full id in ascending order."""
        return tuple(sorted(self._backend.enumerate_keys()))

    def _refresh_index(self, prefix: str) -> tuple[str, ...]:
        # The key space is append-only, so merging never drops a live key.
        keys = self._backend.enumerate_keys()
        with self._index_lock:
            if self._index is None:
                self._index = PrefixIndex(keys)
            else:
                self._index.update(keys)
            logger.debug("Loaded prefix index with %d keys", len(self._index))
            return self._index.with_prefix(prefix)

    def _remember(self, full_id: str) -> None:
        with self._index_lock:
            if self._index is not None:
                self._index.add(full_id)
