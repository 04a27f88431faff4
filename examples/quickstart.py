"""Store, deduplicate and look up pastes by full and short id."""

import tempfile
from pathlib import Path

from pastecas import BlobStore, FileBackend, InMemoryBackend, ShortIdPolicy, put_text

# ---- InMemoryBackend ----
# Best for development, testing, and short-lived processes.

store = BlobStore(InMemoryBackend())
addr = put_text(store, "hello")
print(f"[InMemory] full_id={addr.full_id}")
print(f"  short_id={addr.short_id}")
print(f"  get_by_full_id() = {store.get_by_full_id(addr.full_id)!r}")
print(f"  get_by_short_id() = {store.get_by_short_id(addr.short_id)!r}")

# Same content, same id: the second put writes nothing.
again = put_text(store, "hello")
print(f"  duplicate put -> same id: {again == addr}, stored ids: {len(store.list_ids())}")
print(f"  unknown short id -> {store.get_by_short_id('00000000')!r}")

# ---- FileBackend ----
# Persists each paste as <full_id>.txt under a root directory.

with tempfile.TemporaryDirectory() as tmpdir:
    file_store = BlobStore(FileBackend(Path(tmpdir) / "pastes"), short_id_policy=ShortIdPolicy.STRICT)
    full_id = file_store.put(b"<b>raw bytes</b>\n")
    print(f"\n[File] root = {file_store.backend.root}")
    print(f"  get_raw() = {file_store.get_raw(full_id)!r}")
    print(f"  resolve_short_id() = {file_store.resolve_short_id(full_id[:8])}")
