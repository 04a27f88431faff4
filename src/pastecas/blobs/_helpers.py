"""Helper functions for storing text and files."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pastecas.addressing import Address
    from pastecas.blobs._store import BlobStore


def put_text(store: BlobStore, text: str, *, encoding: str = "utf-8") -> Address:
    """Encode ``text`` and store it, returning its full and short ids."""
    return store.put_address(text.encode(encoding))


def put_file(store: BlobStore, path: str | Path) -> Address:
    """Store the bytes of the file at ``path``.

    The file is read as-is; no newline or encoding normalization happens, so
    the returned ids match ``sha256sum`` of the file.
    """
    data = Path(path).read_bytes()
    return store.put_address(data)
