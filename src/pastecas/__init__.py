"""pastecas: content-addressed text storage."""

import importlib.metadata as importlib_metadata

from pastecas.addressing import Address, address
from pastecas.blobs import BlobStore, FileBackend, InMemoryBackend, KeyValueBackend, ShortIdPolicy, put_file, put_text
from pastecas.config import StoreSettings, open_store
from pastecas.errors import (
    AmbiguousShortIdError,
    BlobNotFoundError,
    InvalidIdError,
    PastecasError,
    StorageFaultError,
)


def _detect_version() -> str:
    """Return installed package version or a local fallback when metadata is unavailable."""
    try:
        return importlib_metadata.version("pastecas")
    except importlib_metadata.PackageNotFoundError:
        return "0.0.0+unknown"


__version__ = _detect_version()

__all__ = [
    "Address",
    "AmbiguousShortIdError",
    "BlobNotFoundError",
    "BlobStore",
    "FileBackend",
    "InMemoryBackend",
    "InvalidIdError",
    "KeyValueBackend",
    "PastecasError",
    "ShortIdPolicy",
    "StorageFaultError",
    "StoreSettings",
    "address",
    "open_store",
    "put_file",
    "put_text",
]
