"""BlobStore and backends: content-addressed blob storage for pastecas."""

from pastecas.blobs._backend import KeyValueBackend
from pastecas.blobs._file import FileBackend
from pastecas.blobs._helpers import put_file, put_text
from pastecas.blobs._index import PrefixIndex
from pastecas.blobs._memory import InMemoryBackend
from pastecas.blobs._store import BlobStore, ShortIdPolicy

__all__ = [
    "BlobStore",
    "FileBackend",
    "InMemoryBackend",
    "KeyValueBackend",
    "PrefixIndex",
    "ShortIdPolicy",
    "put_file",
    "put_text",
]
