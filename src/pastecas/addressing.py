"""Content addressing: derive full and short ids from blob bytes."""

import hashlib
import string
from dataclasses import dataclass

from pastecas.errors import InvalidIdError

FULL_ID_LENGTH = 64
SHORT_ID_LENGTH = 8

_HEX_DIGITS = frozenset(string.hexdigits)


@dataclass(frozen=True, slots=True)
class Address:
    """Full and short identifiers of one piece of content."""

    full_id: str
    short_id: str


def full_id_of(content: bytes) -> str:
    """Return the SHA-256 hex digest of ``content``."""
    if not isinstance(content, (bytes, bytearray, memoryview)):
        msg = f"content must be bytes, got {type(content).__name__}."
        raise TypeError(msg)
    return hashlib.sha256(content).hexdigest()


def address(content: bytes) -> Address:
    """Derive the ``Address`` of ``content``. Never fails for any byte sequence."""
    full_id = full_id_of(content)
    return Address(full_id=full_id, short_id=full_id[:SHORT_ID_LENGTH])


def _is_hex(value: str, length: int) -> bool:
    return len(value) == length and all(char in _HEX_DIGITS for char in value)


def is_full_id(value: object) -> bool:
    """Return whether ``value`` is a well-formed full id."""
    return isinstance(value, str) and _is_hex(value, FULL_ID_LENGTH)


def is_short_id(value: object) -> bool:
    """Return whether ``value`` is a well-formed short id."""
    return isinstance(value, str) and _is_hex(value, SHORT_ID_LENGTH)


def normalize_full_id(value: str) -> str:
    """Validate a full id and return it in lowercase."""
    if not is_full_id(value):
        raise InvalidIdError(str(value), "full")
    return value.lower()


def normalize_short_id(value: str) -> str:
    """Validate a short id and return it in lowercase."""
    if not is_short_id(value):
        raise InvalidIdError(str(value), "short")
    return value.lower()
