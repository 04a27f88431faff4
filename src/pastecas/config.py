"""Settings for opening a file-backed store."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from pastecas.blobs import BlobStore, FileBackend, ShortIdPolicy

if TYPE_CHECKING:
    from collections.abc import Mapping

ENV_PREFIX = "PASTECAS_"
DEFAULT_ROOT = Path("pastes")

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _parse_bool(value: str, *, field_name: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    msg = f"{field_name} must be a boolean flag, got {value!r}."
    raise ValueError(msg)


def parse_log_level(value: str) -> str:
    """Validate a logging level name and return it in upper case."""
    level = value.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        msg = f"Unknown log level: {value!r}."
        raise ValueError(msg)
    return level


@dataclass(frozen=True, slots=True)
class StoreSettings:
    """Where blobs live and how short ids are resolved."""

    root: Path = DEFAULT_ROOT
    short_id_policy: ShortIdPolicy = ShortIdPolicy.FIRST_MATCH
    use_index: bool = True
    exclusive_writer: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> StoreSettings:
        """Build settings from ``PASTECAS_*`` environment variables."""
        env = os.environ if environ is None else environ
        defaults = cls()

        root = env.get(f"{ENV_PREFIX}ROOT")
        policy = env.get(f"{ENV_PREFIX}SHORT_ID_POLICY")
        use_index = env.get(f"{ENV_PREFIX}USE_INDEX")
        exclusive_writer = env.get(f"{ENV_PREFIX}EXCLUSIVE_WRITER")
        log_level = env.get(f"{ENV_PREFIX}LOG_LEVEL")

        try:
            short_id_policy = ShortIdPolicy(policy.strip().lower()) if policy else defaults.short_id_policy
        except ValueError:
            msg = f"{ENV_PREFIX}SHORT_ID_POLICY must be one of {[item.value for item in ShortIdPolicy]}, got {policy!r}."
            raise ValueError(msg) from None

        return cls(
            root=Path(root) if root else defaults.root,
            short_id_policy=short_id_policy,
            use_index=(
                _parse_bool(use_index, field_name=f"{ENV_PREFIX}USE_INDEX") if use_index else defaults.use_index
            ),
            exclusive_writer=(
                _parse_bool(exclusive_writer, field_name=f"{ENV_PREFIX}EXCLUSIVE_WRITER")
                if exclusive_writer
                else defaults.exclusive_writer
            ),
            log_level=parse_log_level(log_level) if log_level else defaults.log_level,
        )


def open_store(settings: StoreSettings | None = None) -> BlobStore:
    """Open a ``BlobStore`` over a ``FileBackend`` rooted at ``settings.root``."""
    if settings is None:
        settings = StoreSettings.from_env()
    return BlobStore(
        FileBackend(settings.root),
        short_id_policy=settings.short_id_policy,
        use_index=settings.use_index,
        exclusive_writer=settings.exclusive_writer,
    )
