"""FileBackend: directory-of-files persistence."""

import logging
import os
import tempfile
from pathlib import Path

from pastecas.addressing import is_full_id
from pastecas.errors import StorageFaultError

logger = logging.getLogger(__name__)

_PAYLOAD_SUFFIX = ".txt"
_TEMP_PREFIX = ".incoming-"


class FileBackend:
    """File-system-based key-value backend.

    Store each record as ``<key>.txt`` under a root directory. Records are
    written to a temporary file first and hard-linked into place, so a reader
    never sees a partial file and an existing record is never replaced.
    """

    def __init__(self, root: str | Path) -> None:
        """Initialize with a root directory, creating it if needed."""
        self._root = Path(root)
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageFaultError(str(self._root), "mkdir") from exc

    @property
    def root(self) -> Path:
        """Return the root directory path."""
        return self._root

    def _payload_path(self, key: str) -> Path | None:
        """Resolve the payload path and ensure it stays under the store root."""
        root = self._root.resolve()
        candidate = (self._root / f"{key}{_PAYLOAD_SUFFIX}").resolve()
        try:
            candidate.relative_to(root)
        except ValueError:
            return None
        return candidate

    def exists(self, key: str) -> bool:
        """Check whether a record file exists."""
        path = self._payload_path(key)
        if path is None:
            return False
        try:
            return path.is_file()
        except OSError as exc:
            raise StorageFaultError(key, "exists") from exc

    def write_if_absent(self, key: str, data: bytes) -> bool:
        """Write ``data`` to ``<key>.txt`` unless that file already exists."""
        path = self._payload_path(key)
        if path is None:
            msg = f"Key {key!r} resolves outside store root."
            raise ValueError(msg)

        temp_name: str | None = None
        try:
            if path.is_file():
                return False
            fd, temp_name = tempfile.mkstemp(prefix=_TEMP_PREFIX, dir=self._root)
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            try:
                os.link(temp_name, path)
            except FileExistsError:
                logger.debug("Lost write race for %s; record already present", key)
                return False
        except OSError as exc:
            raise StorageFaultError(key, "write") from exc
        finally:
            if temp_name is not None:
                self._discard(temp_name)
        return True

    def _discard(self, temp_name: str) -> None:
        """Remove a temporary file; leftovers are skipped by ``enumerate_keys``."""
        try:
            Path(temp_name).unlink(missing_ok=True)
        except OSError:
            logger.warning("Could not remove temporary file %s", temp_name, exc_info=True)

    def read(self, key: str) -> bytes | None:
        """Read a record file, or return ``None`` when it does not exist."""
        path = self._payload_path(key)
        if path is None:
            return None
        try:
            return path.read_bytes()
        except (FileNotFoundError, IsADirectoryError):
            return None
        except OSError as exc:
            raise StorageFaultError(key, "read") from exc

    def enumerate_keys(self) -> tuple[str, ...]:
        """List keys of record files, skipping temporaries and foreign names."""
        try:
            names = [entry.name for entry in os.scandir(self._root) if entry.is_file()]
        except OSError as exc:
            raise StorageFaultError(str(self._root), "enumerate") from exc
        keys = []
        for name in names:
            if not name.endswith(_PAYLOAD_SUFFIX):
                continue
            stem = name[: -len(_PAYLOAD_SUFFIX)]
            if is_full_id(stem) and stem == stem.lower():
                keys.append(stem)
        return tuple(keys)
