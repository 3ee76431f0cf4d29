"""Persistence media for the serialized sweet collection.

A backend holds named slots of text. The storage engine keeps the whole
collection in one slot and always rewrites it in a single ``put``.

Backends raise PersistenceError for any failure of the medium; a missing
slot is not a failure and reads as None.
"""

import logging
import tempfile
from pathlib import Path
from typing import (
    Dict,
    Optional,
    Union,
)

from .exceptions import PersistenceError


logger = logging.getLogger(__name__)


class StorageBackend:
    """Storage interface for serialized collections.

    Implement with a file for production, or in-memory for tests.
    """

    def get(self, key: str) -> Optional[str]:
        """Read a slot. Returns None if it was never written or was deleted."""
        raise NotImplementedError

    def put(self, key: str, payload: str) -> None:
        """Replace a slot's content in one write."""
        raise NotImplementedError

    def delete(self, key: str) -> None:
        """Remove a slot. Deleting a missing slot is not an error."""
        raise NotImplementedError


class MemoryBackend(StorageBackend):
    """In-memory storage, with an optional size quota per write.

    Attributes:
        slots: Slot name to payload.
        max_bytes: Writes whose UTF-8 size exceeds this are rejected, like a
            browser storage quota. None means unlimited.
    """

    def __init__(self, max_bytes: Optional[int] = None) -> None:
        self.slots: Dict[str, str] = {}
        self.max_bytes = max_bytes

    def get(self, key: str) -> Optional[str]:
        return self.slots.get(key)

    def put(self, key: str, payload: str) -> None:
        size = len(payload.encode("utf-8"))
        if self.max_bytes is not None and size > self.max_bytes:
            raise PersistenceError(f"Quota exceeded writing '{key}': {size} > {self.max_bytes} bytes", key=key)
        self.slots[key] = payload

    def delete(self, key: str) -> None:
        self.slots.pop(key, None)


class JsonFileBackend(StorageBackend):
    """File storage: one ``<key>.json`` file per slot inside a directory.

    Writes go to a temporary file in the same directory which then atomically
    replaces the slot file, so readers see either the old or the new
    collection, never a partial one.
    """

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        """Path of the file holding a slot."""
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Error reading {path}: {e}", key=key) from e

    def put(self, key: str, payload: str) -> None:
        path = self.path_for(key)
        tmp_path: Optional[Path] = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w", encoding="utf-8", dir=self.directory, suffix=".tmp", delete=False
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(payload)

            # Atomically replace the slot file
            tmp_path.replace(path)
        except OSError as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise PersistenceError(f"Error writing {path}: {e}", key=key) from e

        logger.debug("Wrote %d bytes to %s", len(payload), path)

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceError(f"Error deleting {path}: {e}", key=key) from e
