"""
Local persistent storage: one JSON file per collection.

The on-disk keys match the browser storage keys used by the front end
(``caseDatabase``, ``appointments``, ``bookedSlots``), so exported data can
be dropped straight into the storage directory.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from booking_sync.storage.base import Collection, StorageAdapter

logger = logging.getLogger(__name__)


class LocalStorageAdapter(StorageAdapter):
    """File-backed key-value store under a single directory."""

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, collection: Collection) -> Path:
        return self.directory / f"{Collection(collection).value}.json"

    def read(self, collection: Collection) -> Optional[str]:
        path = self._path(collection)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to read %s: %s", path, exc)
            return None

    def write(self, collection: Collection, payload: str) -> bool:
        path = self._path(collection)
        tmp = path.with_suffix(".json.tmp")
        try:
            tmp.write_text(payload, encoding="utf-8")
            tmp.replace(path)
        except OSError as exc:
            logger.error("Failed to write %s: %s", path, exc)
            return False
        logger.debug("Wrote %d bytes to %s", len(payload), path)
        return True


class MemoryStorageAdapter(StorageAdapter):
    """In-process dict store. Used by tests and throwaway sessions."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def read(self, collection: Collection) -> Optional[str]:
        return self._data.get(Collection(collection).value)

    def write(self, collection: Collection, payload: str) -> bool:
        self._data[Collection(collection).value] = payload
        return True

    def reset(self) -> None:
        """Clear all collections. Used by test fixtures for isolation."""
        self._data.clear()
