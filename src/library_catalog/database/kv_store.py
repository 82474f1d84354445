"""
Key-value storage for the Library Catalog.

The catalog persists itself the way a browser page uses local storage:
string values under string keys, read once at startup and rewritten on
every change. This module defines that interface and two backends:

1. **SqlKeyValueStore**: durable, one SQLAlchemy row per key
2. **MemoryKeyValueStore**: process-local, for tests and throwaway sessions

``set_items`` writes several keys as one unit. The catalog uses it to
save books and history together, so a crash can never leave one key
updated and the other stale.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from ..config import CatalogConfig
from .schema import StorageEntry
from .session import DatabaseManager

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the storage backend cannot read or write."""


class KeyValueStore(ABC):
    """Abstract string key-value store."""

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None if absent."""

    @abstractmethod
    def set_items(self, items: Mapping[str, str]) -> None:
        """Store every key/value pair in ``items`` as a single atomic write."""

    @abstractmethod
    def remove_item(self, key: str) -> bool:
        """Delete ``key``. Returns True if it existed."""

    @abstractmethod
    def keys(self) -> list[str]:
        """All keys currently stored, sorted."""

    @abstractmethod
    def clear(self) -> None:
        """Delete every key."""

    def set_item(self, key: str, value: str) -> None:
        self.set_items({key: value})

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get_item(key) is not None


class MemoryKeyValueStore(KeyValueStore):
    """Dict-backed store. Contents live as long as the object."""

    def __init__(self, initial: Mapping[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_items(self, items: Mapping[str, str]) -> None:
        self._data.update(items)

    def remove_item(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self) -> list[str]:
        return sorted(self._data)

    def clear(self) -> None:
        self._data.clear()


class SqlKeyValueStore(KeyValueStore):
    """
    Store backed by the ``storage_entries`` table.

    Every call runs in its own transaction; ``set_items`` upserts all of
    its keys inside one transaction.
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager
        self.db_manager.init_database()

    def get_item(self, key: str) -> str | None:
        try:
            with self.db_manager.session_scope() as session:
                entry = session.get(StorageEntry, key)
                return None if entry is None else entry.value
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read '{key}': {e!s}") from e

    def set_items(self, items: Mapping[str, str]) -> None:
        try:
            with self.db_manager.session_scope() as session:
                for key, value in items.items():
                    session.merge(StorageEntry(key=key, value=value))
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to write {sorted(items)}: {e!s}") from e
        logger.debug("Stored keys: %s", ", ".join(items))

    def remove_item(self, key: str) -> bool:
        try:
            with self.db_manager.session_scope() as session:
                result = session.execute(delete(StorageEntry).where(StorageEntry.key == key))
                return result.rowcount > 0
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to remove '{key}': {e!s}") from e

    def keys(self) -> list[str]:
        try:
            with self.db_manager.session_scope() as session:
                return list(
                    session.execute(select(StorageEntry.key).order_by(StorageEntry.key)).scalars()
                )
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to list keys: {e!s}") from e

    def clear(self) -> None:
        try:
            with self.db_manager.session_scope() as session:
                session.execute(delete(StorageEntry))
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to clear storage: {e!s}") from e


def create_key_value_store(config: CatalogConfig) -> KeyValueStore:
    """Build the backend selected by ``config.storage_backend``."""
    if config.storage_backend == "memory":
        logger.info("Using in-memory storage; the catalog will not survive a restart")
        return MemoryKeyValueStore()
    return SqlKeyValueStore(DatabaseManager(config.get_database_url()))
