"""
Database package for the Library Catalog.

This package provides:
- SQLAlchemy schema for the key/value table (schema.py)
- Engine and session management (session.py)
- The key-value store interface and its backends (kv_store.py)
"""

from .kv_store import (
    KeyValueStore,
    MemoryKeyValueStore,
    SqlKeyValueStore,
    StorageError,
    create_key_value_store,
)
from .schema import Base, StorageEntry
from .session import DatabaseManager

__all__ = [
    "Base",
    "DatabaseManager",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "SqlKeyValueStore",
    "StorageEntry",
    "StorageError",
    "create_key_value_store",
]
