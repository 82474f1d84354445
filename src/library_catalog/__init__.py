"""
Library Catalog Package.

A single-device library catalog: books, their circulation state and the
issue/return history, kept in a local key-value store.

Key Components:
- models: Pydantic models for books and history records
- database: key-value storage backends (SQLAlchemy and in-memory)
- catalog: the catalog store that owns and persists both collections
- config: Configuration management with pydantic-settings
- resources: read-only MCP views of the catalog
- tools: MCP actions that change or search the catalog
"""

__version__ = "0.1.0"

from .catalog import CatalogStore
from .models import Book, BookCreate, BookStatus, HistoryAction, HistoryRecord

__all__ = [
    "Book",
    "BookCreate",
    "BookStatus",
    "CatalogStore",
    "HistoryAction",
    "HistoryRecord",
    "__version__",
]
