"""
Catalog package for the Library Catalog.

The catalog store owns every book and history record and is the only
component allowed to change them.
"""

from .seed import seed_books, seed_history
from .store import (
    BOOKS_KEY,
    HISTORY_KEY,
    CatalogError,
    CatalogStats,
    CatalogStore,
    CorruptCatalogError,
    next_id,
)

__all__ = [
    "BOOKS_KEY",
    "HISTORY_KEY",
    "CatalogError",
    "CatalogStats",
    "CatalogStore",
    "CorruptCatalogError",
    "next_id",
    "seed_books",
    "seed_history",
]
