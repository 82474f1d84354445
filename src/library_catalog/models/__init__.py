"""
Library Catalog Models.

Pydantic models for the two collections the catalog owns:
- Book: catalog entries and their circulation state
- HistoryRecord: the append-only issue/return log
"""

from .book import Book, BookCreate, BookStatus
from .history import HistoryAction, HistoryRecord

__all__ = [
    "Book",
    "BookCreate",
    "BookStatus",
    "HistoryAction",
    "HistoryRecord",
]
