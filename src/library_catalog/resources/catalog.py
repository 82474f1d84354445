"""Catalog Resources - Read-only Views of the Library

These are the screens of the catalog: the dashboard, the book lists, a
single book, the circulation history and the headline statistics.

Resources:
- library://dashboard - Stats plus the most recently added books
- library://books - Every book in the catalog
- library://books/available - Books on the shelf
- library://books/issued - Books out with a borrower
- library://books/{book_id} - One book by id
- library://history - Circulation history, newest first
- library://stats - Counts of books, statuses and categories
"""

import logging
from typing import Any

from fastmcp.exceptions import ResourceError

from ..catalog.store import CatalogStore
from ..formatting import format_book, format_history_record, newest_first

logger = logging.getLogger(__name__)

RECENT_BOOKS_LIMIT = 3


def _book_list(books: list, label: str) -> dict[str, Any]:
    return {
        "list": label,
        "count": len(books),
        "books": [format_book(book) for book in books],
    }


async def dashboard_handler(store: CatalogStore) -> dict[str, Any]:
    """Returns the statistics and the last few books added, newest first."""
    logger.debug("Resource request - dashboard")
    recent = store.get_books()[-RECENT_BOOKS_LIMIT:][::-1]
    return {
        "stats": store.get_stats().model_dump(),
        "recent_books": [
            {
                "id": book.id,
                "title": book.title,
                "author": book.author,
                "category": book.category,
                "status": book.status.value,
            }
            for book in recent
        ],
    }


async def list_books_handler(store: CatalogStore) -> dict[str, Any]:
    logger.debug("Resource request - books")
    return _book_list(store.get_books(), "all")


async def list_available_books_handler(store: CatalogStore) -> dict[str, Any]:
    logger.debug("Resource request - books/available")
    return _book_list(store.get_available_books(), "available")


async def list_issued_books_handler(store: CatalogStore) -> dict[str, Any]:
    logger.debug("Resource request - books/issued")
    return _book_list(store.get_issued_books(), "issued")


async def get_book_handler(store: CatalogStore, book_id: str) -> dict[str, Any]:
    """Returns a single book; unknown ids are a resource error."""
    logger.debug("Resource request - books/%s", book_id)
    book = store.get_book_by_id(book_id)
    if book is None:
        raise ResourceError(f"Book not found: {book_id}")
    return format_book(book)


async def history_handler(store: CatalogStore) -> dict[str, Any]:
    logger.debug("Resource request - history")
    records = newest_first(store.get_history())
    return {
        "count": len(records),
        "records": [format_history_record(record) for record in records],
    }


async def stats_handler(store: CatalogStore) -> dict[str, Any]:
    logger.debug("Resource request - stats")
    return store.get_stats().model_dump()


def build_catalog_resources(store: CatalogStore) -> list[dict[str, Any]]:
    """
    Resource definitions bound to ``store``.

    Each entry carries the URI, metadata and a zero-argument (or
    URI-parameter-only) handler ready to register with FastMCP.
    """

    async def dashboard() -> dict[str, Any]:
        return await dashboard_handler(store)

    async def list_books() -> dict[str, Any]:
        return await list_books_handler(store)

    async def list_available_books() -> dict[str, Any]:
        return await list_available_books_handler(store)

    async def list_issued_books() -> dict[str, Any]:
        return await list_issued_books_handler(store)

    async def get_book(book_id: str) -> dict[str, Any]:
        return await get_book_handler(store, book_id)

    async def history() -> dict[str, Any]:
        return await history_handler(store)

    async def stats() -> dict[str, Any]:
        return await stats_handler(store)

    return [
        {
            "uri": "library://dashboard",
            "name": "Dashboard",
            "description": "Catalog statistics and the three most recently added books",
            "mime_type": "application/json",
            "handler": dashboard,
        },
        {
            "uri": "library://books",
            "name": "All Books",
            "description": "Every book in the catalog with its circulation status",
            "mime_type": "application/json",
            "handler": list_books,
        },
        {
            "uri": "library://books/available",
            "name": "Available Books",
            "description": "Books that can be issued right now",
            "mime_type": "application/json",
            "handler": list_available_books,
        },
        {
            "uri": "library://books/issued",
            "name": "Issued Books",
            "description": "Books currently out, with borrower and due date",
            "mime_type": "application/json",
            "handler": list_issued_books,
        },
        {
            "uri": "library://books/{book_id}",
            "name": "Book Details",
            "description": "A single book by catalog id",
            "mime_type": "application/json",
            "handler": get_book,
        },
        {
            "uri": "library://history",
            "name": "Circulation History",
            "description": "Every issue and return, newest first",
            "mime_type": "application/json",
            "handler": history,
        },
        {
            "uri": "library://stats",
            "name": "Catalog Statistics",
            "description": "Total, available and issued books, and number of categories",
            "mime_type": "application/json",
            "handler": stats,
        },
    ]
