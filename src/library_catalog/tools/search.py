"""
Search tools for the Library Catalog server.

1. search_books: match title, author, ISBN or category
2. search_history: match book title, borrower or action

The two tools deliberately treat a blank term differently. A blank book
search shows nothing until the user types, while a blank history search
shows the whole log.
"""

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from ..catalog.store import CatalogStore
from ..formatting import format_book, format_history_record, newest_first
from .responses import error_response, simulate_latency, text_response, validation_message

logger = logging.getLogger(__name__)


class SearchInput(BaseModel):
    """Input schema shared by both search tools."""

    term: str = Field(
        default="",
        description="Case-insensitive text to look for",
        max_length=200,
        examples=["orwell", "fiction", "john"],
    )


async def search_books_handler(store: CatalogStore, arguments: dict[str, Any]) -> dict[str, Any]:
    """Handler for the search_books tool."""
    try:
        params = SearchInput.model_validate(arguments)
    except ValidationError as e:
        return error_response(f"Invalid search: {validation_message(e)}")

    if not params.term.strip():
        return text_response(
            "Type in a search term to find books.",
            {"term": params.term, "count": 0, "books": []},
        )

    await simulate_latency()
    results = store.search_books(params.term)
    logger.debug("search_books '%s': %d matches", params.term, len(results))

    if not results:
        message = f"No books found for '{params.term}'. Try a different search term."
    else:
        message = f"Found {len(results)} book(s) matching '{params.term}'."

    return text_response(
        message,
        {
            "term": params.term,
            "count": len(results),
            "books": [format_book(book) for book in results],
        },
    )


async def search_history_handler(store: CatalogStore, arguments: dict[str, Any]) -> dict[str, Any]:
    """Handler for the search_history tool. Results are newest first."""
    try:
        params = SearchInput.model_validate(arguments)
    except ValidationError as e:
        return error_response(f"Invalid search: {validation_message(e)}")

    records = newest_first(store.search_history(params.term))
    logger.debug("search_history '%s': %d matches", params.term, len(records))

    if not records:
        message = "No history records found."
    elif params.term.strip():
        message = f"Found {len(records)} history record(s) matching '{params.term}'."
    else:
        message = f"Showing all {len(records)} history record(s)."

    return text_response(
        message,
        {
            "term": params.term,
            "count": len(records),
            "records": [format_history_record(record) for record in records],
        },
    )
