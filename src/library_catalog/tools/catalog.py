"""
Catalog maintenance tools for the Library Catalog server.

This module implements the tools that change what is on the catalog:
1. add_book: validate a new entry and add it
2. delete_book: remove an entry, after explicit confirmation

The catalog store accepts anything it is given, so every rule about what
makes an acceptable title, author, ISBN or category lives here.
"""

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..catalog.store import CatalogStore
from ..formatting import format_book
from ..models.book import BookCreate
from .responses import error_response, simulate_latency, text_response, validation_message

logger = logging.getLogger(__name__)


# =============================================================================
# ADD BOOK TOOL
# =============================================================================


class AddBookInput(BaseModel):
    """
    Input schema for the add_book tool.

    Whitespace is stripped from every field before the length checks.
    """

    title: str = Field(
        ...,
        description="Book title (at least 2 characters)",
        min_length=2,
        max_length=500,
        examples=["Dune", "The Left Hand of Darkness"],
    )

    author: str = Field(
        ...,
        description="Author name (at least 2 characters)",
        min_length=2,
        max_length=200,
        examples=["Frank Herbert", "Ursula K. Le Guin"],
    )

    isbn: str = Field(
        ...,
        description="ISBN (at least 10 characters)",
        min_length=10,
        max_length=20,
        examples=["9780441013593", "0-441-01359-7"],
    )

    category: str = Field(
        ...,
        description="Category to file the book under",
        min_length=1,
        max_length=100,
        examples=["Fiction", "Science Fiction", "Romance", "Fantasy"],
    )

    @field_validator("title", "author", "isbn", "category", mode="before")
    @classmethod
    def strip_whitespace(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    def to_book_create(self) -> BookCreate:
        return BookCreate(
            title=self.title, author=self.author, isbn=self.isbn, category=self.category
        )


async def add_book_handler(store: CatalogStore, arguments: dict[str, Any]) -> dict[str, Any]:
    """
    Handler for the add_book tool.

    Args:
        store: Catalog to add to
        arguments: Raw tool arguments

    Returns:
        Response with the new book, or an error listing invalid fields
    """
    try:
        params = AddBookInput.model_validate(arguments)
    except ValidationError as e:
        logger.warning("Invalid add_book parameters: %s", e)
        return error_response(f"Invalid book details: {validation_message(e)}")

    try:
        await simulate_latency()
        book = store.add_book(params.to_book_create())
    except Exception as e:
        logger.exception("Unexpected error in add_book tool")
        return error_response(f"Failed to add book: {e!s}")

    return text_response(
        f'"{book.title}" has been added to the library.',
        {"book": format_book(book)},
    )


# =============================================================================
# DELETE BOOK TOOL
# =============================================================================


class DeleteBookInput(BaseModel):
    """Input schema for the delete_book tool."""

    book_id: str = Field(
        ...,
        description="Catalog id of the book to delete",
        min_length=1,
        examples=["3"],
    )

    confirm: bool = Field(
        default=False,
        description="Must be true to actually delete; otherwise a confirmation prompt is returned",
    )


async def delete_book_handler(store: CatalogStore, arguments: dict[str, Any]) -> dict[str, Any]:
    """
    Handler for the delete_book tool.

    Deletion cannot be undone, so the first call without ``confirm`` only
    describes what would be removed.
    """
    try:
        params = DeleteBookInput.model_validate(arguments)
    except ValidationError as e:
        logger.warning("Invalid delete_book parameters: %s", e)
        return error_response(f"Invalid delete request: {validation_message(e)}")

    book = store.get_book_by_id(params.book_id)
    if book is None:
        return error_response(f"Book not found: {params.book_id}")

    if not params.confirm:
        return text_response(
            f'This will permanently delete the book "{book.title}" from the library. '
            "This action cannot be undone. Call again with confirm=true to proceed.",
            {"requires_confirmation": True, "book": format_book(book)},
        )

    try:
        await simulate_latency()
        deleted = store.delete_book(params.book_id)
    except Exception as e:
        logger.exception("Unexpected error in delete_book tool")
        return error_response(f"Failed to delete book: {e!s}")

    if not deleted:
        return error_response("Failed to delete book.")

    return text_response(
        f'"{book.title}" has been removed from the library.',
        {"deleted_id": book.id},
    )
