"""
Circulation tools for the Library Catalog server.

1. issue_book: lend an available book to a borrower until a due date
2. return_book: take an issued book back, after explicit confirmation

Both tools refuse requests the catalog would reject anyway (wrong status,
unknown book) with a readable message instead of a bare failure.
"""

import logging
from datetime import date
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..catalog.store import CatalogStore
from ..formatting import format_book, format_date
from .responses import error_response, simulate_latency, text_response, validation_message

logger = logging.getLogger(__name__)


# =============================================================================
# ISSUE TOOL
# =============================================================================


class IssueBookInput(BaseModel):
    """Input schema for the issue_book tool."""

    book_id: str = Field(
        ...,
        description="Catalog id of an available book",
        min_length=1,
        examples=["3"],
    )

    borrower: str = Field(
        ...,
        description="Name of the borrower (at least 2 characters)",
        min_length=2,
        max_length=200,
        examples=["Alice", "John Doe"],
    )

    due_date: date = Field(
        ...,
        description="Date the book is due back; must be after today",
        examples=["2025-07-01"],
    )

    @field_validator("book_id", "borrower", mode="before")
    @classmethod
    def strip_whitespace(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("due_date")
    @classmethod
    def validate_due_date(cls, v: date) -> date:
        """The earliest due date is tomorrow."""
        if v <= date.today():
            raise ValueError("Due date must be after today")
        return v


async def issue_book_handler(store: CatalogStore, arguments: dict[str, Any]) -> dict[str, Any]:
    """
    Handler for the issue_book tool.

    Args:
        store: Catalog holding the book
        arguments: Raw tool arguments

    Returns:
        Response with the issued book, or an error
    """
    try:
        params = IssueBookInput.model_validate(arguments)
    except ValidationError as e:
        logger.warning("Invalid issue_book parameters: %s", e)
        return error_response(f"Invalid issue request: {validation_message(e)}")

    try:
        await simulate_latency()
        issued = store.issue_book(params.book_id, params.borrower, params.due_date)
    except Exception as e:
        logger.exception("Unexpected error in issue_book tool")
        return error_response(f"Failed to issue book: {e!s}")

    if not issued:
        return error_response("Failed to issue book. It may no longer be available.")

    book = store.get_book_by_id(params.book_id)
    return text_response(
        f"Book has been issued to {params.borrower}. "
        f"Due date: {format_date(book.due_date)}",
        {"book": format_book(book)},
    )


# =============================================================================
# RETURN TOOL
# =============================================================================


class ReturnBookInput(BaseModel):
    """Input schema for the return_book tool."""

    book_id: str = Field(
        ...,
        description="Catalog id of an issued book",
        min_length=1,
        examples=["2"],
    )

    confirm: bool = Field(
        default=False,
        description="Must be true to record the return; otherwise a confirmation prompt is returned",
    )


async def return_book_handler(store: CatalogStore, arguments: dict[str, Any]) -> dict[str, Any]:
    """Handler for the return_book tool."""
    try:
        params = ReturnBookInput.model_validate(arguments)
    except ValidationError as e:
        logger.warning("Invalid return_book parameters: %s", e)
        return error_response(f"Invalid return request: {validation_message(e)}")

    book = store.get_book_by_id(params.book_id)
    if book is None:
        return error_response(f"Book not found: {params.book_id}")

    if not book.is_issued:
        return error_response(f'"{book.title}" is not currently issued.')

    if not params.confirm:
        return text_response(
            f'Are you sure you want to mark "{book.title}" as returned? '
            "Call again with confirm=true to proceed.",
            {"requires_confirmation": True, "book": format_book(book)},
        )

    try:
        await simulate_latency()
        returned = store.return_book(params.book_id)
    except Exception as e:
        logger.exception("Unexpected error in return_book tool")
        return error_response(f"Failed to return book: {e!s}")

    if not returned:
        return error_response("Failed to return book.")

    book = store.get_book_by_id(params.book_id)
    return text_response(
        f'"{book.title}" has been returned to the library.',
        {"book": format_book(book)},
    )
