"""
Tests for catalog maintenance tools (add, delete).

1. Input validation rules for new books
2. Successful additions and their response data
3. The confirmation step before deletion
4. Catalog state after each call
"""

from unittest.mock import patch

import pytest

from library_catalog.tools.catalog import (
    AddBookInput,
    add_book_handler,
    delete_book_handler,
)

VALID_BOOK = {
    "title": "Dune",
    "author": "Frank Herbert",
    "isbn": "9780441013593",
    "category": "Science Fiction",
}


def text_of(result: dict) -> str:
    return result["content"][0]["text"]


class TestAddBookInput:
    def test_whitespace_is_stripped(self):
        params = AddBookInput(
            title="  Dune ", author=" Frank Herbert", isbn="9780441013593 ", category=" SF "
        )
        assert params.title == "Dune"
        assert params.category == "SF"

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("title", "D"),
            ("title", "   "),
            ("author", "F"),
            ("isbn", "123456789"),
            ("category", ""),
        ],
    )
    def test_rejects_short_values(self, field, value):
        with pytest.raises(ValueError):
            AddBookInput(**{**VALID_BOOK, field: value})


class TestAddBookTool:
    async def test_add_book_success(self, store):
        result = await add_book_handler(store, VALID_BOOK)

        assert "isError" not in result
        assert text_of(result) == '"Dune" has been added to the library.'

        book = result["data"]["book"]
        assert book["id"] == "6"
        assert book["status"] == "Available"
        assert book["borrower"] is None
        assert book["added_date_display"]

        assert store.get_book_by_id("6").title == "Dune"

    async def test_add_book_stores_stripped_values(self, store):
        result = await add_book_handler(store, {**VALID_BOOK, "title": "  Dune  "})

        assert result["data"]["book"]["title"] == "Dune"
        assert store.get_book_by_id("6").title == "Dune"

    async def test_add_book_invalid_isbn(self, store):
        result = await add_book_handler(store, {**VALID_BOOK, "isbn": "12345"})

        assert result["isError"] is True
        assert "Invalid book details" in text_of(result)
        assert "isbn" in text_of(result)
        assert len(store.get_books()) == 5

    async def test_add_book_missing_category(self, store):
        arguments = dict(VALID_BOOK)
        del arguments["category"]

        result = await add_book_handler(store, arguments)

        assert result["isError"] is True
        assert "category" in text_of(result)

    async def test_add_book_storage_failure(self, store):
        with patch.object(store, "add_book", side_effect=RuntimeError("disk full")):
            result = await add_book_handler(store, VALID_BOOK)

        assert result["isError"] is True
        assert "Failed to add book: disk full" in text_of(result)


class TestDeleteBookTool:
    async def test_delete_requires_confirmation(self, store):
        result = await delete_book_handler(store, {"book_id": "3"})

        assert "isError" not in result
        assert "cannot be undone" in text_of(result)
        assert '"The Great Gatsby"' in text_of(result)
        assert result["data"]["requires_confirmation"] is True
        assert result["data"]["book"]["id"] == "3"
        assert store.get_book_by_id("3") is not None

    async def test_delete_confirmed(self, store):
        result = await delete_book_handler(store, {"book_id": "3", "confirm": True})

        assert "isError" not in result
        assert text_of(result) == '"The Great Gatsby" has been removed from the library.'
        assert result["data"] == {"deleted_id": "3"}
        assert store.get_book_by_id("3") is None

    async def test_delete_unknown_book(self, store):
        result = await delete_book_handler(store, {"book_id": "999", "confirm": True})

        assert result["isError"] is True
        assert text_of(result) == "Book not found: 999"
        assert len(store.get_books()) == 5

    async def test_delete_missing_id(self, store):
        result = await delete_book_handler(store, {"confirm": True})

        assert result["isError"] is True
        assert "Invalid delete request" in text_of(result)
