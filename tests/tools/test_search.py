"""
Tests for search tools.

Book search and history search treat a blank term differently: the first
finds nothing, the second returns the whole history.
"""

import os
from datetime import date, timedelta
from unittest.mock import AsyncMock, patch

from library_catalog.config import reset_config
from library_catalog.tools.circulation import issue_book_handler
from library_catalog.tools.search import search_books_handler, search_history_handler


def text_of(result: dict) -> str:
    return result["content"][0]["text"]


class TestSearchBooksTool:
    async def test_search_by_author(self, store):
        result = await search_books_handler(store, {"term": "orwell"})

        assert "isError" not in result
        assert text_of(result) == "Found 1 book(s) matching 'orwell'."
        assert result["data"]["count"] == 1
        assert result["data"]["books"][0]["title"] == "1984"

    async def test_search_by_category(self, store):
        result = await search_books_handler(store, {"term": "FICTION"})

        assert [book["id"] for book in result["data"]["books"]] == ["1", "2", "3"]

    async def test_no_results(self, store):
        result = await search_books_handler(store, {"term": "tolstoy"})

        assert "isError" not in result
        assert text_of(result) == "No books found for 'tolstoy'. Try a different search term."
        assert result["data"]["books"] == []

    async def test_blank_term_prompts_for_input(self, store):
        for arguments in ({}, {"term": ""}, {"term": "   "}):
            result = await search_books_handler(store, arguments)

            assert text_of(result) == "Type in a search term to find books."
            assert result["data"]["count"] == 0
            assert result["data"]["books"] == []

    async def test_term_too_long(self, store):
        result = await search_books_handler(store, {"term": "x" * 201})

        assert result["isError"] is True
        assert "Invalid search" in text_of(result)

    async def test_waits_for_simulated_latency(self, store):
        with (
            patch.dict(os.environ, {"LIBRARY_CATALOG_SIMULATED_LATENCY_MS": "300"}),
            patch("library_catalog.tools.responses.asyncio.sleep", new=AsyncMock()) as sleep,
        ):
            reset_config()
            await search_books_handler(store, {"term": "gatsby"})

        sleep.assert_awaited_once_with(0.3)


class TestSearchHistoryTool:
    async def test_blank_term_returns_everything_newest_first(self, store):
        result = await search_history_handler(store, {})

        assert text_of(result) == "Showing all 2 history record(s)."
        assert [record["id"] for record in result["data"]["records"]] == ["2", "1"]
        assert result["data"]["records"][0]["book_title"] == "The Hobbit"

    async def test_search_by_borrower(self, store):
        result = await search_history_handler(store, {"term": "jane"})

        assert text_of(result) == "Found 1 history record(s) matching 'jane'."
        assert result["data"]["records"][0]["borrower"] == "Jane Smith"
        assert result["data"]["records"][0]["date_display"].startswith("May 15, 2025")

    async def test_search_by_action(self, store):
        due = (date.today() + timedelta(days=7)).isoformat()
        await issue_book_handler(store, {"book_id": "1", "borrower": "Alice", "due_date": due})
        store.return_book("1")

        result = await search_history_handler(store, {"term": "return"})

        assert result["data"]["count"] == 1
        assert result["data"]["records"][0]["action"] == "Return"
        assert result["data"]["records"][0]["borrower"] == "Alice"

    async def test_no_results(self, store):
        result = await search_history_handler(store, {"term": "nobody"})

        assert text_of(result) == "No history records found."
        assert result["data"]["count"] == 0
