"""
Catalog store for the Library Catalog.

``CatalogStore`` is the single owner of the book list and the circulation
history. It:

1. **Loads** both collections once, from key-value storage or the seed data
2. **Answers queries** (lists, lookups, searches, statistics)
3. **Applies circulation transitions** (issue and return)
4. **Persists** both collections after every successful change

Domain failures (unknown id, wrong status) are reported through return
values, never exceptions: mutations return ``False`` and lookups return
``None``. Exceptions are reserved for storage problems.

Nothing here validates user input. Callers (see the ``tools`` package)
check titles, borrower names and dates before calling in.
"""

import logging
from collections.abc import Callable, Iterable
from datetime import date, datetime
from typing import Protocol, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from ..config import CatalogConfig
from ..database.kv_store import KeyValueStore, create_key_value_store
from ..models.book import Book, BookCreate, BookStatus
from ..models.history import HistoryAction, HistoryRecord
from .seed import seed_books, seed_history

logger = logging.getLogger(__name__)

BOOKS_KEY = "library_books"
HISTORY_KEY = "library_history"

_BOOK_LIST = TypeAdapter(list[Book])
_HISTORY_LIST = TypeAdapter(list[HistoryRecord])


class CatalogError(Exception):
    """Base exception for catalog failures that are not domain outcomes."""


class CorruptCatalogError(CatalogError):
    """Raised when stored catalog data cannot be read back."""


class CatalogStats(BaseModel):
    """Summary counts for the dashboard."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_books: int = Field(..., description="Books in the catalog")
    available_books: int = Field(..., description="Books on the shelf")
    issued_books: int = Field(..., description="Books out with a borrower")
    categories: int = Field(..., description="Distinct categories among current books")


class _Identified(Protocol):
    id: str


T = TypeVar("T")


def next_id(records: Iterable[_Identified]) -> str:
    """
    Next free numeric id for a collection.

    One more than the highest numeric id in use. While nothing has been
    deleted this equals ``len(records) + 1``; after a deletion it still
    never hands out an id that is already taken.
    """
    highest = max((int(r.id) for r in records if r.id.isdecimal()), default=0)
    return str(highest + 1)


class CatalogStore:
    """
    In-memory catalog backed by a key-value store.

    The store is an ordinary object: create one and pass it to whatever
    needs it. Two stores over the same storage do not see each other's
    changes until they reload.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        books_key: str = BOOKS_KEY,
        history_key: str = HISTORY_KEY,
    ):
        """
        Initialize the store and load its contents.

        Args:
            storage: Key-value backend holding the serialized collections
            books_key: Storage key for the book list
            history_key: Storage key for the history list

        Raises:
            CorruptCatalogError: If stored data exists but cannot be parsed
            StorageError: If the backend cannot be read
        """
        self.storage = storage
        self.books_key = books_key
        self.history_key = history_key
        self._books: list[Book] = []
        self._history: list[HistoryRecord] = []
        self.load()

    @classmethod
    def from_config(cls, config: CatalogConfig) -> "CatalogStore":
        """Build a store on the backend and keys named in ``config``."""
        return cls(
            create_key_value_store(config),
            books_key=config.books_key,
            history_key=config.history_key,
        )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> None:
        """(Re)load both collections, falling back to seed data per key."""
        self._books = self._load_collection(self.books_key, _BOOK_LIST, seed_books)
        self._history = self._load_collection(self.history_key, _HISTORY_LIST, seed_history)
        logger.info(
            "Catalog loaded: %d books, %d history records", len(self._books), len(self._history)
        )

    def _load_collection(
        self, key: str, adapter: TypeAdapter[list[T]], seed: Callable[[], list[T]]
    ) -> list[T]:
        raw = self.storage.get_item(key)
        if not raw:
            logger.info("Nothing stored under '%s', using initial data", key)
            return seed()
        try:
            return adapter.validate_json(raw)
        except ValidationError as e:
            logger.error("Stored value for '%s' is unreadable: %s", key, e)
            raise CorruptCatalogError(f"Stored value for '{key}' is not a valid collection") from e

    def save(self) -> None:
        """Write both collections to storage in a single atomic write."""
        self._write(self._books, self._history)

    def _write(self, books: list[Book], history: list[HistoryRecord]) -> None:
        self.storage.set_items(
            {
                self.books_key: _BOOK_LIST.dump_json(books, by_alias=True).decode(),
                self.history_key: _HISTORY_LIST.dump_json(history, by_alias=True).decode(),
            }
        )
        logger.debug("Catalog saved")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_books(self) -> list[Book]:
        return list(self._books)

    def get_history(self) -> list[HistoryRecord]:
        return list(self._history)

    def get_available_books(self) -> list[Book]:
        return [book for book in self._books if book.status == BookStatus.AVAILABLE]

    def get_issued_books(self) -> list[Book]:
        return [book for book in self._books if book.status == BookStatus.ISSUED]

    def get_book_by_id(self, book_id: str) -> Book | None:
        return next((book for book in self._books if book.id == book_id), None)

    def search_books(self, term: str) -> list[Book]:
        """
        Find books whose title, author, ISBN or category contains ``term``.

        A blank term finds nothing: no search has been typed yet.
        """
        if not term.strip():
            return []
        needle = term.lower()
        return [book for book in self._books if book.matches(needle)]

    def search_history(self, term: str) -> list[HistoryRecord]:
        """
        Find history records whose book title, borrower or action contains ``term``.

        Unlike ``search_books``, a blank term returns the whole history.
        """
        if not term.strip():
            return list(self._history)
        needle = term.lower()
        return [record for record in self._history if record.matches(needle)]

    def get_stats(self) -> CatalogStats:
        return CatalogStats(
            total_books=len(self._books),
            available_books=len(self.get_available_books()),
            issued_books=len(self.get_issued_books()),
            categories=len({book.category for book in self._books}),
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_book(self, data: BookCreate) -> Book:
        """
        Add a book to the catalog.

        The new book is always Available with no borrower, whatever the
        caller supplies.
        """
        book = Book(
            id=next_id(self._books),
            title=data.title,
            author=data.author,
            isbn=data.isbn,
            category=data.category,
        )
        self._commit([*self._books, book], self._history)
        logger.info("Added book %s: '%s'", book.id, book.title)
        return book

    def delete_book(self, book_id: str) -> bool:
        """
        Remove a book. History entries that mention it are kept.

        Returns:
            True if a book was removed, False if no book has that id
        """
        remaining = [book for book in self._books if book.id != book_id]
        if len(remaining) == len(self._books):
            logger.info("Delete ignored: no book with id %s", book_id)
            return False

        self._commit(remaining, self._history)
        logger.info("Deleted book %s", book_id)
        return True

    def issue_book(self, book_id: str, borrower: str, due_date: datetime | date | str) -> bool:
        """
        Issue an available book to a borrower.

        Returns:
            True on success; False if the book is unknown or already issued

        Raises:
            ValueError: If ``due_date`` is a string that is not an ISO date
        """
        book = self.get_book_by_id(book_id)
        if book is None or book.status != BookStatus.AVAILABLE:
            logger.info("Issue refused for book %s: not available", book_id)
            return False

        issued = book.model_copy()
        issued.issue(borrower, due_date)
        self._commit(
            self._with_book(issued),
            [*self._history, self._history_record(issued, HistoryAction.ISSUE, borrower)],
        )
        logger.info("Issued book %s to %s", book_id, borrower)
        return True

    def return_book(self, book_id: str) -> bool:
        """
        Return an issued book to the shelf.

        Returns:
            True on success; False if the book is unknown, not issued, or
            has no borrower recorded
        """
        book = self.get_book_by_id(book_id)
        if book is None or book.status != BookStatus.ISSUED or not book.borrower:
            logger.info("Return refused for book %s: not issued", book_id)
            return False

        returned = book.model_copy()
        borrower = returned.return_copy()
        self._commit(
            self._with_book(returned),
            [*self._history, self._history_record(returned, HistoryAction.RETURN, borrower)],
        )
        logger.info("Book %s returned by %s", book_id, borrower)
        return True

    def _commit(self, books: list[Book], history: list[HistoryRecord]) -> None:
        """Write the new collections, then adopt them. A failed write changes nothing."""
        self._write(books, history)
        self._books = books
        self._history = history

    def _with_book(self, updated: Book) -> list[Book]:
        return [updated if book.id == updated.id else book for book in self._books]

    def _history_record(self, book: Book, action: HistoryAction, borrower: str) -> HistoryRecord:
        return HistoryRecord(
            id=next_id(self._history),
            book_id=book.id,
            book_title=book.title,
            action=action,
            borrower=borrower,
        )
