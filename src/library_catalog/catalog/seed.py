"""
Initial catalog contents.

Used only when storage holds nothing for a collection. Factories return
fresh model instances on every call so that a store mutating its books in
place can never alter the seed itself.
"""

from ..models.book import Book, BookStatus
from ..models.history import HistoryAction, HistoryRecord

_SEED_BOOKS = [
    {
        "id": "1",
        "title": "To Kill a Mockingbird",
        "author": "Harper Lee",
        "isbn": "9780061120084",
        "category": "Fiction",
        "status": BookStatus.AVAILABLE,
        "added_date": "2025-01-15",
    },
    {
        "id": "2",
        "title": "1984",
        "author": "George Orwell",
        "isbn": "9780451524935",
        "category": "Science Fiction",
        "status": BookStatus.ISSUED,
        "added_date": "2025-02-10",
        "borrower": "John Doe",
        "due_date": "2025-06-10",
    },
    {
        "id": "3",
        "title": "The Great Gatsby",
        "author": "F. Scott Fitzgerald",
        "isbn": "9780743273565",
        "category": "Fiction",
        "status": BookStatus.AVAILABLE,
        "added_date": "2025-03-05",
    },
    {
        "id": "4",
        "title": "Pride and Prejudice",
        "author": "Jane Austen",
        "isbn": "9780141439518",
        "category": "Romance",
        "status": BookStatus.AVAILABLE,
        "added_date": "2025-01-20",
    },
    {
        "id": "5",
        "title": "The Hobbit",
        "author": "J.R.R. Tolkien",
        "isbn": "9780547928227",
        "category": "Fantasy",
        "status": BookStatus.ISSUED,
        "added_date": "2025-02-15",
        "borrower": "Jane Smith",
        "due_date": "2025-06-15",
    },
]

_SEED_HISTORY = [
    {
        "id": "1",
        "book_id": "2",
        "book_title": "1984",
        "action": HistoryAction.ISSUE,
        "borrower": "John Doe",
        "date": "2025-05-10",
    },
    {
        "id": "2",
        "book_id": "5",
        "book_title": "The Hobbit",
        "action": HistoryAction.ISSUE,
        "borrower": "Jane Smith",
        "date": "2025-05-15",
    },
]


def seed_books() -> list[Book]:
    return [Book(**data) for data in _SEED_BOOKS]


def seed_history() -> list[HistoryRecord]:
    return [HistoryRecord(**data) for data in _SEED_HISTORY]
