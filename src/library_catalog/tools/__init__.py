"""Library Catalog tools.

Tools are the actions of the catalog server: each one validates its
input, calls exactly one catalog operation, and reports the outcome.
Handlers take the catalog store as their first argument; ``server``
binds them to the store it serves.
"""

from .catalog import add_book_handler, delete_book_handler
from .circulation import issue_book_handler, return_book_handler
from .search import search_books_handler, search_history_handler

__all__ = [
    "add_book_handler",
    "delete_book_handler",
    "issue_book_handler",
    "return_book_handler",
    "search_books_handler",
    "search_history_handler",
]
