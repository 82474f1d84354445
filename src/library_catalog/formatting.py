"""Display formatting shared by resources and tools.

Catalog models carry raw timestamps; clients get those as ISO strings plus
a human-readable rendering next to them.
"""

from datetime import datetime
from typing import Any

from .models.book import Book
from .models.history import HistoryRecord

DATE_FORMAT = "%B %d, %Y"
TIME_FORMAT = "%H:%M"


def format_date(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.strftime(DATE_FORMAT)


def format_time(value: datetime) -> str:
    return value.strftime(TIME_FORMAT)


def format_book(book: Book) -> dict[str, Any]:
    """Format a book for a client response."""
    data = book.model_dump(mode="json")
    data["added_date_display"] = format_date(book.added_date)
    data["due_date_display"] = format_date(book.due_date)
    return data


def format_history_record(record: HistoryRecord) -> dict[str, Any]:
    """Format a history record for a client response."""
    data = record.model_dump(mode="json")
    data["date_display"] = f"{format_date(record.date)} {format_time(record.date)}"
    return data


def newest_first(records: list[HistoryRecord]) -> list[HistoryRecord]:
    """History sorted by event time, most recent first."""
    return sorted(records, key=lambda record: record.date, reverse=True)
