"""
Circulation history model for the Library Catalog.

Each issue or return produces one HistoryRecord. Records are frozen: the
history is an append-only log, and a record is never edited or removed.
The book title is copied into the record at the time of the event so the
log stays readable after the book itself is deleted.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .book import coerce_timestamp, utc_now


class HistoryAction(str, Enum):
    """Kind of circulation event."""

    ISSUE = "Issue"
    RETURN = "Return"


class HistoryRecord(BaseModel):
    """
    Represents one issue or return event.

    ``book_id`` is a plain reference: it is not checked against the
    catalog and may point at a book that has since been deleted.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str = Field(..., description="History record identifier", examples=["1", "2"])

    book_id: str = Field(..., description="Id of the book the event concerns")

    book_title: str = Field(..., description="Book title at the time of the event")

    action: HistoryAction = Field(..., description="Issue or Return")

    borrower: str = Field(..., description="Borrower involved in the event")

    date: datetime = Field(
        default_factory=utc_now,
        description="When the event happened",
    )

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v: Any) -> Any:
        return coerce_timestamp(v)

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match over title, borrower and action.

        ``term`` must already be lowercased.
        """
        return any(
            term in field.lower() for field in (self.book_title, self.borrower, self.action.value)
        )
