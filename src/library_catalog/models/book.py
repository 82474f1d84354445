"""
Book model for the Library Catalog.

A book is a single catalog entry together with its circulation state.
Unlike a multi-copy catalog, every record here is one physical item that
is either on the shelf (Available) or out with a borrower (Issued).

The model is stored under camelCase keys (``addedDate``, ``dueDate``) so
that the persisted JSON keeps the layout of the browser local-storage
records, while Python code uses snake_case attributes.
"""

from datetime import UTC, date, datetime, time
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class BookStatus(str, Enum):
    """Circulation status of a book."""

    AVAILABLE = "Available"
    ISSUED = "Issued"


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def coerce_timestamp(value: Any) -> Any:
    """Normalize timestamp input to an aware UTC datetime.

    Accepts datetimes (naive values are taken as UTC), dates and
    date-only ISO strings such as ``"2025-07-01"`` (UTC midnight). Any
    other value is handed back to pydantic for regular validation.
    """
    if isinstance(value, str):
        text = value.strip()
        parse = date.fromisoformat if len(text) == 10 else datetime.fromisoformat
        try:
            value = parse(text)
        except ValueError:
            return value
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=UTC)
    return value


class BookCreate(BaseModel):
    """
    Data needed to add a book to the catalog.

    No rules are applied here beyond types: the catalog trusts its caller,
    and input checks belong to the view layer (see ``tools.catalog``).
    """

    title: str
    author: str
    isbn: str
    category: str


class Book(BaseModel):
    """
    Represents a book in the library catalog.

    Invariants:
    - Issued books always have a borrower
    - Available books have neither a borrower nor a due date
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "1",
                "title": "To Kill a Mockingbird",
                "author": "Harper Lee",
                "isbn": "9780061120084",
                "category": "Fiction",
                "status": "Available",
                "addedDate": "2025-01-15T00:00:00Z",
                "borrower": None,
                "dueDate": None,
            }
        },
    )

    id: str = Field(
        ...,
        description="Catalog identifier, unique within the catalog",
        examples=["1", "42"],
    )

    title: str = Field(..., description="The title of the book", examples=["1984"])

    author: str = Field(..., description="Author name", examples=["George Orwell"])

    isbn: str = Field(..., description="ISBN as entered", examples=["9780451524935"])

    category: str = Field(
        ...,
        description="Free-form category; the set of categories is not fixed",
        examples=["Fiction", "Science Fiction", "Romance"],
    )

    status: BookStatus = Field(
        default=BookStatus.AVAILABLE,
        description="Current circulation status",
    )

    added_date: datetime = Field(
        default_factory=utc_now,
        description="When the book was added to the catalog",
    )

    borrower: str | None = Field(
        default=None,
        description="Name of the current borrower while the book is issued",
    )

    due_date: datetime | None = Field(
        default=None,
        description="When an issued book is expected back",
    )

    @field_validator("added_date", "due_date", mode="before")
    @classmethod
    def normalize_timestamps(cls, v: Any) -> Any:
        return coerce_timestamp(v)

    @model_validator(mode="after")
    def validate_circulation_state(self) -> "Book":
        """Keep status, borrower and due date consistent."""
        if self.status == BookStatus.ISSUED and self.borrower is None:
            raise ValueError("An issued book must have a borrower")
        if self.status == BookStatus.AVAILABLE and (
            self.borrower is not None or self.due_date is not None
        ):
            raise ValueError("An available book cannot have a borrower or due date")
        return self

    @property
    def is_available(self) -> bool:
        return self.status == BookStatus.AVAILABLE

    @property
    def is_issued(self) -> bool:
        return self.status == BookStatus.ISSUED

    def issue(self, borrower: str, due_date: datetime | date | str | None) -> None:
        """
        Hand the book to a borrower.

        Raises:
            ValueError: If the book is not available or the due date is unreadable
        """
        if not self.is_available:
            raise ValueError(f"'{self.title}' is not available")
        due = coerce_timestamp(due_date)
        if due is not None and not isinstance(due, datetime):
            raise ValueError(f"Invalid due date: {due_date!r}")
        self.status = BookStatus.ISSUED
        self.borrower = borrower
        self.due_date = due

    def return_copy(self) -> str:
        """
        Take the book back from its borrower.

        Returns:
            The borrower the book was issued to

        Raises:
            ValueError: If the book is not out with a borrower
        """
        if not self.is_issued or not self.borrower:
            raise ValueError(f"'{self.title}' is not issued")
        borrower = self.borrower
        self.status = BookStatus.AVAILABLE
        self.borrower = None
        self.due_date = None
        return borrower

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match over title, author, ISBN and category.

        ``term`` must already be lowercased.
        """
        return any(
            term in field.lower() for field in (self.title, self.author, self.isbn, self.category)
        )
