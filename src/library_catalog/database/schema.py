"""
SQLAlchemy database schema for the Library Catalog.

The catalog does not need relational tables: it persists whole
collections as serialized strings under fixed keys, the way a browser
keeps data in local storage. A single key/value table provides that.
"""

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

# Base class for all SQLAlchemy models
Base = declarative_base()


class StorageEntry(Base):
    """
    Storage entries table - one row per key.

    The catalog uses two rows, ``library_books`` and ``library_history``,
    each holding a JSON array.
    """

    __tablename__ = "storage_entries"

    key = Column(String(200), primary_key=True)
    value = Column(Text, nullable=False)

    updated_at = Column(DateTime, nullable=False, default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<StorageEntry(key='{self.key}', size={len(self.value or '')})>"
