"""
Database session management for the Library Catalog.

This module provides connection management and session handling for the
SQLAlchemy-backed key-value store:

1. Engine Creation: SQLite by default, any SQLAlchemy URL accepted
2. Transaction Management: every store write is one atomic unit
3. Schema Setup: the storage table is created on first use

Sessions are short-lived; use ``session_scope()`` so they are always
committed or rolled back and closed.
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .schema import Base

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Manages the database engine and sessions for the key-value store.

    This class provides:
    - Lazy engine creation
    - Session factory with explicit transactions
    - Schema initialization
    """

    def __init__(self, database_url: str):
        """
        Initialize the database manager.

        Args:
            database_url: SQLAlchemy database URL, usually
                ``CatalogConfig.get_database_url()``
        """
        self.database_url = database_url
        self._engine: Engine | None = None
        self._session_factory: sessionmaker | None = None

    @property
    def engine(self) -> Engine:
        """Get or create the database engine."""
        if self._engine is None:
            if self.database_url.startswith("sqlite"):
                self._engine = create_engine(
                    self.database_url,
                    # Single shared connection; also keeps ":memory:" databases alive
                    poolclass=StaticPool,
                    connect_args={"check_same_thread": False},
                    echo=False,
                )
            else:
                self._engine = create_engine(
                    self.database_url,
                    pool_pre_ping=True,
                    echo=False,
                )

            logger.info("Database engine created: %s", self._engine.url)

        return self._engine

    @property
    def session_factory(self) -> sessionmaker:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                bind=self.engine,
                autocommit=False,
                autoflush=False,
                expire_on_commit=False,
            )
        return self._session_factory

    def create_session(self) -> Session:
        """
        Create a new database session.

        Note:
            Sessions should be used with context managers or properly closed
            to prevent connection leaks.
        """
        return self.session_factory()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope for database operations.

        ```python
        with db_manager.session_scope() as session:
            session.merge(StorageEntry(key="k", value="v"))
        # Session is automatically committed or rolled back
        ```

        Yields:
            Database session

        Raises:
            Any database errors are logged and re-raised
        """
        session = self.create_session()
        try:
            yield session
            session.commit()
            logger.debug("Database transaction committed successfully")
        except Exception:
            logger.exception("Database error, rolling back")
            session.rollback()
            raise
        finally:
            session.close()

    def init_database(self) -> None:
        """Create the storage table if it does not exist yet."""
        logger.debug("Creating database tables...")
        Base.metadata.create_all(bind=self.engine)

    def verify_connection(self) -> bool:
        """
        Verify the database connection is working.

        Returns:
            True if connection is successful, False otherwise
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("Database connection verified")
            return True
        except Exception:
            logger.exception("Database connection failed")
            return False

    def close(self) -> None:
        """Close the database connection and cleanup resources."""
        if self._engine:
            self._engine.dispose()
            logger.info("Database engine disposed")
        self._engine = None
        self._session_factory = None
