"""Test configuration and fixtures for the Library Catalog.

1. Isolated storage - each test gets its own SQLite file or memory store
2. Seeded catalogs - a fresh CatalogStore on the initial dataset
3. Configuration overrides - no test sees another test's settings
"""

import os
from collections.abc import Generator
from pathlib import Path

import pytest

from library_catalog.catalog.store import CatalogStore
from library_catalog.config import CatalogConfig, reset_config
from library_catalog.database.kv_store import MemoryKeyValueStore, SqlKeyValueStore
from library_catalog.database.session import DatabaseManager

# === Storage Fixtures ===


@pytest.fixture
def test_db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path for each test."""
    return tmp_path / "test_library.db"


@pytest.fixture
def test_database_url(test_db_path: Path) -> str:
    return f"sqlite:///{test_db_path}"


@pytest.fixture
def db_manager(test_database_url: str) -> Generator[DatabaseManager, None, None]:
    manager = DatabaseManager(test_database_url)
    yield manager
    manager.close()


@pytest.fixture
def sql_storage(db_manager: DatabaseManager) -> SqlKeyValueStore:
    return SqlKeyValueStore(db_manager)


@pytest.fixture
def memory_storage() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


# === Catalog Fixtures ===


@pytest.fixture
def store(memory_storage: MemoryKeyValueStore) -> CatalogStore:
    """A catalog on empty storage, i.e. holding the seed data."""
    return CatalogStore(memory_storage)


@pytest.fixture
def sql_store(sql_storage: SqlKeyValueStore) -> CatalogStore:
    """A seeded catalog persisted to a temporary SQLite file."""
    return CatalogStore(sql_storage)


# === Configuration Fixtures ===


@pytest.fixture
def test_config(test_db_path: Path) -> Generator[CatalogConfig, None, None]:
    """Provide a test-specific configuration."""
    reset_config()

    config = CatalogConfig(
        server_name="test-library-catalog",
        server_version="0.0.1-test",
        database_path=test_db_path,
        debug=True,
        log_level="DEBUG",
    )

    yield config

    reset_config()


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Provide an environment without LIBRARY_CATALOG_* variables."""
    original_env = os.environ.copy()

    for key in list(os.environ.keys()):
        if key.startswith("LIBRARY_CATALOG_"):
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def isolated_database_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the global configuration's database out of the working tree."""
    monkeypatch.setenv("LIBRARY_CATALOG_DATABASE_PATH", str(tmp_path / "global.db"))


@pytest.fixture(autouse=True)
def cleanup_after_test():
    """Reset global configuration after each test."""
    yield
    reset_config()
