"""Tests for catalog configuration.

1. Default values
2. Environment variable loading
3. Validation rules
4. The global configuration accessor
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from library_catalog.config import CatalogConfig, get_config, reset_config


class TestCatalogConfig:
    """Test catalog configuration behavior."""

    def test_default_configuration(self, clean_env, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = CatalogConfig()

        assert config.server_name == "library-catalog"
        assert config.server_version == "0.1.0"
        assert config.transport == "stdio"
        assert config.storage_backend == "sqlite"
        assert config.books_key == "library_books"
        assert config.history_key == "library_history"
        assert config.simulated_latency_ms == 0
        assert config.database_path == (tmp_path / "data" / "library.db").absolute()
        assert config.database_path.parent.is_dir()

    def test_environment_variable_loading(self, clean_env, tmp_path):
        env_vars = {
            "LIBRARY_CATALOG_SERVER_NAME": "test-library",
            "LIBRARY_CATALOG_STORAGE_BACKEND": "memory",
            "LIBRARY_CATALOG_DATABASE_PATH": str(tmp_path / "env.db"),
            "LIBRARY_CATALOG_SIMULATED_LATENCY_MS": "500",
            "LIBRARY_CATALOG_DEBUG": "true",
            "LIBRARY_CATALOG_LOG_LEVEL": "DEBUG",
        }

        with patch.dict(os.environ, env_vars):
            config = CatalogConfig()

            assert config.server_name == "test-library"
            assert config.storage_backend == "memory"
            assert config.database_path == tmp_path / "env.db"
            assert config.simulated_latency_ms == 500
            assert config.simulated_latency == 0.5
            assert config.debug is True
            assert config.is_development is True

    def test_server_name_validation(self, test_db_path):
        for name in ["catalog", "my-library-1"]:
            assert CatalogConfig(server_name=name, database_path=test_db_path).server_name == name

        for name in ["Library", "my library", "ab", "a" * 51]:
            with pytest.raises(ValidationError):
                CatalogConfig(server_name=name, database_path=test_db_path)

    def test_storage_backend_validation(self, test_db_path):
        with pytest.raises(ValidationError):
            CatalogConfig(storage_backend="redis", database_path=test_db_path)

    def test_latency_bounds(self, test_db_path):
        with pytest.raises(ValidationError):
            CatalogConfig(simulated_latency_ms=-1, database_path=test_db_path)
        with pytest.raises(ValidationError):
            CatalogConfig(simulated_latency_ms=10_000, database_path=test_db_path)

    def test_storage_keys_must_differ(self, test_db_path):
        with pytest.raises(ValidationError, match="history_key must differ"):
            CatalogConfig(books_key="catalog", history_key="catalog", database_path=test_db_path)

    def test_database_url(self, test_config):
        assert test_config.get_database_url() == f"sqlite:///{test_config.database_path}"

    def test_server_info(self, test_config):
        assert test_config.server_info == {
            "name": "test-library-catalog",
            "version": "0.0.1-test",
            "transport": "stdio",
        }


class TestGlobalConfig:
    def test_get_config_is_cached(self, clean_env, tmp_path):
        with patch.dict(os.environ, {"LIBRARY_CATALOG_DATABASE_PATH": str(tmp_path / "g.db")}):
            reset_config()
            assert get_config() is get_config()

    def test_reset_config_rereads_environment(self, clean_env, tmp_path):
        with patch.dict(os.environ, {"LIBRARY_CATALOG_DATABASE_PATH": str(tmp_path / "a.db")}):
            reset_config()
            first = get_config()
        with patch.dict(os.environ, {"LIBRARY_CATALOG_DATABASE_PATH": str(tmp_path / "b.db")}):
            reset_config()
            second = get_config()

        assert first is not second
        assert first.database_path == Path(tmp_path / "a.db")
        assert second.database_path == Path(tmp_path / "b.db")
