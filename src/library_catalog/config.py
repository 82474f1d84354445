"""Configuration management for the Library Catalog.

Settings are read from ``LIBRARY_CATALOG_*`` environment variables or a
local ``.env`` file:
1. Server Metadata - name and version announced to MCP clients
2. Storage - which key-value backend holds the catalog, and where
3. Presentation - optional simulated latency for the view layer
4. Logging - level and debug switch
"""

from pathlib import Path

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CatalogConfig(BaseSettings):
    """Library catalog configuration.

    The catalog itself has very few knobs: it keeps two keys in a local
    key-value store. Most settings describe the server that presents the
    catalog to clients.
    """

    model_config = SettingsConfigDict(
        # Use LIBRARY_CATALOG_ prefix for all env vars
        env_prefix="LIBRARY_CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Server Metadata ===

    server_name: str = Field(
        default="library-catalog",
        description="Server name used in the MCP handshake",
        pattern=r"^[a-z0-9-]+$",
    )

    server_version: str = Field(
        default="0.1.0",
        description="Server version reported to clients",
        pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?$",
    )

    transport: str = Field(
        default="stdio",
        description="Transport the server listens on",
        pattern=r"^stdio$",
    )

    # === Storage Configuration ===

    storage_backend: str = Field(
        default="sqlite",
        description="Key-value backend holding the catalog (sqlite or memory)",
        pattern=r"^(sqlite|memory)$",
    )

    database_path: Path = Field(
        default=Path("data/library.db"),
        description="SQLite file backing the key-value store",
    )

    books_key: str = Field(
        default="library_books",
        description="Storage key holding the serialized book list",
        min_length=1,
    )

    history_key: str = Field(
        default="library_history",
        description="Storage key holding the serialized history list",
        min_length=1,
    )

    # === Presentation ===

    simulated_latency_ms: int = Field(
        default=0,
        description="Delay applied by tools before touching the catalog",
        ge=0,
        le=5000,
    )

    # === Development Configuration ===

    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
    )

    @field_validator("database_path")
    @classmethod
    def validate_database_path(cls, v: Path) -> Path:
        """Resolve the database path and make sure its directory exists."""
        abs_path = v.absolute()
        abs_path.parent.mkdir(parents=True, exist_ok=True)

        if not abs_path.parent.is_dir():
            raise ValueError(f"Database directory {abs_path.parent} is not accessible")

        return abs_path

    @field_validator("server_name")
    @classmethod
    def validate_server_name(cls, v: str) -> str:
        if len(v) < 3:
            raise ValueError("Server name must be at least 3 characters")
        if len(v) > 50:
            raise ValueError("Server name must not exceed 50 characters")
        return v

    @field_validator("history_key")
    @classmethod
    def validate_distinct_keys(cls, v: str, info: ValidationInfo) -> str:
        """The two collections must never share a storage key."""
        if v == info.data.get("books_key"):
            raise ValueError("history_key must differ from books_key")
        return v

    @property
    def is_development(self) -> bool:
        return self.debug or self.log_level == "DEBUG"

    @property
    def simulated_latency(self) -> float:
        """Simulated latency in seconds."""
        return self.simulated_latency_ms / 1000

    @property
    def server_info(self) -> dict[str, str]:
        return {
            "name": self.server_name,
            "version": self.server_version,
            "transport": self.transport,
        }

    def get_database_url(self) -> str:
        """Get the SQLAlchemy URL for the key-value store."""
        return f"sqlite:///{self.database_path}"


class _ConfigStore:
    """Internal storage for configuration singleton."""

    _instance: CatalogConfig | None = None


def get_config() -> CatalogConfig:
    """Get or create the global configuration instance."""
    if _ConfigStore._instance is None:  # type: ignore[reportPrivateUsage]
        _ConfigStore._instance = CatalogConfig()  # type: ignore[reportPrivateUsage]
    return _ConfigStore._instance  # type: ignore[reportPrivateUsage]


def reset_config() -> None:
    """Reset configuration (useful for testing)."""
    _ConfigStore._instance = None  # type: ignore[reportPrivateUsage]
