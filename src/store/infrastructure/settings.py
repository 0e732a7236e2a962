"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        MEMBERSHIP_DB_HOST: Database host (default: localhost)
        MEMBERSHIP_DB_PORT: Database port (default: 5432)
        MEMBERSHIP_DB_DATABASE: Database name (default: membership)
        MEMBERSHIP_DB_USERNAME: Database user (default: membership)
        MEMBERSHIP_DB_PASSWORD: Database password (required in production)
        MEMBERSHIP_DB_POOL_MAX_CONNECTIONS: Maximum concurrent connections (default: 10)
        MEMBERSHIP_DB_POOL_TIMEOUT_SECONDS: Wait for a free connection (default: 30)
        MEMBERSHIP_DB_ECHO: Log emitted SQL (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="MEMBERSHIP_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="membership", description="Database name")
    username: str = Field(default="membership", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )
    pool_timeout_seconds: float = Field(
        default=30.0,
        description="Seconds to wait for a pooled connection",
        gt=0,
    )
    echo: bool = Field(default=False, description="Log emitted SQL statements")

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="MEMBERSHIP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Membership Store", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    log_json: bool | None = Field(
        default=None,
        description="Force JSON (true) or console (false) log output; auto-detect when unset",
    )

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()
