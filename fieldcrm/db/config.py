"""
Configuration management for database connections.

This module handles database configuration using Pydantic settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fieldcrm.utils.logger import logger


class DatabaseSettings(BaseSettings):
    """Database configuration using Pydantic settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="DB_"
    )

    host: str = Field(description="Database host")
    port: int = Field(default=5432, description="Database port")
    name: str = Field(description="Database name")
    username: str = Field(description="Database username")
    password: str = Field(description="Database user password")
    ssl_required: bool = Field(
        default=True, description="Require TLS for database connections"
    )

    # Connection pool settings
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum overflow connections")
    echo: bool = Field(default=False, description="Echo SQL statements to logs")

    def _base_url(self, driver: str) -> str:
        return (
            f"postgresql+{driver}://{self.username}:{self.password}"
            f"@{self.host}:{self.port}/{self.name}"
        )

    def get_sync_url(self) -> str:
        """
        Get synchronous database URL for psycopg2.

        Returns:
            str: Database connection URL for sync operations
        """
        url = self._base_url("psycopg2")
        return f"{url}?sslmode=require" if self.ssl_required else url

    def get_async_url(self) -> str:
        """
        Get asynchronous database URL for asyncpg.

        Returns:
            str: Database connection URL for async operations
        """
        url = self._base_url("asyncpg")
        return f"{url}?ssl=require" if self.ssl_required else url


_db_settings: DatabaseSettings | None = None


def get_db_settings() -> DatabaseSettings:
    """
    Get the global database settings instance.

    Returns:
        DatabaseSettings: The global settings instance
    """
    global _db_settings
    if _db_settings is None:
        _db_settings = DatabaseSettings()
        logger.info(
            "DatabaseSettings loaded",
            host=_db_settings.host,
            port=_db_settings.port,
            database=_db_settings.name,
        )
    return _db_settings


def set_db_settings(settings: DatabaseSettings) -> None:
    """
    Set the global database settings instance.

    Useful for testing.

    Args:
        settings: The settings to set
    """
    global _db_settings
    _db_settings = settings
