"""
Configuration management for outbound email.

This module handles environment variable configuration for the Resend
email API using Pydantic settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fieldcrm.utils.logger import logger


class EmailSettings(BaseSettings):
    """Configuration for Resend email delivery using Pydantic settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="RESEND_"
    )

    api_key: str | None = Field(
        default=None, description="Resend API key; email is disabled when unset"
    )
    from_address: str = Field(
        default="quotes@example.com", description="Sender address for outbound email"
    )
    base_url: str = Field(
        default="https://api.resend.com", description="Resend API base URL"
    )
    timeout: int = Field(default=30, description="Request timeout in seconds")

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


# Global settings instance
_email_settings: EmailSettings | None = None


def get_email_settings() -> EmailSettings:
    """
    Get the global email settings instance.

    Returns:
        EmailSettings: The global settings instance
    """
    global _email_settings
    if _email_settings is None:
        _email_settings = EmailSettings()
        logger.info("EmailSettings loaded", configured=_email_settings.is_configured)
    return _email_settings


def set_email_settings(settings: EmailSettings) -> None:
    """
    Set the global email settings instance.

    Args:
        settings: The settings to set
    """
    global _email_settings
    _email_settings = settings
