"""
Configuration management for the auth package.

This module handles environment variable configuration and validation
for the authentication system using Pydantic settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fieldcrm.auth.constants import SameSite
from fieldcrm.utils.logger import logger


class AuthSettings(BaseSettings):
    """Configuration for the auth system using Pydantic settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="AUTH_"
    )

    # Provider configuration
    provider: str = Field(default="local", description="Authentication provider to use")

    # Token signing
    jwt_secret_key: str = Field(
        default="dev-secret-change-me", description="Secret used to sign session tokens"
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")

    # Session configuration
    session_timeout_hours: int = Field(default=24, description="Session timeout in hours")

    # Cookie configuration - defaults to most secure settings
    cookie_secure: bool = Field(
        default=True,
        description="Set secure flag for cookies (True for HTTPS, False for HTTP)",
    )
    cookie_samesite: SameSite = Field(
        default=SameSite.LAX, description="SameSite setting for cookies"
    )
    cookie_domain: str | None = Field(
        default=None, description="Domain for cookies (None for current domain)"
    )
    cookie_httponly: bool = Field(
        default=True, description="Set HttpOnly flag for cookies (True for security)"
    )

    def is_local_provider(self) -> bool:
        """Check if using the built-in username/password provider."""
        return self.provider.lower() == "local"


# Global settings instance
_auth_settings: AuthSettings | None = None


def get_auth_settings() -> AuthSettings:
    """
    Get the global auth settings instance.

    Returns:
        AuthSettings: The global settings instance
    """
    global _auth_settings
    if _auth_settings is None:
        _auth_settings = AuthSettings()
        logger.info(
            "AuthSettings loaded",
            provider=_auth_settings.provider,
            algorithm=_auth_settings.jwt_algorithm,
        )
    return _auth_settings


def set_auth_settings(settings: AuthSettings) -> None:
    """
    Set the global auth settings instance.

    Args:
        settings: The settings to set
    """
    global _auth_settings
    _auth_settings = settings
