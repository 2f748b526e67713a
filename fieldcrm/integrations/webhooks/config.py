"""
Configuration for inbound lead-source webhooks.

A source whose credentials are unset accepts unauthenticated requests.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WebhookSettings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="WEBHOOK_"
    )

    angi_api_key: str | None = Field(
        default=None, description="Expected X-API-Key header for Angi"
    )
    zapier_api_key: str | None = Field(
        default=None, description="Expected X-API-Key header for Zapier"
    )
    thumbtack_username: str | None = Field(
        default=None, description="HTTP Basic username for Thumbtack"
    )
    thumbtack_password: str | None = Field(
        default=None, description="HTTP Basic password for Thumbtack"
    )


_webhook_settings: WebhookSettings | None = None


def get_webhook_settings() -> WebhookSettings:
    global _webhook_settings
    if _webhook_settings is None:
        _webhook_settings = WebhookSettings()
    return _webhook_settings


def set_webhook_settings(settings: WebhookSettings) -> None:
    """Replace the global webhook settings (used by tests)."""
    global _webhook_settings
    _webhook_settings = settings
