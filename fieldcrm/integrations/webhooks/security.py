"""
Authentication for lead-source webhooks.

Each check passes when its credentials are not configured.
"""

import secrets

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from fieldcrm.integrations.webhooks.config import WebhookSettings, get_webhook_settings
from fieldcrm.utils.logger import logger

basic_auth = HTTPBasic(auto_error=False)


def _matches(provided: str | None, expected: str) -> bool:
    if provided is None:
        return False
    return secrets.compare_digest(provided.encode(), expected.encode())


def _unauthorized(source: str) -> HTTPException:
    logger.warning("[WEBHOOK] Rejected unauthenticated request", source=source)
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


def verify_angi_key(
    x_api_key: str | None = Header(None),
    settings: WebhookSettings = Depends(get_webhook_settings),
) -> None:
    if settings.angi_api_key and not _matches(x_api_key, settings.angi_api_key):
        raise _unauthorized("angi")


def verify_zapier_key(
    x_api_key: str | None = Header(None),
    settings: WebhookSettings = Depends(get_webhook_settings),
) -> None:
    if settings.zapier_api_key and not _matches(x_api_key, settings.zapier_api_key):
        raise _unauthorized("zapier")


def verify_thumbtack_basic(
    credentials: HTTPBasicCredentials | None = Depends(basic_auth),
    settings: WebhookSettings = Depends(get_webhook_settings),
) -> None:
    if not (settings.thumbtack_username and settings.thumbtack_password):
        return
    if credentials is None:
        raise _unauthorized("thumbtack")
    username_ok = _matches(credentials.username, settings.thumbtack_username)
    password_ok = _matches(credentials.password, settings.thumbtack_password)
    if not (username_ok and password_ok):
        raise _unauthorized("thumbtack")
