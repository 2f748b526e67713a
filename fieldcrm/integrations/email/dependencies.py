"""
FastAPI dependencies for outbound email.
"""

from fieldcrm.integrations.email.client import ResendClient
from fieldcrm.integrations.email.config import get_email_settings


def get_email_client() -> ResendClient:
    """
    FastAPI dependency for getting the email client instance.

    Returns:
        ResendClient: The configured email client
    """
    return ResendClient(settings=get_email_settings())
