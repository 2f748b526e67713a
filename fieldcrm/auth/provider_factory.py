"""
Auth provider factory.

This module provides a factory function to create the appropriate auth provider
based on configuration.
"""

from fieldcrm.auth.config import get_auth_settings
from fieldcrm.auth.service import AuthProvider, LocalAuthProvider


def create_auth_provider() -> AuthProvider:
    """
    Create an auth provider based on environment configuration.

    Returns:
        AuthProvider: The configured auth provider instance.

    Raises:
        ValueError: If an unknown auth provider is specified.
    """
    settings = get_auth_settings()
    if settings.is_local_provider():
        return LocalAuthProvider(settings)
    raise ValueError(f"Unknown auth provider: {settings.provider}")


def get_auth_provider() -> AuthProvider | None:
    """
    Get a singleton instance of the auth provider.

    This function caches the provider instance to avoid recreating it
    on every request.

    Returns:
        Optional[AuthProvider]: The cached auth provider instance.
    """
    if not hasattr(get_auth_provider, "_instance"):
        get_auth_provider._instance = create_auth_provider()
    return get_auth_provider._instance
