from enum import Enum


class ResendEndpoint(str, Enum):
    """Resend API endpoints."""

    EMAILS = "/emails"
