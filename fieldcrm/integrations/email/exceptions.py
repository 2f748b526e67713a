"""Custom exception classes for the email client."""

from typing import Any


class EmailDeliveryError(Exception):
    """Base exception for all email delivery errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_data: dict[str, Any] | None = None,
    ) -> None:
        """Initialize EmailDeliveryError.

        Args:
            message: Error message
            status_code: HTTP status code if applicable
            response_data: Response data from the API
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_data = response_data

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.status_code:
            return f"Email API Error ({self.status_code}): {self.message}"
        return f"Email API Error: {self.message}"


class EmailNotConfiguredError(EmailDeliveryError):
    """Raised when email is requested but no API key is configured."""

    def __init__(self, message: str = "Email delivery is not configured") -> None:
        super().__init__(message=message)


class EmailAuthenticationError(EmailDeliveryError):
    """Exception raised for authentication errors (401/403)."""

    def __init__(
        self,
        message: str = "Invalid API key or authentication failed",
        status_code: int = 401,
        response_data: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message, status_code=status_code, response_data=response_data
        )


class EmailBadRequestError(EmailDeliveryError):
    """Exception raised for rejected messages (400/422)."""

    def __init__(
        self,
        message: str = "Bad request - malformed or missing required parameters",
        status_code: int = 400,
        response_data: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message, status_code=status_code, response_data=response_data
        )


class EmailRateLimitError(EmailDeliveryError):
    """Exception raised for rate limit errors (429)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        response_data: dict[str, Any] | None = None,
        retry_after: int | None = None,
    ) -> None:
        super().__init__(message=message, status_code=429, response_data=response_data)
        self.retry_after = retry_after


class EmailServerError(EmailDeliveryError):
    """Exception raised for server errors (5xx)."""

    def __init__(
        self,
        message: str = "Internal server error occurred",
        status_code: int = 500,
        response_data: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message, status_code=status_code, response_data=response_data
        )
