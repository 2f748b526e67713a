"""Async Resend email API client."""

import httpx
from pydantic import ValidationError

from fieldcrm.integrations.email.config import EmailSettings
from fieldcrm.integrations.email.constants import ResendEndpoint
from fieldcrm.integrations.email.exceptions import (
    EmailAuthenticationError,
    EmailBadRequestError,
    EmailDeliveryError,
    EmailNotConfiguredError,
    EmailRateLimitError,
    EmailServerError,
)
from fieldcrm.integrations.email.schemas import SendEmailRequest, SendEmailResponse
from fieldcrm.utils.logger import logger


class ResendClient:
    """Async client for the Resend email API.

    Handles authentication and maps HTTP failures onto the
    ``EmailDeliveryError`` hierarchy.
    """

    def __init__(
        self, settings: EmailSettings, transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        """Initialize the client.

        Args:
            settings: Email settings with API configuration
            transport: Optional httpx transport, used by tests
        """
        self.settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _ensure_client(self) -> None:
        """Ensure HTTP client is initialized."""
        if not self.settings.is_configured:
            raise EmailNotConfiguredError()
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.settings.base_url,
                headers={
                    "Authorization": f"Bearer {self.settings.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.settings.timeout,
                transport=self._transport,
            )

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _make_request(
        self, method: str, endpoint: str, data: dict | None = None
    ) -> dict:
        """Make an HTTP request to the Resend API.

        Raises:
            EmailDeliveryError: For any failed request
        """
        await self._ensure_client()

        try:
            response = await self._client.request(method, endpoint, json=data)

            if response.status_code in (401, 403):
                raise EmailAuthenticationError(status_code=response.status_code)
            elif response.status_code in (400, 422):
                raise EmailBadRequestError(
                    f"Bad request: {response.text}", status_code=response.status_code
                )
            elif response.status_code == 429:
                retry_after = response.headers.get("retry-after")
                raise EmailRateLimitError(
                    retry_after=int(retry_after)
                    if retry_after and retry_after.isdigit()
                    else None
                )
            elif response.status_code >= 500:
                raise EmailServerError(
                    f"Server error: {response.status_code}",
                    status_code=response.status_code,
                )

            response.raise_for_status()
            return response.json()

        except EmailDeliveryError:
            raise
        except httpx.HTTPStatusError as e:
            raise EmailDeliveryError(
                f"HTTP error: {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise EmailDeliveryError(f"Request error: {e}") from e

    async def send_email(
        self,
        to: str,
        subject: str,
        html: str,
        text: str | None = None,
    ) -> SendEmailResponse:
        """Send one email.

        Args:
            to: Recipient address
            subject: Subject line
            html: HTML body
            text: Optional plain-text body

        Returns:
            SendEmailResponse: Resend's message id

        Raises:
            EmailDeliveryError: If the email could not be sent
        """
        request = SendEmailRequest(
            from_address=self.settings.from_address,
            to=[to],
            subject=subject,
            html=html,
            text=text,
        )
        logger.info("Sending email", to=to, subject=subject)

        response_data = await self._make_request(
            "POST",
            ResendEndpoint.EMAILS.value,
            request.model_dump(by_alias=True, exclude_none=True),
        )

        try:
            return SendEmailResponse(**response_data)
        except ValidationError as e:
            logger.error("Failed to parse email response", error=str(e))
            raise EmailDeliveryError(f"Invalid response format: {e}") from e
