"""Tests for the Resend email client."""

import json

import httpx
import pytest

from fieldcrm.integrations.email.client import ResendClient
from fieldcrm.integrations.email.config import EmailSettings
from fieldcrm.integrations.email.exceptions import (
    EmailAuthenticationError,
    EmailBadRequestError,
    EmailDeliveryError,
    EmailNotConfiguredError,
    EmailRateLimitError,
    EmailServerError,
)


def make_client(handler) -> ResendClient:
    settings = EmailSettings(api_key="re_test_key", from_address="quotes@fieldcrm.test")
    return ResendClient(settings, transport=httpx.MockTransport(handler))


class TestSendEmail:
    @pytest.mark.asyncio
    async def test_posts_message(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["path"] = request.url.path
            captured["auth"] = request.headers["Authorization"]
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json={"id": "msg_123"})

        client = make_client(handler)
        response = await client.send_email(
            to="customer@example.com", subject="Your quote", html="<p>Hi</p>"
        )
        await client.close()

        assert response.id == "msg_123"
        assert captured["path"] == "/emails"
        assert captured["auth"] == "Bearer re_test_key"
        assert captured["body"] == {
            "from": "quotes@fieldcrm.test",
            "to": ["customer@example.com"],
            "subject": "Your quote",
            "html": "<p>Hi</p>",
        }

    @pytest.mark.asyncio
    async def test_not_configured(self):
        client = ResendClient(EmailSettings(api_key=None))

        with pytest.raises(EmailNotConfiguredError):
            await client.send_email(to="a@example.com", subject="s", html="h")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status_code,error",
        [
            (401, EmailAuthenticationError),
            (403, EmailAuthenticationError),
            (422, EmailBadRequestError),
            (503, EmailServerError),
        ],
    )
    async def test_error_statuses(self, status_code, error):
        client = make_client(lambda request: httpx.Response(status_code, text="nope"))

        with pytest.raises(error) as exc_info:
            await client.send_email(to="a@example.com", subject="s", html="h")

        assert exc_info.value.status_code == status_code

    @pytest.mark.asyncio
    async def test_rate_limit_reads_retry_after(self):
        client = make_client(
            lambda request: httpx.Response(429, headers={"retry-after": "12"})
        )

        with pytest.raises(EmailRateLimitError) as exc_info:
            await client.send_email(to="a@example.com", subject="s", html="h")

        assert exc_info.value.retry_after == 12

    @pytest.mark.asyncio
    async def test_network_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        with pytest.raises(EmailDeliveryError, match="Request error"):
            await client.send_email(to="a@example.com", subject="s", html="h")

    @pytest.mark.asyncio
    async def test_unexpected_response_body(self):
        client = make_client(lambda request: httpx.Response(200, json={"ok": True}))

        with pytest.raises(EmailDeliveryError, match="Invalid response format"):
            await client.send_email(to="a@example.com", subject="s", html="h")
