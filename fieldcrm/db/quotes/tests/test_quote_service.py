"""Tests for quote pricing, public links and acceptance."""

import json
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from http import HTTPStatus
from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from fieldcrm.config import AppSettings
from fieldcrm.db.jobs.constants import MISSING_PHONE
from fieldcrm.db.jobs.model import Job
from fieldcrm.db.quotes.model import Quote
from fieldcrm.db.quotes.schemas import QuoteAcceptance, QuoteCreate, QuoteUpdate
from fieldcrm.db.quotes.service import QuoteService
from fieldcrm.exceptions import (
    FieldCRMError,
    InvalidTransitionError,
    NotFoundError,
    QuoteNotAcceptableError,
)
from fieldcrm.integrations.email.exceptions import (
    EmailNotConfiguredError,
    EmailServerError,
)
from fieldcrm.integrations.email.schemas import SendEmailResponse

NOW = datetime(2026, 6, 10, 9, 0, tzinfo=UTC)


def _returns_argument(instance):
    return instance


def _assign_job_id(job):
    job.id = "job-new"
    return job


def make_quote(**overrides) -> Quote:
    values = {
        "id": "quote-1234abcd-0000",
        "customer_name": "Dana Ruiz",
        "customer_phone": "312-555-0101",
        "customer_email": "dana@example.com",
        "address": "100 W Randolph St",
        "line_items": json.dumps(
            [{"description": "Sewer Main - Clear", "quantity": "1", "unit_price": "350"}]
        ),
        "labor_entries": None,
        "tax_rate": Decimal("0"),
        "total": Decimal("350.00"),
        "status": "sent",
        "public_token": "abc123",
        "job_id": None,
        "expires_at": None,
    }
    values.update(overrides)
    return Quote(**values)


@pytest.fixture
def service():
    service = QuoteService(AsyncMock(spec=AsyncSession), settings=AppSettings())
    service.quotes = AsyncMock()
    service.quotes.add.side_effect = _returns_argument
    service.quotes.save.side_effect = _returns_argument
    service.jobs = AsyncMock()
    service.jobs.add.side_effect = _assign_job_id
    service.timeline = AsyncMock()
    return service


class TestCreateAndUpdate:
    @pytest.mark.asyncio
    async def test_create_starts_as_draft_with_totals(self, service):
        data = QuoteCreate(
            customer_name="Dana Ruiz",
            line_items=[{"description": "Camera Inspection", "unit_price": "150"}],
            labor_entries=[{"hours": "1.5", "rate": "90"}],
            tax_rate=Decimal("0.10"),
        )

        quote = await service.create_quote(data)

        assert quote.status == "draft"
        assert quote.subtotal == Decimal("150.00")
        assert quote.labor_total == Decimal("135.00")
        assert quote.tax_amount == Decimal("15.00")
        assert quote.total == Decimal("300.00")

    @pytest.mark.asyncio
    async def test_update_line_items_recomputes(self, service):
        service.quotes.get_by_id.return_value = make_quote(status="draft")

        result = await service.update_quote(
            "quote-1",
            QuoteUpdate(
                line_items=[{"description": "Hydro Jetting", "unit_price": "600"}],
                notes="Customer asked for jetting",
            ),
            now=NOW,
        )

        assert result.job is None
        assert result.quote.total == Decimal("600.00")
        assert result.quote.notes == "Customer asked for jetting"
        assert result.quote.status == "draft"

    @pytest.mark.asyncio
    async def test_update_to_sent_stamps_sent_at(self, service):
        service.quotes.get_by_id.return_value = make_quote(status="draft", sent_at=None)

        result = await service.update_quote("quote-1", QuoteUpdate(status="sent"), now=NOW)

        assert result.quote.status == "sent"
        assert result.quote.sent_at == NOW

    @pytest.mark.asyncio
    async def test_backward_transition_is_rejected(self, service):
        service.quotes.get_by_id.return_value = make_quote(status="viewed")

        with pytest.raises(InvalidTransitionError):
            await service.update_quote("quote-1", QuoteUpdate(status="sent"), now=NOW)

    @pytest.mark.asyncio
    async def test_update_to_accepted_creates_job(self, service):
        service.quotes.get_by_id.return_value = make_quote()

        result = await service.update_quote(
            "quote-1", QuoteUpdate(status="accepted"), now=NOW
        )

        assert result.quote.status == "accepted"
        assert result.job.id == "job-new"
        assert result.quote.job_id == "job-new"

    @pytest.mark.asyncio
    async def test_accept_with_naive_expiry_in_same_update(self, service):
        service.quotes.get_by_id.return_value = make_quote()
        data = QuoteUpdate.model_validate(
            {"expires_at": "2026-07-01T00:00:00", "status": "accepted"}
        )

        result = await service.update_quote("quote-1", data, now=NOW)

        assert result.quote.status == "accepted"
        assert result.quote.expires_at == datetime(2026, 7, 1, tzinfo=UTC)

    @pytest.mark.asyncio
    async def test_naive_past_expiry_blocks_acceptance(self, service):
        service.quotes.get_by_id.return_value = make_quote()
        data = QuoteUpdate.model_validate(
            {"expires_at": "2026-06-01T00:00:00", "status": "accepted"}
        )

        with pytest.raises(QuoteNotAcceptableError, match="expired"):
            await service.update_quote("quote-1", data, now=NOW)

    def test_naive_expiry_is_read_as_utc(self):
        quote = QuoteCreate(customer_name="Dana Ruiz", expires_at="2026-07-01T12:00:00")

        assert quote.expires_at.tzinfo is UTC

    @pytest.mark.asyncio
    async def test_missing_quote(self, service):
        service.quotes.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await service.update_quote("missing", QuoteUpdate(notes="x"))

    @pytest.mark.asyncio
    async def test_delete(self, service):
        service.quotes.delete.return_value = True

        await service.delete_quote("quote-1")

        service.quotes.delete.assert_awaited_once_with("quote-1")

    @pytest.mark.asyncio
    async def test_delete_missing(self, service):
        service.quotes.delete.return_value = False

        with pytest.raises(NotFoundError):
            await service.delete_quote("missing")


class TestPublicLink:
    @pytest.mark.asyncio
    async def test_existing_token_is_reused(self, service):
        service.quotes.get_by_id.return_value = make_quote(public_token="keepme")

        quote = await service.generate_link("quote-1")

        assert quote.public_token == "keepme"
        service.quotes.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_new_token(self, service):
        service.quotes.get_by_id.return_value = make_quote(public_token=None)

        quote = await service.generate_link("quote-1")

        assert len(quote.public_token) == 16
        service.quotes.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_first_view_moves_sent_to_viewed(self, service):
        service.quotes.get_by_token.return_value = make_quote(viewed_at=None)

        quote = await service.get_public("abc123", now=NOW)

        assert quote.status == "viewed"
        assert quote.viewed_at == NOW

    @pytest.mark.asyncio
    async def test_later_views_change_nothing(self, service):
        earlier = NOW - timedelta(days=1)
        service.quotes.get_by_token.return_value = make_quote(
            status="viewed", viewed_at=earlier
        )

        quote = await service.get_public("abc123", now=NOW)

        assert quote.viewed_at == earlier
        service.quotes.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_token(self, service):
        service.quotes.get_by_token.return_value = None

        with pytest.raises(NotFoundError):
            await service.get_public("nope", now=NOW)


class TestAcceptPublic:
    @pytest.mark.asyncio
    async def test_accept_creates_job_and_records_consent(self, service):
        service.quotes.get_by_token.return_value = make_quote()
        acceptance = QuoteAcceptance(sms_opt_in=True, sms_ownership_confirmed=True)

        result = await service.accept_public("abc123", acceptance, now=NOW)

        assert result.quote.status == "accepted"
        assert result.quote.accepted_at == NOW
        assert result.quote.sms_opt_in is True
        assert result.quote.email_opt_in is False
        job = service.jobs.add.await_args.args[0]
        assert job.service_type == "Sewer Main - Clear"
        assert job.status == "pending"
        assert job.description == "Job created from accepted quote #quote-12"
        timeline_event = service.timeline.add.await_args.args[0]
        assert timeline_event.event_type == "job_created"
        assert "$350.00" in timeline_event.description

    @pytest.mark.asyncio
    async def test_missing_phone_and_items_use_defaults(self, service):
        service.quotes.get_by_token.return_value = make_quote(
            customer_phone=None, line_items="[]"
        )

        await service.accept_public("abc123", QuoteAcceptance(), now=NOW)

        job = service.jobs.add.await_args.args[0]
        assert job.customer_phone == MISSING_PHONE
        assert job.service_type == "Sewer Service"

    @pytest.mark.asyncio
    async def test_linked_active_job_is_reused(self, service):
        existing = Job(id="job-1", status="assigned")
        service.jobs.get_by_id.return_value = existing
        service.quotes.get_by_token.return_value = make_quote(job_id="job-1")

        result = await service.accept_public("abc123", QuoteAcceptance(), now=NOW)

        assert result.job is existing
        service.jobs.add.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cancelled_job_is_replaced(self, service):
        service.jobs.get_by_id.return_value = Job(id="job-1", status="cancelled")
        service.quotes.get_by_token.return_value = make_quote(job_id="job-1")

        result = await service.accept_public("abc123", QuoteAcceptance(), now=NOW)

        assert result.job.id == "job-new"
        assert result.quote.job_id == "job-new"

    @pytest.mark.asyncio
    async def test_expired_quote(self, service):
        service.quotes.get_by_token.return_value = make_quote(
            expires_at=NOW - timedelta(hours=1)
        )

        with pytest.raises(QuoteNotAcceptableError, match="expired"):
            await service.accept_public("abc123", QuoteAcceptance(), now=NOW)

    @pytest.mark.asyncio
    async def test_already_accepted(self, service):
        service.quotes.get_by_token.return_value = make_quote(status="accepted")

        with pytest.raises(QuoteNotAcceptableError):
            await service.accept_public("abc123", QuoteAcceptance(), now=NOW)

        service.jobs.add.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_address(self, service):
        service.quotes.get_by_token.return_value = make_quote(address=None)

        with pytest.raises(QuoteNotAcceptableError, match="address"):
            await service.accept_public("abc123", QuoteAcceptance(), now=NOW)

    def test_opt_in_requires_ownership(self):
        with pytest.raises(ValidationError):
            QuoteAcceptance(email_opt_in=True)

    @pytest.mark.asyncio
    async def test_decline(self, service):
        service.quotes.get_by_token.return_value = make_quote(status="viewed")

        quote = await service.decline_public("abc123", now=NOW)

        assert quote.status == "declined"
        assert quote.declined_at == NOW


class TestResendEmail:
    @pytest.mark.asyncio
    async def test_sends_link_and_marks_sent(self, service):
        service.quotes.get_by_id.return_value = make_quote(status="draft", sent_at=None)
        email_client = AsyncMock()
        email_client.send_email.return_value = SendEmailResponse(id="msg-1")

        quote, message_id = await service.resend_email("quote-1", email_client, now=NOW)

        assert message_id == "msg-1"
        assert quote.status == "sent"
        assert quote.sent_at == NOW
        kwargs = email_client.send_email.await_args.kwargs
        assert kwargs["to"] == "dana@example.com"
        assert "http://localhost:3000/quote/abc123" in kwargs["html"]

    @pytest.mark.asyncio
    async def test_requires_customer_email(self, service):
        service.quotes.get_by_id.return_value = make_quote(customer_email=None)

        with pytest.raises(FieldCRMError) as exc_info:
            await service.resend_email("quote-1", AsyncMock(), now=NOW)

        assert exc_info.value.status_code == HTTPStatus.BAD_REQUEST

    @pytest.mark.asyncio
    async def test_email_not_configured(self, service):
        service.quotes.get_by_id.return_value = make_quote()
        email_client = AsyncMock()
        email_client.send_email.side_effect = EmailNotConfiguredError(
            "Email delivery is not configured"
        )

        with pytest.raises(FieldCRMError) as exc_info:
            await service.resend_email("quote-1", email_client, now=NOW)

        assert exc_info.value.status_code == HTTPStatus.SERVICE_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_provider_failure(self, service):
        service.quotes.get_by_id.return_value = make_quote()
        email_client = AsyncMock()
        email_client.send_email.side_effect = EmailServerError("upstream down", 503)

        with pytest.raises(FieldCRMError) as exc_info:
            await service.resend_email("quote-1", email_client, now=NOW)

        assert exc_info.value.status_code == HTTPStatus.BAD_GATEWAY
