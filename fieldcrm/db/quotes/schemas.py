"""Pydantic schemas for quotes and public quote acceptance."""

import json
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from fieldcrm.db.jobs.schemas import JobResponse
from fieldcrm.db.quotes.constants import QuoteStatus


class ConsentValidationError(ValueError):
    """An opt-in was given without confirming ownership of the contact."""


def _assume_utc(value: datetime | None) -> datetime | None:
    """Naive expiry times are taken as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class QuoteLineItem(BaseModel):
    """Priced line; extra keys (pricebook ids, units) are kept as-is."""

    model_config = ConfigDict(extra="allow")

    description: str = Field(..., min_length=1)
    quantity: Decimal = Field(Decimal("1"), ge=0)
    unit_price: Decimal = Field(..., ge=0)


class LaborEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    description: str | None = None
    hours: Decimal = Field(..., ge=0)
    rate: Decimal = Field(..., ge=0)


class QuoteCreate(BaseModel):
    job_id: str | None = None
    technician_id: str | None = None
    customer_name: str = Field(..., min_length=1)
    customer_phone: str | None = None
    customer_email: str | None = None
    address: str | None = None
    line_items: list[QuoteLineItem] = Field(default_factory=list)
    labor_entries: list[LaborEntry] = Field(default_factory=list)
    tax_rate: Decimal = Field(Decimal("0"), ge=0, le=1)
    notes: str | None = None
    expires_at: datetime | None = None

    expires_at_as_utc = field_validator("expires_at")(_assume_utc)


class QuoteUpdate(BaseModel):
    """
    Partial quote update.

    Totals are recomputed when line items, labor entries or the tax rate
    change. Setting ``status`` goes through the quote status rules; moving to
    ``accepted`` also creates the job.
    """

    job_id: str | None = None
    technician_id: str | None = None
    customer_name: str | None = None
    customer_phone: str | None = None
    customer_email: str | None = None
    address: str | None = None
    line_items: list[QuoteLineItem] | None = None
    labor_entries: list[LaborEntry] | None = None
    tax_rate: Decimal | None = Field(None, ge=0, le=1)
    notes: str | None = None
    expires_at: datetime | None = None
    status: QuoteStatus | None = None

    expires_at_as_utc = field_validator("expires_at")(_assume_utc)


class QuoteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    job_id: str | None
    technician_id: str | None
    customer_name: str
    customer_phone: str | None
    customer_email: str | None
    address: str | None
    line_items: list[dict[str, Any]]
    labor_entries: list[dict[str, Any]]
    subtotal: Decimal
    labor_total: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total: Decimal
    status: str
    notes: str | None
    public_token: str | None
    sms_opt_in: bool
    sms_ownership_confirmed: bool
    email_opt_in: bool
    email_ownership_confirmed: bool
    sent_at: datetime | None
    viewed_at: datetime | None
    accepted_at: datetime | None
    declined_at: datetime | None
    expires_at: datetime | None
    created_at: datetime

    @field_validator("line_items", "labor_entries", mode="before")
    @classmethod
    def decode_json_list(cls, value: Any) -> Any:
        """Stored lists are JSON text."""
        if value is None or value == "":
            return []
        if isinstance(value, str):
            return json.loads(value)
        return value


class QuoteAcceptance(BaseModel):
    """Customer consent captured when a quote is accepted."""

    sms_opt_in: bool = False
    sms_ownership_confirmed: bool = False
    email_opt_in: bool = False
    email_ownership_confirmed: bool = False

    @model_validator(mode="after")
    def check_ownership_confirmed(self) -> "QuoteAcceptance":
        if self.sms_opt_in and not self.sms_ownership_confirmed:
            raise ConsentValidationError(
                "SMS opt-in requires confirming ownership of the phone number"
            )
        if self.email_opt_in and not self.email_ownership_confirmed:
            raise ConsentValidationError(
                "Email opt-in requires confirming ownership of the email address"
            )
        return self


class GenerateLinkResponse(BaseModel):
    token: str
    public_url: str
    quote: QuoteResponse


class QuoteWithJobResponse(BaseModel):
    """Quote plus the job created (or already linked) on acceptance."""

    quote: QuoteResponse
    job: JobResponse | None = None


class ResendEmailResponse(BaseModel):
    success: bool
    message_id: str
    quote: QuoteResponse
