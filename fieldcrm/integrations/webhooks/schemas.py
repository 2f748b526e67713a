"""
Payloads posted by each lead source.

Field names follow each provider's own format. Unknown keys are ignored.
"""

from pydantic import BaseModel, ConfigDict, Field


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ELocalPayload(_Payload):
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    email: str | None = None
    zip_code: str | None = None
    need_id: str | None = None
    description: str | None = None


class NetworxPayload(_Payload):
    customer_name: str | None = None
    phone: str | None = None
    email: str | None = None
    zip_code: str | None = None
    service_type: str | None = None
    description: str | None = None


class AngiPayload(_Payload):
    name: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    zip_code: str | None = None
    category: str | None = None
    description: str | None = None


class ThumbtackCustomer(_Payload):
    name: str | None = None
    phone: str | None = None
    email: str | None = None


class ThumbtackLocation(_Payload):
    address: str | None = None
    city: str | None = None
    zip_code: str | None = Field(None, validation_alias="zipCode")


class ThumbtackRequest(_Payload):
    category: str | None = None
    description: str | None = None
    location: ThumbtackLocation = Field(default_factory=ThumbtackLocation)


class ThumbtackPayload(_Payload):
    lead_id: str | None = Field(None, validation_alias="leadID")
    customer: ThumbtackCustomer = Field(default_factory=ThumbtackCustomer)
    request: ThumbtackRequest = Field(default_factory=ThumbtackRequest)


class InquirlyPayload(_Payload):
    contact_name: str | None = None
    contact_phone: str | None = None
    contact_email: str | None = None
    contact_address: str | None = None
    contact_zip: str | None = None
    conversation_summary: str | None = None
    service_requested: str | None = None
    urgency: str | None = None


class ZapierPayload(_Payload):
    """Generic intake; accepts several common spellings for each field."""

    customer_name: str | None = None
    name: str | None = None
    phone: str | None = None
    customer_phone: str | None = None
    email: str | None = None
    customer_email: str | None = None
    address: str | None = None
    city: str | None = None
    zip_code: str | None = None
    zipCode: str | None = None
    service_type: str | None = None
    serviceType: str | None = None
    description: str | None = None
    notes: str | None = None
    source: str | None = None
    priority: str | None = None


class WebhookLeadResponse(BaseModel):
    success: bool
    lead_id: str
    external_lead_id: str | None = None
