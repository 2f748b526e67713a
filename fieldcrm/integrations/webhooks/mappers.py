"""
Map lead-source payloads onto ``LeadCreate``.

Every source except Zapier must supply a phone number.
"""

from pydantic import ValidationError

from fieldcrm.db.jobs.constants import MISSING_PHONE
from fieldcrm.db.leads.constants import LeadPriority, LeadSource
from fieldcrm.db.leads.schemas import LeadCreate
from fieldcrm.exceptions import FieldCRMError
from fieldcrm.integrations.webhooks.constants import UNKNOWN_CUSTOMER
from fieldcrm.integrations.webhooks.schemas import (
    AngiPayload,
    ELocalPayload,
    InquirlyPayload,
    NetworxPayload,
    ThumbtackPayload,
    ZapierPayload,
)

INQUIRLY_URGENCY = {
    "emergency": LeadPriority.URGENT,
    "high": LeadPriority.URGENT,
    "medium": LeadPriority.HIGH,
}


class InvalidLeadPayloadError(FieldCRMError):
    """Raised when a webhook payload cannot be turned into a lead."""


def _require_phone(phone: str | None) -> str:
    if not phone:
        raise InvalidLeadPayloadError("Phone number is required")
    return phone


def _build(**fields) -> LeadCreate:
    try:
        return LeadCreate(**{k: v for k, v in fields.items() if v is not None})
    except ValidationError as e:
        raise InvalidLeadPayloadError(f"Invalid lead data: {e.errors()[0]['msg']}") from e


def from_elocal(payload: ELocalPayload) -> LeadCreate:
    name = " ".join(part for part in (payload.first_name, payload.last_name) if part)
    return _build(
        source=LeadSource.ELOCAL.value,
        customer_name=name or UNKNOWN_CUSTOMER,
        customer_phone=_require_phone(payload.phone),
        customer_email=payload.email or None,
        zip_code=payload.zip_code or None,
        service_type=payload.need_id or None,
        description=payload.description or None,
    )


def from_networx(payload: NetworxPayload) -> LeadCreate:
    return _build(
        source=LeadSource.NETWORX.value,
        customer_name=payload.customer_name or UNKNOWN_CUSTOMER,
        customer_phone=_require_phone(payload.phone),
        customer_email=payload.email or None,
        zip_code=payload.zip_code or None,
        service_type=payload.service_type or None,
        description=payload.description or None,
    )


def from_angi(payload: AngiPayload) -> LeadCreate:
    return _build(
        source=LeadSource.ANGI.value,
        customer_name=payload.name or UNKNOWN_CUSTOMER,
        customer_phone=_require_phone(payload.phone),
        customer_email=payload.email or None,
        customer_address=payload.address or None,
        zip_code=payload.zip_code or None,
        service_type=payload.category or None,
        description=payload.description or None,
    )


def from_thumbtack(payload: ThumbtackPayload) -> LeadCreate:
    location = payload.request.location
    return _build(
        source=LeadSource.THUMBTACK.value,
        customer_name=payload.customer.name or UNKNOWN_CUSTOMER,
        customer_phone=_require_phone(payload.customer.phone),
        customer_email=payload.customer.email or None,
        customer_address=location.address or None,
        city=location.city or None,
        zip_code=location.zip_code or None,
        service_type=payload.request.category or None,
        description=payload.request.description or None,
    )


def from_inquirly(payload: InquirlyPayload) -> LeadCreate:
    priority = INQUIRLY_URGENCY.get((payload.urgency or "").lower(), LeadPriority.NORMAL)
    return _build(
        source=LeadSource.INQUIRLY.value,
        customer_name=payload.contact_name or UNKNOWN_CUSTOMER,
        customer_phone=_require_phone(payload.contact_phone),
        customer_email=payload.contact_email or None,
        customer_address=payload.contact_address or None,
        zip_code=payload.contact_zip or None,
        service_type=payload.service_requested or None,
        description=payload.conversation_summary or None,
        priority=priority,
    )


def from_zapier(payload: ZapierPayload) -> LeadCreate:
    return _build(
        source=payload.source or LeadSource.ZAPIER.value,
        customer_name=payload.customer_name or payload.name or UNKNOWN_CUSTOMER,
        customer_phone=payload.phone or payload.customer_phone or MISSING_PHONE,
        customer_email=payload.email or payload.customer_email or None,
        customer_address=payload.address or None,
        city=payload.city or None,
        zip_code=payload.zip_code or payload.zipCode or None,
        service_type=payload.service_type or payload.serviceType or None,
        description=payload.description or payload.notes or None,
        priority=payload.priority or None,
    )
