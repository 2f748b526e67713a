"""
Inbound lead-source webhooks.

Every payload is mapped to a ``LeadCreate`` and goes through the same lead
creation path as staff-entered leads, so it is scored, given an SLA deadline
and checked for duplicates.
"""

from fastapi import APIRouter, Depends

from fieldcrm.db.decorators import handle_db_errors
from fieldcrm.db.leads.dependencies import get_lead_service
from fieldcrm.db.leads.schemas import LeadCreate
from fieldcrm.db.leads.service import LeadService
from fieldcrm.integrations.webhooks import mappers
from fieldcrm.integrations.webhooks.schemas import (
    AngiPayload,
    ELocalPayload,
    InquirlyPayload,
    NetworxPayload,
    ThumbtackPayload,
    WebhookLeadResponse,
    ZapierPayload,
)
from fieldcrm.integrations.webhooks.security import (
    verify_angi_key,
    verify_thumbtack_basic,
    verify_zapier_key,
)
from fieldcrm.utils.logger import logger

router = APIRouter(prefix="/webhooks", tags=["Webhooks"])


async def _create(
    service: LeadService, data: LeadCreate, external_id: str | None = None
) -> WebhookLeadResponse:
    lead, was_duplicate = await service.create_lead(data)
    await service.session.commit()
    logger.info(
        "[WEBHOOK] Lead created",
        source=data.source,
        lead_id=lead.id,
        duplicate=was_duplicate,
        external_lead_id=external_id,
    )
    return WebhookLeadResponse(success=True, lead_id=lead.id, external_lead_id=external_id)


@router.post("/elocal", response_model=WebhookLeadResponse)
@handle_db_errors("process eLocal lead")
async def elocal_webhook(
    payload: ELocalPayload,
    service: LeadService = Depends(get_lead_service),
) -> WebhookLeadResponse:
    return await _create(service, mappers.from_elocal(payload))


@router.post("/networx", response_model=WebhookLeadResponse)
@handle_db_errors("process Networx lead")
async def networx_webhook(
    payload: NetworxPayload,
    service: LeadService = Depends(get_lead_service),
) -> WebhookLeadResponse:
    return await _create(service, mappers.from_networx(payload))


@router.post(
    "/angi", response_model=WebhookLeadResponse, dependencies=[Depends(verify_angi_key)]
)
@handle_db_errors("process Angi lead")
async def angi_webhook(
    payload: AngiPayload,
    service: LeadService = Depends(get_lead_service),
) -> WebhookLeadResponse:
    return await _create(service, mappers.from_angi(payload))


@router.post(
    "/thumbtack",
    response_model=WebhookLeadResponse,
    dependencies=[Depends(verify_thumbtack_basic)],
)
@handle_db_errors("process Thumbtack lead")
async def thumbtack_webhook(
    payload: ThumbtackPayload,
    service: LeadService = Depends(get_lead_service),
) -> WebhookLeadResponse:
    return await _create(service, mappers.from_thumbtack(payload), payload.lead_id)


@router.post("/inquirly", response_model=WebhookLeadResponse)
@handle_db_errors("process Inquirly lead")
async def inquirly_webhook(
    payload: InquirlyPayload,
    service: LeadService = Depends(get_lead_service),
) -> WebhookLeadResponse:
    return await _create(service, mappers.from_inquirly(payload))


@router.post(
    "/zapier/lead",
    response_model=WebhookLeadResponse,
    dependencies=[Depends(verify_zapier_key)],
)
@handle_db_errors("process Zapier lead")
async def zapier_webhook(
    payload: ZapierPayload,
    service: LeadService = Depends(get_lead_service),
) -> WebhookLeadResponse:
    """Generic intake for Zapier and form tools. Phone is optional here."""
    return await _create(service, mappers.from_zapier(payload))
