"""
Lead fee and revenue event endpoints.
"""

from http import HTTPStatus

from fastapi import APIRouter, Depends

from fieldcrm.auth.dataclasses import EffectiveIdentity
from fieldcrm.auth.dependencies import require_dispatcher, require_technician
from fieldcrm.db.decorators import handle_db_errors
from fieldcrm.db.ledger.dependencies import get_ledger_service
from fieldcrm.db.ledger.schemas import (
    LeadFeeCreate,
    LeadFeeResponse,
    LeadFeeUpdate,
    RevenueEventCreate,
    RevenueEventResponse,
    RevenueEventUpdate,
)
from fieldcrm.db.ledger.service import LedgerService

lead_fees_router = APIRouter(prefix="/lead-fees", tags=["Lead Fees"])
revenue_events_router = APIRouter(prefix="/revenue-events", tags=["Revenue Events"])


@lead_fees_router.get("", response_model=list[LeadFeeResponse])
@handle_db_errors("list lead fees")
async def list_lead_fees(
    job_id: str | None = None,
    technician_id: str | None = None,
    identity: EffectiveIdentity = Depends(require_technician),
    service: LedgerService = Depends(get_ledger_service),
) -> list[LeadFeeResponse]:
    fees = await service.lead_fees.list_fees(job_id=job_id, technician_id=technician_id)
    return [LeadFeeResponse.model_validate(fee) for fee in fees]


@lead_fees_router.post(
    "", response_model=LeadFeeResponse, status_code=HTTPStatus.CREATED
)
@handle_db_errors("create lead fee")
async def create_lead_fee(
    request: LeadFeeCreate,
    identity: EffectiveIdentity = Depends(require_technician),
    service: LedgerService = Depends(get_ledger_service),
) -> LeadFeeResponse:
    fee = await service.create_lead_fee(request, created_by=identity.user.id)
    await service.session.commit()
    return LeadFeeResponse.model_validate(fee)


@lead_fees_router.patch("/{fee_id}", response_model=LeadFeeResponse)
@handle_db_errors("update lead fee")
async def update_lead_fee(
    fee_id: str,
    request: LeadFeeUpdate,
    identity: EffectiveIdentity = Depends(require_dispatcher),
    service: LedgerService = Depends(get_ledger_service),
) -> LeadFeeResponse:
    fee = await service.update_lead_fee(fee_id, request)
    await service.session.commit()
    return LeadFeeResponse.model_validate(fee)


@revenue_events_router.get("", response_model=list[RevenueEventResponse])
@handle_db_errors("list revenue events")
async def list_revenue_events(
    job_id: str | None = None,
    technician_id: str | None = None,
    identity: EffectiveIdentity = Depends(require_dispatcher),
    service: LedgerService = Depends(get_ledger_service),
) -> list[RevenueEventResponse]:
    events = await service.revenue_events.list_events(
        job_id=job_id, technician_id=technician_id
    )
    return [RevenueEventResponse.model_validate(event) for event in events]


@revenue_events_router.post(
    "", response_model=RevenueEventResponse, status_code=HTTPStatus.CREATED
)
@handle_db_errors("create revenue event")
async def create_revenue_event(
    request: RevenueEventCreate,
    identity: EffectiveIdentity = Depends(require_dispatcher),
    service: LedgerService = Depends(get_ledger_service),
) -> RevenueEventResponse:
    event = await service.create_revenue_event(request)
    await service.session.commit()
    return RevenueEventResponse.model_validate(event)


@revenue_events_router.patch("/{event_id}", response_model=RevenueEventResponse)
@handle_db_errors("update revenue event")
async def update_revenue_event(
    event_id: str,
    request: RevenueEventUpdate,
    identity: EffectiveIdentity = Depends(require_dispatcher),
    service: LedgerService = Depends(get_ledger_service),
) -> RevenueEventResponse:
    event = await service.update_revenue_event(event_id, request)
    await service.session.commit()
    return RevenueEventResponse.model_validate(event)
