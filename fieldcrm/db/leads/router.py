"""
Lead endpoints: intake, duplicate checks, first contact and SLA tracking.
"""

from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException, Query

from fieldcrm.auth.dataclasses import EffectiveIdentity
from fieldcrm.auth.dependencies import require_dispatcher, require_salesperson
from fieldcrm.db.decorators import handle_db_errors
from fieldcrm.db.leads.dependencies import get_lead_service
from fieldcrm.db.leads.schemas import (
    DuplicateCheckResponse,
    LeadContactResponse,
    LeadCreate,
    LeadCreatedResponse,
    LeadResponse,
    LeadUpdate,
    RecalculateScoresResponse,
    SlaStatusResponse,
)
from fieldcrm.db.leads.service import LeadService

router = APIRouter(prefix="/leads", tags=["Leads"])


@router.get("", response_model=list[LeadResponse])
@handle_db_errors("list leads")
async def list_leads(
    status: str | None = None,
    source: str | None = None,
    identity: EffectiveIdentity = Depends(require_salesperson),
    service: LeadService = Depends(get_lead_service),
) -> list[LeadResponse]:
    leads = await service.leads.list_leads(status=status, source=source)
    return [LeadResponse.model_validate(lead) for lead in leads]


@router.post("", response_model=LeadCreatedResponse, status_code=HTTPStatus.CREATED)
@handle_db_errors("create lead")
async def create_lead(
    request: LeadCreate,
    identity: EffectiveIdentity = Depends(require_salesperson),
    service: LeadService = Depends(get_lead_service),
) -> LeadCreatedResponse:
    """
    Create a lead.

    The lead is scored and given an SLA deadline. A lead whose phone number
    matches an earlier lead is stored with status ``duplicate`` and linked to
    the original.
    """
    lead, was_duplicate = await service.create_lead(request)
    await service.session.commit()
    return LeadCreatedResponse(
        **LeadResponse.model_validate(lead).model_dump(),
        was_duplicate_detected=was_duplicate,
    )


@router.get("/check-duplicate", response_model=DuplicateCheckResponse)
@handle_db_errors("check for duplicate leads")
async def check_duplicate(
    phone: str = Query(..., min_length=1),
    identity: EffectiveIdentity = Depends(require_salesperson),
    service: LeadService = Depends(get_lead_service),
) -> DuplicateCheckResponse:
    check = await service.check_duplicate(phone)
    return DuplicateCheckResponse(
        is_duplicate=check.is_duplicate,
        original_lead=LeadResponse.model_validate(check.original)
        if check.original
        else None,
        match_count=check.match_count,
    )


@router.get("/duplicates", response_model=list[LeadResponse])
@handle_db_errors("list duplicate leads")
async def list_duplicates(
    identity: EffectiveIdentity = Depends(require_salesperson),
    service: LeadService = Depends(get_lead_service),
) -> list[LeadResponse]:
    leads = await service.leads.list_duplicates()
    return [LeadResponse.model_validate(lead) for lead in leads]


@router.get("/sla-status", response_model=list[SlaStatusResponse])
@handle_db_errors("get lead SLA status")
async def get_sla_status(
    identity: EffectiveIdentity = Depends(require_salesperson),
    service: LeadService = Depends(get_lead_service),
) -> list[SlaStatusResponse]:
    report = await service.sla_report()
    return [
        SlaStatusResponse(
            lead_id=item.lead_id,
            status=item.state,
            remaining_minutes=item.remaining_minutes,
            sla_deadline=item.sla_deadline,
            contacted_at=item.contacted_at,
        )
        for item in report
    ]


@router.post("/recalculate-scores", response_model=RecalculateScoresResponse)
@handle_db_errors("recalculate lead scores")
async def recalculate_scores(
    identity: EffectiveIdentity = Depends(require_dispatcher),
    service: LeadService = Depends(get_lead_service),
) -> RecalculateScoresResponse:
    updated = await service.recalculate_scores()
    await service.session.commit()
    return RecalculateScoresResponse(message="Scores recalculated", updated=updated)


@router.get("/{lead_id}", response_model=LeadResponse)
@handle_db_errors("get lead")
async def get_lead(
    lead_id: str,
    identity: EffectiveIdentity = Depends(require_salesperson),
    service: LeadService = Depends(get_lead_service),
) -> LeadResponse:
    lead = await service.leads.get_by_id(lead_id)
    if not lead:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Lead not found")
    return LeadResponse.model_validate(lead)


@router.patch("/{lead_id}", response_model=LeadResponse)
@handle_db_errors("update lead")
async def update_lead(
    lead_id: str,
    request: LeadUpdate,
    identity: EffectiveIdentity = Depends(require_salesperson),
    service: LeadService = Depends(get_lead_service),
) -> LeadResponse:
    lead = await service.leads.update(lead_id, request)
    if not lead:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Lead not found")
    await service.session.commit()
    return LeadResponse.model_validate(lead)


@router.post("/{lead_id}/contact", response_model=LeadContactResponse)
@handle_db_errors("mark lead as contacted")
async def contact_lead(
    lead_id: str,
    identity: EffectiveIdentity = Depends(require_salesperson),
    service: LeadService = Depends(get_lead_service),
) -> LeadContactResponse:
    """Record first contact and report whether the SLA deadline was met."""
    result = await service.mark_contacted(lead_id)
    await service.session.commit()
    return LeadContactResponse(
        **LeadResponse.model_validate(result.lead).model_dump(),
        sla_breached=result.sla_breached,
        response_time_minutes=result.response_time_minutes,
    )
