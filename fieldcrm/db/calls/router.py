"""
Call log endpoints.
"""

from http import HTTPStatus

from fastapi import APIRouter, Depends, Query

from fieldcrm.auth.dataclasses import EffectiveIdentity
from fieldcrm.auth.dependencies import require_salesperson
from fieldcrm.db.calls.dependencies import get_call_service
from fieldcrm.db.calls.model import Call
from fieldcrm.db.calls.schemas import CallCreate, CallResponse, ConvertToQuoteResponse
from fieldcrm.db.calls.service import CallService
from fieldcrm.db.decorators import handle_db_errors
from fieldcrm.db.jobs.schemas import JobResponse
from fieldcrm.db.quotes.schemas import QuoteResponse

router = APIRouter(prefix="/calls", tags=["Calls"])


@router.get("", response_model=list[CallResponse])
@handle_db_errors("list calls")
async def list_calls(
    limit: int | None = Query(None, ge=1, le=500),
    identity: EffectiveIdentity = Depends(require_salesperson),
    service: CallService = Depends(get_call_service),
) -> list[CallResponse]:
    """List calls, most recent first."""
    calls = await service.calls.list_all(limit=limit)
    return [CallResponse.model_validate(call) for call in calls]


@router.get("/{call_id}", response_model=CallResponse)
@handle_db_errors("get call")
async def get_call(
    call_id: str,
    identity: EffectiveIdentity = Depends(require_salesperson),
    service: CallService = Depends(get_call_service),
) -> CallResponse:
    call = await service.get_call(call_id)
    return CallResponse.model_validate(call)


@router.post("", response_model=CallResponse, status_code=HTTPStatus.CREATED)
@handle_db_errors("create call")
async def create_call(
    request: CallCreate,
    identity: EffectiveIdentity = Depends(require_salesperson),
    service: CallService = Depends(get_call_service),
) -> CallResponse:
    call = await service.calls.add(Call(**request.model_dump(), handled_by=identity.user.id))
    await service.session.commit()
    return CallResponse.model_validate(call)


@router.post("/{call_id}/convert-to-quote", response_model=ConvertToQuoteResponse)
@handle_db_errors("convert call to quote")
async def convert_to_quote(
    call_id: str,
    identity: EffectiveIdentity = Depends(require_salesperson),
    service: CallService = Depends(get_call_service),
) -> ConvertToQuoteResponse:
    result = await service.convert_to_quote(call_id, created_by=identity.user.id)
    await service.session.commit()
    return ConvertToQuoteResponse(
        call=CallResponse.model_validate(result.call),
        quote=QuoteResponse.model_validate(result.quote),
        job=JobResponse.model_validate(result.job),
    )
