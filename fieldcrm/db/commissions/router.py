"""
Salesperson commission endpoints.

Salespersons see only their own commissions. Approval and payment are
admin actions.
"""

from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException

from fieldcrm.auth.constants import Role
from fieldcrm.auth.dataclasses import EffectiveIdentity
from fieldcrm.auth.dependencies import require_admin, require_salesperson
from fieldcrm.db.commissions.constants import CommissionStatus
from fieldcrm.db.commissions.dependencies import get_commission_service
from fieldcrm.db.commissions.schemas import (
    CalculateCommissionRequest,
    CommissionResponse,
    CommissionUpdate,
)
from fieldcrm.db.commissions.service import CommissionService
from fieldcrm.db.decorators import handle_db_errors

router = APIRouter(prefix="/sales-commissions", tags=["Sales Commissions"])


async def _own_salesperson_id(
    identity: EffectiveIdentity, service: CommissionService
) -> str | None:
    if identity.user.role != Role.SALESPERSON:
        return None
    salesperson = await service.salespersons.get_by_user_id(identity.user.id)
    if not salesperson:
        raise HTTPException(
            status_code=HTTPStatus.FORBIDDEN, detail="No salesperson profile for user"
        )
    return salesperson.id


@router.get("", response_model=list[CommissionResponse])
@handle_db_errors("list commissions")
async def list_commissions(
    salesperson_id: str | None = None,
    status: str = CommissionStatus.PENDING.value,
    identity: EffectiveIdentity = Depends(require_salesperson),
    service: CommissionService = Depends(get_commission_service),
) -> list[CommissionResponse]:
    """List commissions, pending ones by default. Pass status=all for every status."""
    salesperson_id = await _own_salesperson_id(identity, service) or salesperson_id
    commissions = await service.commissions.list_commissions(
        salesperson_id=salesperson_id, status=None if status == "all" else status
    )
    return [CommissionResponse.model_validate(c) for c in commissions]


@router.get("/{commission_id}", response_model=CommissionResponse)
@handle_db_errors("get commission")
async def get_commission(
    commission_id: str,
    identity: EffectiveIdentity = Depends(require_salesperson),
    service: CommissionService = Depends(get_commission_service),
) -> CommissionResponse:
    commission = await service.get_commission(commission_id)
    own_id = await _own_salesperson_id(identity, service)
    if own_id and commission.salesperson_id != own_id:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Commission not found")
    return CommissionResponse.model_validate(commission)


@router.post("/calculate/{job_id}", response_model=CommissionResponse)
@handle_db_errors("calculate commission")
async def calculate_commission(
    job_id: str,
    request: CalculateCommissionRequest,
    identity: EffectiveIdentity = Depends(require_salesperson),
    service: CommissionService = Depends(get_commission_service),
) -> CommissionResponse:
    """
    Calculate the commission for a completed, profitable job.

    Calculating again for the same job and salesperson returns the existing
    record. A job that is not completed or made no profit is a 400.
    """
    commission, created = await service.calculate(job_id, request.salesperson_id)
    if created:
        await service.session.commit()
    return CommissionResponse.model_validate(commission)


@router.patch("/{commission_id}", response_model=CommissionResponse)
@handle_db_errors("update commission")
async def update_commission(
    commission_id: str,
    request: CommissionUpdate,
    identity: EffectiveIdentity = Depends(require_admin),
    service: CommissionService = Depends(get_commission_service),
) -> CommissionResponse:
    commission = await service.update(
        commission_id, request, updated_by=identity.user.id
    )
    await service.session.commit()
    return CommissionResponse.model_validate(commission)
