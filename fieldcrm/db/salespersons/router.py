"""Salesperson profile endpoints."""

from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException

from fieldcrm.auth.dataclasses import EffectiveIdentity
from fieldcrm.auth.dependencies import require_admin, require_salesperson
from fieldcrm.db.decorators import handle_db_errors
from fieldcrm.db.dependencies import get_salesperson_repository
from fieldcrm.db.salespersons.repository import SalespersonRepository
from fieldcrm.db.salespersons.schemas import (
    SalespersonCreate,
    SalespersonResponse,
    SalespersonUpdate,
)

router = APIRouter(prefix="/salespersons", tags=["Salespersons"])


@router.get("", response_model=list[SalespersonResponse])
@handle_db_errors("list salespersons")
async def list_salespersons(
    active_only: bool = False,
    identity: EffectiveIdentity = Depends(require_salesperson),
    repository: SalespersonRepository = Depends(get_salesperson_repository),
) -> list[SalespersonResponse]:
    if active_only:
        salespersons = await repository.list_active()
    else:
        salespersons = await repository.list_all()
    return [SalespersonResponse.model_validate(s) for s in salespersons]


@router.get("/me", response_model=SalespersonResponse)
@handle_db_errors("get salesperson profile")
async def get_my_salesperson_profile(
    identity: EffectiveIdentity = Depends(require_salesperson),
    repository: SalespersonRepository = Depends(get_salesperson_repository),
) -> SalespersonResponse:
    salesperson = await repository.get_by_user_id(identity.user.id)
    if not salesperson:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND, detail="No salesperson profile for user"
        )
    return SalespersonResponse.model_validate(salesperson)


@router.get("/{salesperson_id}", response_model=SalespersonResponse)
@handle_db_errors("get salesperson")
async def get_salesperson(
    salesperson_id: str,
    identity: EffectiveIdentity = Depends(require_salesperson),
    repository: SalespersonRepository = Depends(get_salesperson_repository),
) -> SalespersonResponse:
    salesperson = await repository.get_by_id(salesperson_id)
    if not salesperson:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND, detail="Salesperson not found"
        )
    return SalespersonResponse.model_validate(salesperson)


@router.post("", response_model=SalespersonResponse, status_code=HTTPStatus.CREATED)
@handle_db_errors("create salesperson")
async def create_salesperson(
    request: SalespersonCreate,
    identity: EffectiveIdentity = Depends(require_admin),
    repository: SalespersonRepository = Depends(get_salesperson_repository),
) -> SalespersonResponse:
    salesperson = await repository.create(request)
    await repository.session.commit()
    return SalespersonResponse.model_validate(salesperson)


@router.patch("/{salesperson_id}", response_model=SalespersonResponse)
@handle_db_errors("update salesperson")
async def update_salesperson(
    salesperson_id: str,
    request: SalespersonUpdate,
    identity: EffectiveIdentity = Depends(require_admin),
    repository: SalespersonRepository = Depends(get_salesperson_repository),
) -> SalespersonResponse:
    salesperson = await repository.update(salesperson_id, request)
    if not salesperson:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND, detail="Salesperson not found"
        )
    await repository.session.commit()
    return SalespersonResponse.model_validate(salesperson)
