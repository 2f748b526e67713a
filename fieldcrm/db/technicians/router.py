"""
Technician profile endpoints.

Technicians may read every profile but only edit their own status and
location. Rates, classification and approvals are admin/dispatcher fields.
"""

from datetime import UTC, datetime
from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException

from fieldcrm.auth.constants import Role
from fieldcrm.auth.dataclasses import EffectiveIdentity
from fieldcrm.auth.dependencies import require_dispatcher, require_staff
from fieldcrm.db.decorators import handle_db_errors
from fieldcrm.db.dependencies import get_technician_repository
from fieldcrm.db.technicians.repository import TechnicianRepository
from fieldcrm.db.technicians.schemas import (
    TechnicianCreate,
    TechnicianResponse,
    TechnicianUpdate,
)

router = APIRouter(prefix="/technicians", tags=["Technicians"])

SELF_EDITABLE_FIELDS = {"status", "last_location_lat", "last_location_lng"}


@router.get("", response_model=list[TechnicianResponse])
@handle_db_errors("list technicians")
async def list_technicians(
    status: str | None = None,
    identity: EffectiveIdentity = Depends(require_staff),
    repository: TechnicianRepository = Depends(get_technician_repository),
) -> list[TechnicianResponse]:
    if status:
        technicians = await repository.list_by_status(status)
    else:
        technicians = await repository.list_all()
    return [TechnicianResponse.model_validate(t) for t in technicians]


@router.get("/me", response_model=TechnicianResponse)
@handle_db_errors("get technician profile")
async def get_my_technician_profile(
    identity: EffectiveIdentity = Depends(require_staff),
    repository: TechnicianRepository = Depends(get_technician_repository),
) -> TechnicianResponse:
    """Technician profile of the effective user."""
    technician = await repository.get_by_user_id(identity.user.id)
    if not technician:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND, detail="No technician profile for user"
        )
    return TechnicianResponse.model_validate(technician)


@router.get("/{technician_id}", response_model=TechnicianResponse)
@handle_db_errors("get technician")
async def get_technician(
    technician_id: str,
    identity: EffectiveIdentity = Depends(require_staff),
    repository: TechnicianRepository = Depends(get_technician_repository),
) -> TechnicianResponse:
    technician = await repository.get_by_id(technician_id)
    if not technician:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND, detail="Technician not found"
        )
    return TechnicianResponse.model_validate(technician)


@router.post("", response_model=TechnicianResponse, status_code=HTTPStatus.CREATED)
@handle_db_errors("create technician")
async def create_technician(
    request: TechnicianCreate,
    identity: EffectiveIdentity = Depends(require_dispatcher),
    repository: TechnicianRepository = Depends(get_technician_repository),
) -> TechnicianResponse:
    technician = await repository.create(request)
    await repository.session.commit()
    return TechnicianResponse.model_validate(technician)


@router.patch("/{technician_id}", response_model=TechnicianResponse)
@handle_db_errors("update technician")
async def update_technician(
    technician_id: str,
    request: TechnicianUpdate,
    identity: EffectiveIdentity = Depends(require_staff),
    repository: TechnicianRepository = Depends(get_technician_repository),
) -> TechnicianResponse:
    """
    Update a technician.

    Raises:
        HTTPException: 403 if a technician edits someone else's profile or a
            restricted field
    """
    technician = await repository.get_by_id(technician_id)
    if not technician:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND, detail="Technician not found"
        )

    changes = request.model_dump(exclude_unset=True)
    if identity.user.role not in (Role.ADMIN, Role.DISPATCHER):
        if technician.user_id != identity.user.id:
            raise HTTPException(
                status_code=HTTPStatus.FORBIDDEN,
                detail="Technicians may only update their own profile",
            )
        restricted = set(changes) - SELF_EDITABLE_FIELDS
        if restricted:
            raise HTTPException(
                status_code=HTTPStatus.FORBIDDEN,
                detail=f"Cannot update fields: {', '.join(sorted(restricted))}",
            )

    if "last_location_lat" in changes or "last_location_lng" in changes:
        changes["last_location_updated"] = datetime.now(UTC)

    technician = await repository.update(technician_id, changes)
    await repository.session.commit()
    return TechnicianResponse.model_validate(technician)
