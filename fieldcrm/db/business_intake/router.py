"""
Business intake endpoints.

Prospective businesses submit the form without signing in; admins review
the submissions.
"""

from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException

from fieldcrm.auth.dataclasses import EffectiveIdentity
from fieldcrm.auth.dependencies import require_admin
from fieldcrm.db.business_intake.repository import BusinessIntakeRepository
from fieldcrm.db.business_intake.schemas import (
    BusinessIntakeCreate,
    BusinessIntakeResponse,
    BusinessIntakeSubmitted,
    BusinessIntakeUpdate,
)
from fieldcrm.db.decorators import handle_db_errors
from fieldcrm.db.dependencies import get_business_intake_repository
from fieldcrm.utils.logger import logger

router = APIRouter(prefix="/business-intake", tags=["Business Intake"])


@router.post(
    "", response_model=BusinessIntakeSubmitted, status_code=HTTPStatus.CREATED
)
@handle_db_errors("submit business intake")
async def submit_intake(
    request: BusinessIntakeCreate,
    repository: BusinessIntakeRepository = Depends(get_business_intake_repository),
) -> BusinessIntakeSubmitted:
    intake = await repository.create(request)
    await repository.session.commit()
    logger.info("Business intake submitted", intake_id=intake.id)
    return BusinessIntakeSubmitted(
        success=True,
        message="Thank you! We'll be in touch within 24 hours.",
        id=intake.id,
    )


@router.get("", response_model=list[BusinessIntakeResponse])
@handle_db_errors("list business intakes")
async def list_intakes(
    status: str | None = None,
    identity: EffectiveIdentity = Depends(require_admin),
    repository: BusinessIntakeRepository = Depends(get_business_intake_repository),
) -> list[BusinessIntakeResponse]:
    intakes = await repository.list_intakes(status=status)
    return [BusinessIntakeResponse.model_validate(i) for i in intakes]


@router.get("/{intake_id}", response_model=BusinessIntakeResponse)
@handle_db_errors("get business intake")
async def get_intake(
    intake_id: str,
    identity: EffectiveIdentity = Depends(require_admin),
    repository: BusinessIntakeRepository = Depends(get_business_intake_repository),
) -> BusinessIntakeResponse:
    intake = await repository.get_by_id(intake_id)
    if not intake:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Intake not found")
    return BusinessIntakeResponse.model_validate(intake)


@router.patch("/{intake_id}", response_model=BusinessIntakeResponse)
@handle_db_errors("update business intake")
async def update_intake(
    intake_id: str,
    request: BusinessIntakeUpdate,
    identity: EffectiveIdentity = Depends(require_admin),
    repository: BusinessIntakeRepository = Depends(get_business_intake_repository),
) -> BusinessIntakeResponse:
    intake = await repository.update(intake_id, request.model_dump(mode="json", exclude_unset=True))
    if not intake:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Intake not found")
    await repository.session.commit()
    return BusinessIntakeResponse.model_validate(intake)
