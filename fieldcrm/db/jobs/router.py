"""
Job endpoints: CRUD, the status workflow, the claim pool, costs and timeline.

Technicians act only on jobs assigned to their own technician profile.
Admins and dispatchers may act on any job.
"""

from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException

from fieldcrm.auth.constants import Role
from fieldcrm.auth.dataclasses import EffectiveIdentity
from fieldcrm.auth.dependencies import (
    require_dispatcher,
    require_staff,
    require_technician,
)
from fieldcrm.db.decorators import handle_db_errors
from fieldcrm.db.jobs.costs import calculate_job_roi
from fieldcrm.db.jobs.dependencies import get_job_service
from fieldcrm.db.jobs.schemas import (
    ArriveJobRequest,
    AssignJobRequest,
    CancelJobRequest,
    ClaimJobRequest,
    CompleteJobRequest,
    JobCostsUpdate,
    JobCreate,
    JobResponse,
    JobROIResponse,
    JobTimelineEventCreate,
    JobTimelineEventResponse,
    JobUpdate,
)
from fieldcrm.db.jobs.service import JobService

router = APIRouter(prefix="/jobs", tags=["Jobs"])


async def _acting_technician_id(
    identity: EffectiveIdentity, service: JobService
) -> str | None:
    """
    Technician profile id of the effective user, or None for office roles.

    Raises:
        HTTPException: 403 if a technician user has no technician profile
    """
    if identity.user.role != Role.TECHNICIAN:
        return None
    technician = await service.technicians.get_by_user_id(identity.user.id)
    if not technician:
        raise HTTPException(
            status_code=HTTPStatus.FORBIDDEN, detail="No technician profile for user"
        )
    return technician.id


@router.get("", response_model=list[JobResponse])
@handle_db_errors("list jobs")
async def list_jobs(
    status: str | None = None,
    technician_id: str | None = None,
    salesperson_id: str | None = None,
    identity: EffectiveIdentity = Depends(require_staff),
    service: JobService = Depends(get_job_service),
) -> list[JobResponse]:
    jobs = await service.jobs.list_jobs(
        status=status, technician_id=technician_id, salesperson_id=salesperson_id
    )
    return [JobResponse.model_validate(job) for job in jobs]


@router.get("/pool", response_model=list[JobResponse])
@handle_db_errors("list pool jobs")
async def list_pool_jobs(
    technician_id: str | None = None,
    identity: EffectiveIdentity = Depends(require_technician),
    service: JobService = Depends(get_job_service),
) -> list[JobResponse]:
    """
    Pending, unassigned jobs the technician is approved for.

    Ordered urgent, high, normal, low, then oldest first. Technicians see
    their own pool; office roles pass ``technician_id``.
    """
    technician_id = await _acting_technician_id(identity, service) or technician_id
    if not technician_id:
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST, detail="technician_id required"
        )
    jobs = await service.list_pool(technician_id)
    return [JobResponse.model_validate(job) for job in jobs]


@router.get("/{job_id}", response_model=JobResponse)
@handle_db_errors("get job")
async def get_job(
    job_id: str,
    identity: EffectiveIdentity = Depends(require_staff),
    service: JobService = Depends(get_job_service),
) -> JobResponse:
    job = await service.get_job(job_id)
    return JobResponse.model_validate(job)


@router.post("", response_model=JobResponse, status_code=HTTPStatus.CREATED)
@handle_db_errors("create job")
async def create_job(
    request: JobCreate,
    identity: EffectiveIdentity = Depends(require_dispatcher),
    service: JobService = Depends(get_job_service),
) -> JobResponse:
    job = await service.create_job(request, created_by=identity.user.id)
    await service.session.commit()
    return JobResponse.model_validate(job)


@router.patch("/{job_id}", response_model=JobResponse)
@handle_db_errors("update job")
async def update_job(
    job_id: str,
    request: JobUpdate,
    identity: EffectiveIdentity = Depends(require_dispatcher),
    service: JobService = Depends(get_job_service),
) -> JobResponse:
    job = await service.update_job(job_id, request)
    await service.session.commit()
    return JobResponse.model_validate(job)


@router.post("/{job_id}/assign", response_model=JobResponse)
@handle_db_errors("assign job")
async def assign_job(
    job_id: str,
    request: AssignJobRequest,
    identity: EffectiveIdentity = Depends(require_dispatcher),
    service: JobService = Depends(get_job_service),
) -> JobResponse:
    job = await service.assign(
        job_id, request.technician_id, dispatcher_id=identity.user.id
    )
    await service.session.commit()
    return JobResponse.model_validate(job)


@router.post("/{job_id}/claim", response_model=JobResponse)
@handle_db_errors("claim job")
async def claim_job(
    job_id: str,
    request: ClaimJobRequest,
    identity: EffectiveIdentity = Depends(require_technician),
    service: JobService = Depends(get_job_service),
) -> JobResponse:
    """
    Claim a pool job.

    Returns 409 when the job is no longer available, including when another
    technician claimed it first, and 403 when the technician is not approved
    for the job's service type.
    """
    own_id = await _acting_technician_id(identity, service)
    if own_id and request.technician_id and request.technician_id != own_id:
        raise HTTPException(
            status_code=HTTPStatus.FORBIDDEN,
            detail="Technicians may only claim jobs for themselves",
        )
    technician_id = own_id or request.technician_id
    if not technician_id:
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST, detail="technician_id required"
        )

    job = await service.claim(job_id, technician_id)
    await service.session.commit()
    return JobResponse.model_validate(job)


@router.post("/{job_id}/confirm", response_model=JobResponse)
@handle_db_errors("confirm job")
async def confirm_job(
    job_id: str,
    identity: EffectiveIdentity = Depends(require_technician),
    service: JobService = Depends(get_job_service),
) -> JobResponse:
    job = await service.confirm(job_id, await _acting_technician_id(identity, service))
    await service.session.commit()
    return JobResponse.model_validate(job)


@router.post("/{job_id}/en-route", response_model=JobResponse)
@handle_db_errors("mark job en route")
async def en_route_job(
    job_id: str,
    identity: EffectiveIdentity = Depends(require_technician),
    service: JobService = Depends(get_job_service),
) -> JobResponse:
    job = await service.en_route(job_id, await _acting_technician_id(identity, service))
    await service.session.commit()
    return JobResponse.model_validate(job)


@router.post("/{job_id}/arrive", response_model=JobResponse)
@handle_db_errors("mark job arrived")
async def arrive_job(
    job_id: str,
    request: ArriveJobRequest,
    identity: EffectiveIdentity = Depends(require_technician),
    service: JobService = Depends(get_job_service),
) -> JobResponse:
    """
    Mark arrival on site.

    Coordinates are optional. Without them, or without stored job
    coordinates, the job still moves on site with an unverified arrival.
    """
    job = await service.arrive(
        job_id,
        latitude=request.latitude,
        longitude=request.longitude,
        technician_id=await _acting_technician_id(identity, service),
    )
    await service.session.commit()
    return JobResponse.model_validate(job)


@router.post("/{job_id}/start", response_model=JobResponse)
@handle_db_errors("start job")
async def start_job(
    job_id: str,
    identity: EffectiveIdentity = Depends(require_technician),
    service: JobService = Depends(get_job_service),
) -> JobResponse:
    job = await service.start(job_id, await _acting_technician_id(identity, service))
    await service.session.commit()
    return JobResponse.model_validate(job)


@router.post("/{job_id}/complete", response_model=JobResponse)
@handle_db_errors("complete job")
async def complete_job(
    job_id: str,
    request: CompleteJobRequest,
    identity: EffectiveIdentity = Depends(require_technician),
    service: JobService = Depends(get_job_service),
) -> JobResponse:
    job = await service.complete(
        job_id,
        request.model_dump(exclude_unset=True),
        technician_id=await _acting_technician_id(identity, service),
    )
    await service.session.commit()
    return JobResponse.model_validate(job)


@router.post("/{job_id}/cancel", response_model=JobResponse)
@handle_db_errors("cancel job")
async def cancel_job(
    job_id: str,
    request: CancelJobRequest,
    identity: EffectiveIdentity = Depends(require_dispatcher),
    service: JobService = Depends(get_job_service),
) -> JobResponse:
    job = await service.cancel(job_id, request.reason, cancelled_by=identity.user.id)
    await service.session.commit()
    return JobResponse.model_validate(job)


@router.patch("/{job_id}/costs", response_model=JobResponse)
@handle_db_errors("update job costs")
async def update_job_costs(
    job_id: str,
    request: JobCostsUpdate,
    identity: EffectiveIdentity = Depends(require_technician),
    service: JobService = Depends(get_job_service),
) -> JobResponse:
    """Update cost and revenue inputs; labor cost, total cost and profit are recomputed."""
    job = await service.update_costs(
        job_id,
        request.model_dump(exclude_unset=True),
        technician_id=await _acting_technician_id(identity, service),
        updated_by=identity.user.id,
    )
    await service.session.commit()
    return JobResponse.model_validate(job)


@router.get("/{job_id}/roi", response_model=JobROIResponse)
@handle_db_errors("get job ROI")
async def get_job_roi(
    job_id: str,
    identity: EffectiveIdentity = Depends(require_dispatcher),
    service: JobService = Depends(get_job_service),
) -> JobROIResponse:
    job = await service.get_job(job_id)
    roi = calculate_job_roi(job)
    return JobROIResponse(
        job_id=job.id,
        total_revenue=roi.total_revenue,
        labor_cost=roi.labor_cost,
        materials_cost=roi.materials_cost,
        travel_expense=roi.travel_expense,
        equipment_cost=roi.equipment_cost,
        other_expenses=roi.other_expenses,
        total_cost=roi.total_cost,
        profit=roi.profit,
        profit_margin=roi.profit_margin,
    )


@router.get("/{job_id}/timeline", response_model=list[JobTimelineEventResponse])
@handle_db_errors("get job timeline")
async def get_job_timeline(
    job_id: str,
    identity: EffectiveIdentity = Depends(require_staff),
    service: JobService = Depends(get_job_service),
) -> list[JobTimelineEventResponse]:
    events = await service.timeline.list_for_job(job_id)
    return [JobTimelineEventResponse.model_validate(event) for event in events]


@router.post(
    "/{job_id}/timeline",
    response_model=JobTimelineEventResponse,
    status_code=HTTPStatus.CREATED,
)
@handle_db_errors("add job timeline event")
async def add_job_timeline_event(
    job_id: str,
    request: JobTimelineEventCreate,
    identity: EffectiveIdentity = Depends(require_staff),
    service: JobService = Depends(get_job_service),
) -> JobTimelineEventResponse:
    job = await service.get_job(job_id)
    event = await service.record_event(
        job.id,
        request.event_type,
        request.description,
        created_by=identity.user.id,
        metadata=request.metadata,
    )
    await service.session.commit()
    return JobTimelineEventResponse.model_validate(event)
