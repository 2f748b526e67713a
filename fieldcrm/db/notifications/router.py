"""
Notification inbox endpoints for the effective user.
"""

from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException

from fieldcrm.auth.dataclasses import EffectiveIdentity
from fieldcrm.auth.dependencies import require_dispatcher, require_staff
from fieldcrm.db.decorators import handle_db_errors
from fieldcrm.db.dependencies import get_notification_repository
from fieldcrm.db.notifications.repository import NotificationRepository
from fieldcrm.db.notifications.schemas import (
    MarkAllReadResponse,
    NotificationCreate,
    NotificationResponse,
)

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=list[NotificationResponse])
@handle_db_errors("list notifications")
async def list_notifications(
    unread_only: bool = False,
    identity: EffectiveIdentity = Depends(require_staff),
    repository: NotificationRepository = Depends(get_notification_repository),
) -> list[NotificationResponse]:
    notifications = await repository.list_for_user(
        identity.user.id, unread_only=unread_only
    )
    return [NotificationResponse.model_validate(n) for n in notifications]


@router.post("", response_model=NotificationResponse, status_code=HTTPStatus.CREATED)
@handle_db_errors("create notification")
async def create_notification(
    request: NotificationCreate,
    identity: EffectiveIdentity = Depends(require_dispatcher),
    repository: NotificationRepository = Depends(get_notification_repository),
) -> NotificationResponse:
    notification = await repository.create(request.model_dump(mode="json"))
    await repository.session.commit()
    return NotificationResponse.model_validate(notification)


@router.patch("/{notification_id}/read", response_model=NotificationResponse)
@handle_db_errors("mark notification read")
async def mark_notification_read(
    notification_id: str,
    identity: EffectiveIdentity = Depends(require_staff),
    repository: NotificationRepository = Depends(get_notification_repository),
) -> NotificationResponse:
    notification = await repository.get_by_id(notification_id)
    if not notification or notification.user_id != identity.user.id:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND, detail="Notification not found"
        )
    notification = await repository.mark_read(notification_id)
    await repository.session.commit()
    return NotificationResponse.model_validate(notification)


@router.post("/mark-all-read", response_model=MarkAllReadResponse)
@handle_db_errors("mark all notifications read")
async def mark_all_read(
    identity: EffectiveIdentity = Depends(require_staff),
    repository: NotificationRepository = Depends(get_notification_repository),
) -> MarkAllReadResponse:
    updated = await repository.mark_all_read(identity.user.id)
    await repository.session.commit()
    return MarkAllReadResponse(updated=updated)
