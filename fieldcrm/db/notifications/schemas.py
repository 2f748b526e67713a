"""Pydantic schemas for inbox notifications."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from fieldcrm.db.notifications.constants import NotificationType


class NotificationCreate(BaseModel):
    user_id: str
    type: NotificationType
    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    job_id: str | None = None
    action_url: str | None = None


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    type: str
    title: str
    message: str
    job_id: str | None
    action_url: str | None
    is_read: bool
    read_at: datetime | None
    created_at: datetime


class MarkAllReadResponse(BaseModel):
    updated: int
