"""Pydantic schemas for business intake submissions."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class IntakeStatus(str, Enum):
    NEW = "new"
    REVIEWED = "reviewed"
    ONBOARDED = "onboarded"


class BusinessIntakeCreate(BaseModel):
    business_name: str = Field(..., min_length=1)
    owner_name: str = Field(..., min_length=1)
    owner_phone: str | None = None
    owner_email: EmailStr
    business_type: str | None = None
    service_area: str | None = None
    team_size: str | None = None
    current_software: str | None = None
    priority_features: list[str] = Field(default_factory=list)
    automation_goals: str | None = None
    notes: str | None = None


class BusinessIntakeUpdate(BaseModel):
    status: IntakeStatus | None = None
    notes: str | None = None


class BusinessIntakeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    business_name: str
    owner_name: str
    owner_phone: str | None
    owner_email: str
    business_type: str | None
    service_area: str | None
    team_size: str | None
    current_software: str | None
    priority_features: list[str]
    automation_goals: str | None
    notes: str | None
    status: str
    created_at: datetime


class BusinessIntakeSubmitted(BaseModel):
    success: bool
    message: str
    id: str
