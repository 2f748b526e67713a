"""Pydantic schemas for user management."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from fieldcrm.auth.constants import Role


class UserCreate(BaseModel):
    """Admin request to create a login."""

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=8, description="Plain-text password, hashed on save")
    role: Role = Field(default=Role.TECHNICIAN)
    full_name: str | None = None
    phone: str | None = None
    email: str | None = None
    is_active: bool = True


class UserUpdate(BaseModel):
    """Partial user update. A password, if given, is re-hashed."""

    password: str | None = Field(None, min_length=8)
    role: Role | None = None
    full_name: str | None = None
    phone: str | None = None
    email: str | None = None
    is_active: bool | None = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    role: Role
    full_name: str | None
    phone: str | None
    email: str | None
    is_active: bool
    created_at: datetime
