"""
Auth-specific Pydantic schemas for request and response models.

This module contains all Pydantic models related to authentication
and the signed-in user.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from fieldcrm.auth.constants import Role


# Core domain models
class User(BaseModel):
    """User information."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="User's unique identifier")
    username: str = Field(..., description="Login name")
    role: Role = Field(..., description="User's role")
    full_name: str | None = Field(None, description="User's full name")
    email: str | None = Field(None, description="User's email address")
    phone: str | None = Field(None, description="User's phone number")


class Session(BaseModel):
    """User session information."""

    user: User | None = Field(None, description="User information")
    access_token: str = Field(..., description="Signed session token")
    expires_at: datetime = Field(..., description="Token expiration timestamp")


# Request schemas
class LoginRequest(BaseModel):
    """Username and password sign-in."""

    username: str = Field(..., min_length=1, description="Login name")
    password: str = Field(..., min_length=1, description="Password")


# Response schemas
class AuthResponse(BaseModel):
    """Schema for authentication responses."""

    success: bool = Field(..., description="Whether the operation was successful")
    session: dict[str, Any] | None = Field(None, description="User session data")
    error: str | None = Field(None, description="Error message if operation failed")


class EffectiveUserResponse(BaseModel):
    """The signed-in user and, for admins, the user being acted as."""

    user: User = Field(..., description="User whose data the request operates on")
    real_user: User = Field(..., description="User who actually signed in")
    impersonating: bool = Field(
        default=False, description="Whether an admin is acting as another user"
    )
