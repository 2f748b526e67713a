"""
Core authentication types.

This module defines the plain result types shared by auth providers and the
request-scoped identity handed to route handlers.
"""

from dataclasses import dataclass
from typing import Any

from fieldcrm.auth.schemas import User


@dataclass
class AuthResult:
    """Result of authentication operations."""

    success: bool
    session: Any | None = None  # Session from schemas
    error: str | None = None


@dataclass
class EffectiveIdentity:
    """
    Who is making a request and whose data it operates on.

    ``real`` is always the authenticated user. ``acting_as`` is set only when
    an admin asked to act as another user.
    """

    real: User
    acting_as: User | None = None

    @property
    def user(self) -> User:
        return self.acting_as or self.real

    @property
    def is_impersonating(self) -> bool:
        return self.acting_as is not None
