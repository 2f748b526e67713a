"""
Authentication and authorization dependencies.

This module provides FastAPI dependencies for resolving the signed-in user,
the effective identity (admins may act as another user), and role guards.
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from fieldcrm.auth import schemas
from fieldcrm.auth.constants import ACT_AS_USER_HEADER, CookieNames, Role
from fieldcrm.auth.dataclasses import EffectiveIdentity
from fieldcrm.auth.provider_factory import get_auth_provider
from fieldcrm.auth.service import AuthProvider
from fieldcrm.db.database import get_db
from fieldcrm.db.users.repository import UserRepository
from fieldcrm.utils.logger import logger

# Security scheme for JWT tokens (fallback for API clients)
security = HTTPBearer(auto_error=False)


async def get_auth_provider_dependency() -> AuthProvider:
    """Dependency to get the configured auth provider."""
    try:
        provider = get_auth_provider()
        if not provider:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Auth provider not configured",
            )
        return provider
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to initialize auth provider: {str(e)}",
        ) from e


async def get_current_session(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    auth_provider: AuthProvider = Depends(get_auth_provider_dependency),
) -> schemas.Session:
    """
    Get the current user session from cookies or authorization header.

    Raises:
        HTTPException: If the token is missing, invalid or expired
    """
    # First try to get token from cookies (for web clients)
    session_token = request.cookies.get(CookieNames.SESSION_TOKEN.value)

    # Fallback to Bearer token (for API clients)
    if not session_token and credentials:
        session_token = credentials.credentials

    if not session_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No authentication token provided",
            headers={"WWW-Authenticate": "Bearer"},
        )

    session = await auth_provider.get_session(session_token)
    if not session:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return session


async def get_current_user(
    session: schemas.Session = Depends(get_current_session),
    db: AsyncSession = Depends(get_db),
) -> schemas.User:
    """
    Get the current user from the session and confirm the account still exists.

    The role is re-read from the database so a role change takes effect
    without waiting for the token to expire.
    """
    db_user = await UserRepository(db).get_by_id(session.user.id)
    if not db_user or not db_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User no longer exists or is disabled",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return schemas.User.model_validate(db_user)


async def get_effective_identity(
    request: Request,
    current_user: schemas.User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> EffectiveIdentity:
    """
    Resolve whose data this request operates on.

    Admins may send the act-as header with another user's id to view and act
    as that user. Anyone else sending it is rejected.

    Raises:
        HTTPException: 403 if a non-admin sends the header, 404 if the target
            user does not exist
    """
    act_as_id = request.headers.get(ACT_AS_USER_HEADER)
    if not act_as_id or act_as_id == current_user.id:
        return EffectiveIdentity(real=current_user)

    if current_user.role != Role.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins may act as another user",
        )

    target = await UserRepository(db).get_by_id(act_as_id)
    if not target:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User {act_as_id} not found",
        )

    acting_as = schemas.User.model_validate(target)
    logger.info(
        "Admin acting as user",
        admin_id=current_user.id,
        acting_as_id=acting_as.id,
        path=request.url.path,
    )
    return EffectiveIdentity(real=current_user, acting_as=acting_as)


def require_roles(*roles: Role):
    """
    Build a dependency that admits the given roles.

    Admins always pass, including while acting as another user. Otherwise the
    effective user's role must be one of ``roles``.
    """
    allowed = set(roles)

    async def dependency(
        identity: EffectiveIdentity = Depends(get_effective_identity),
    ) -> EffectiveIdentity:
        if identity.real.role == Role.ADMIN or identity.user.role in allowed:
            return identity
        names = ", ".join(sorted(role.value for role in allowed))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"One of roles [{names}] required",
        )

    return dependency


# Convenience dependencies for common roles
require_admin = require_roles(Role.ADMIN)
require_dispatcher = require_roles(Role.ADMIN, Role.DISPATCHER)
require_technician = require_roles(Role.ADMIN, Role.DISPATCHER, Role.TECHNICIAN)
require_salesperson = require_roles(Role.ADMIN, Role.DISPATCHER, Role.SALESPERSON)
require_staff = require_roles(
    Role.ADMIN, Role.DISPATCHER, Role.TECHNICIAN, Role.SALESPERSON
)
