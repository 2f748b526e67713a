"""
Admin user management endpoints.
"""

from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException

from fieldcrm.auth.dataclasses import EffectiveIdentity
from fieldcrm.auth.dependencies import require_admin
from fieldcrm.auth.service import hash_password
from fieldcrm.db.decorators import handle_db_errors
from fieldcrm.db.dependencies import get_user_repository
from fieldcrm.db.users.model import User
from fieldcrm.db.users.repository import UserRepository
from fieldcrm.db.users.schemas import UserCreate, UserResponse, UserUpdate

router = APIRouter(prefix="/admin/users", tags=["Users"])


@router.get("", response_model=list[UserResponse])
@handle_db_errors("list users")
async def list_users(
    identity: EffectiveIdentity = Depends(require_admin),
    repository: UserRepository = Depends(get_user_repository),
) -> list[UserResponse]:
    users = await repository.list_all()
    return [UserResponse.model_validate(user) for user in users]


@router.get("/{user_id}", response_model=UserResponse)
@handle_db_errors("get user")
async def get_user(
    user_id: str,
    identity: EffectiveIdentity = Depends(require_admin),
    repository: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    user = await repository.get_by_id(user_id)
    if not user:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="User not found")
    return UserResponse.model_validate(user)


@router.post("", response_model=UserResponse, status_code=HTTPStatus.CREATED)
@handle_db_errors("create user")
async def create_user(
    request: UserCreate,
    identity: EffectiveIdentity = Depends(require_admin),
    repository: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    """
    Create a login.

    Raises:
        HTTPException: 409 if the username is taken
    """
    if await repository.get_by_username(request.username):
        raise HTTPException(
            status_code=HTTPStatus.CONFLICT,
            detail=f"Username '{request.username}' is already taken",
        )

    values = request.model_dump(exclude={"password"})
    user = await repository.add(
        User(**values, password_hash=hash_password(request.password))
    )
    await repository.session.commit()
    return UserResponse.model_validate(user)


@router.patch("/{user_id}", response_model=UserResponse)
@handle_db_errors("update user")
async def update_user(
    user_id: str,
    request: UserUpdate,
    identity: EffectiveIdentity = Depends(require_admin),
    repository: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    changes = request.model_dump(exclude_unset=True, exclude={"password"})
    if request.password:
        changes["password_hash"] = hash_password(request.password)

    user = await repository.update(user_id, changes)
    if not user:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="User not found")
    await repository.session.commit()
    return UserResponse.model_validate(user)
