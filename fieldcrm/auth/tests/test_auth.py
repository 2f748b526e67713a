"""Tests for local sign-in, session tokens and role guards."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi import HTTPException

from fieldcrm.auth import dependencies
from fieldcrm.auth.config import AuthSettings
from fieldcrm.auth.constants import ACT_AS_USER_HEADER, Role
from fieldcrm.auth.dataclasses import EffectiveIdentity
from fieldcrm.auth.schemas import User
from fieldcrm.auth.service import LocalAuthProvider, hash_password
from fieldcrm.db.users.model import User as UserModel


@pytest.fixture
def provider():
    return LocalAuthProvider(AuthSettings(jwt_secret_key="test-secret"))


def make_db_user(**overrides) -> UserModel:
    values = {
        "id": "user-1",
        "username": "dispatch",
        "password_hash": hash_password("correct horse"),
        "role": Role.DISPATCHER.value,
        "full_name": "Dana Dispatcher",
        "is_active": True,
    }
    values.update(overrides)
    return UserModel(**values)


def make_request(headers: dict | None = None):
    return SimpleNamespace(headers=headers or {}, url=SimpleNamespace(path="/api/jobs"))


ADMIN = User(id="admin-1", username="admin", role=Role.ADMIN)
TECH = User(id="tech-user-1", username="tech", role=Role.TECHNICIAN)


class TestLocalAuthProvider:
    @pytest.mark.asyncio
    async def test_sign_in_issues_session(self, provider):
        users = AsyncMock()
        users.get_by_username.return_value = make_db_user()

        result = await provider.sign_in(users, "dispatch", "correct horse")

        assert result.success is True
        assert result.session.user.role == Role.DISPATCHER
        session = await provider.get_session(result.session.access_token)
        assert session.user.id == "user-1"
        assert session.user.full_name == "Dana Dispatcher"

    @pytest.mark.asyncio
    async def test_wrong_password(self, provider):
        users = AsyncMock()
        users.get_by_username.return_value = make_db_user()

        result = await provider.sign_in(users, "dispatch", "wrong")

        assert result.success is False
        assert result.error == "Invalid username or password"

    @pytest.mark.asyncio
    async def test_disabled_account(self, provider):
        users = AsyncMock()
        users.get_by_username.return_value = make_db_user(is_active=False)

        result = await provider.sign_in(users, "dispatch", "correct horse")

        assert result.error == "Account is disabled"

    @pytest.mark.asyncio
    async def test_token_signed_with_other_secret(self, provider):
        other = LocalAuthProvider(AuthSettings(jwt_secret_key="other-secret"))
        token = other.create_session(TECH).access_token

        assert await provider.get_session(token) is None

    @pytest.mark.asyncio
    async def test_garbage_token(self, provider):
        assert await provider.get_session("not-a-jwt") is None


class TestEffectiveIdentity:
    @pytest.mark.asyncio
    async def test_without_header(self):
        identity = await dependencies.get_effective_identity(
            make_request(), current_user=TECH, db=AsyncMock()
        )

        assert identity.user == TECH
        assert identity.is_impersonating is False

    @pytest.mark.asyncio
    async def test_non_admin_cannot_act_as(self):
        with pytest.raises(HTTPException) as exc_info:
            await dependencies.get_effective_identity(
                make_request({ACT_AS_USER_HEADER: "user-2"}),
                current_user=TECH,
                db=AsyncMock(),
            )

        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_acts_as_user(self, monkeypatch):
        repository = AsyncMock()
        repository.get_by_id.return_value = make_db_user(
            id="tech-user-2", username="tech2", role=Role.TECHNICIAN.value
        )
        monkeypatch.setattr(dependencies, "UserRepository", lambda db: repository)

        identity = await dependencies.get_effective_identity(
            make_request({ACT_AS_USER_HEADER: "tech-user-2"}),
            current_user=ADMIN,
            db=AsyncMock(),
        )

        assert identity.real == ADMIN
        assert identity.user.id == "tech-user-2"
        assert identity.is_impersonating is True

    @pytest.mark.asyncio
    async def test_admin_acts_as_missing_user(self, monkeypatch):
        repository = AsyncMock()
        repository.get_by_id.return_value = None
        monkeypatch.setattr(dependencies, "UserRepository", lambda db: repository)

        with pytest.raises(HTTPException) as exc_info:
            await dependencies.get_effective_identity(
                make_request({ACT_AS_USER_HEADER: "ghost"}),
                current_user=ADMIN,
                db=AsyncMock(),
            )

        assert exc_info.value.status_code == 404


class TestRequireRoles:
    @pytest.mark.asyncio
    async def test_allowed_role(self):
        identity = EffectiveIdentity(real=TECH)

        assert await dependencies.require_technician(identity=identity) is identity

    @pytest.mark.asyncio
    async def test_rejected_role(self):
        with pytest.raises(HTTPException) as exc_info:
            await dependencies.require_dispatcher(identity=EffectiveIdentity(real=TECH))

        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_passes_while_acting_as(self):
        identity = EffectiveIdentity(real=ADMIN, acting_as=TECH)

        assert await dependencies.require_admin(identity=identity) is identity
