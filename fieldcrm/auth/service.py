"""
Local username/password authentication provider.

Passwords are stored as bcrypt hashes. Sessions are stateless signed JWTs
carrying the user id and role.
"""

from abc import ABC, abstractmethod
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from fieldcrm.auth import schemas
from fieldcrm.auth.config import AuthSettings, get_auth_settings
from fieldcrm.auth.constants import Role
from fieldcrm.auth.dataclasses import AuthResult
from fieldcrm.db.users.repository import UserRepository
from fieldcrm.utils.logger import logger

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


class AuthProvider(ABC):
    """Abstract interface for authentication providers."""

    @abstractmethod
    async def sign_in(
        self, users: UserRepository, username: str, password: str
    ) -> AuthResult:
        """Sign in a user with username and password."""
        pass

    @abstractmethod
    async def sign_out(self, access_token: str) -> bool:
        """Sign out a user."""
        pass

    @abstractmethod
    async def get_session(self, access_token: str) -> schemas.Session | None:
        """Get session information from access token."""
        pass


class LocalAuthProvider(AuthProvider):
    """Authenticates against the users table and issues signed JWTs."""

    def __init__(self, settings: AuthSettings | None = None):
        self.settings = settings or get_auth_settings()

    def create_session(self, user: schemas.User) -> schemas.Session:
        """
        Issue a signed session token for a user.

        Args:
            user: The authenticated user

        Returns:
            Session: Token and expiry for the user
        """
        expires_at = datetime.now(UTC) + timedelta(
            hours=self.settings.session_timeout_hours
        )
        payload = {
            "sub": user.id,
            "username": user.username,
            "role": user.role.value,
            "name": user.full_name,
            "exp": expires_at,
        }
        token = jwt.encode(
            payload, self.settings.jwt_secret_key, algorithm=self.settings.jwt_algorithm
        )
        return schemas.Session(user=user, access_token=token, expires_at=expires_at)

    async def sign_in(
        self, users: UserRepository, username: str, password: str
    ) -> AuthResult:
        db_user = await users.get_by_username(username)
        if not db_user or not verify_password(password, db_user.password_hash):
            logger.info("Sign in rejected", username=username)
            return AuthResult(success=False, error="Invalid username or password")
        if not db_user.is_active:
            logger.info("Sign in rejected for inactive user", username=username)
            return AuthResult(success=False, error="Account is disabled")

        user = schemas.User.model_validate(db_user)
        logger.info("User signed in", user_id=user.id, role=user.role.value)
        return AuthResult(success=True, session=self.create_session(user))

    async def sign_out(self, access_token: str) -> bool:
        # Tokens are stateless; the client drops the cookie.
        return True

    async def get_session(self, access_token: str) -> schemas.Session | None:
        try:
            payload = jwt.decode(
                access_token,
                self.settings.jwt_secret_key,
                algorithms=[self.settings.jwt_algorithm],
            )
        except JWTError as e:
            logger.info("Rejected session token", error=str(e))
            return None

        user_id = payload.get("sub")
        role = payload.get("role")
        if not user_id or role not in {r.value for r in Role}:
            return None

        user = schemas.User(
            id=user_id,
            username=payload.get("username") or user_id,
            role=Role(role),
            full_name=payload.get("name"),
        )
        return schemas.Session(
            user=user,
            access_token=access_token,
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )
