"""Repository for user accounts."""

from sqlalchemy import select

from fieldcrm.db.repository import CrudRepository
from fieldcrm.db.users.model import User


class UserRepository(CrudRepository[User]):
    """Repository for managing users in the database."""

    model = User

    async def get_by_username(self, username: str) -> User | None:
        result = await self.session.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    async def list_by_role(self, role: str) -> list[User]:
        result = await self.session.execute(
            select(User).where(User.role == role).order_by(User.username)
        )
        return list(result.scalars().all())
