"""Repository for technician profiles."""

from sqlalchemy import select

from fieldcrm.db.repository import CrudRepository
from fieldcrm.db.technicians.model import Technician


class TechnicianRepository(CrudRepository[Technician]):
    """Repository for managing technicians in the database."""

    model = Technician

    async def get_by_user_id(self, user_id: str) -> Technician | None:
        result = await self.session.execute(
            select(Technician).where(Technician.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self, limit: int | None = None, offset: int = 0) -> list[Technician]:
        stmt = select(Technician).order_by(Technician.full_name).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_by_status(self, status: str) -> list[Technician]:
        result = await self.session.execute(
            select(Technician)
            .where(Technician.status == status)
            .order_by(Technician.full_name)
        )
        return list(result.scalars().all())
