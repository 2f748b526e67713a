"""Repository for salesperson profiles."""

from sqlalchemy import select

from fieldcrm.db.repository import CrudRepository
from fieldcrm.db.salespersons.model import Salesperson


class SalespersonRepository(CrudRepository[Salesperson]):
    model = Salesperson

    async def get_by_user_id(self, user_id: str) -> Salesperson | None:
        result = await self.session.execute(
            select(Salesperson).where(Salesperson.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_active(self) -> list[Salesperson]:
        result = await self.session.execute(
            select(Salesperson)
            .where(Salesperson.is_active == True)  # noqa: E712
            .order_by(Salesperson.priority, Salesperson.full_name)
        )
        return list(result.scalars().all())
