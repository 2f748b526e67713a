"""Repository for salesperson commissions."""

from sqlalchemy import select

from fieldcrm.db.commissions.model import SalesCommission
from fieldcrm.db.repository import CrudRepository


class SalesCommissionRepository(CrudRepository[SalesCommission]):
    model = SalesCommission

    async def list_commissions(
        self, salesperson_id: str | None = None, status: str | None = None
    ) -> list[SalesCommission]:
        stmt = select(SalesCommission).order_by(SalesCommission.calculated_at.desc())
        if salesperson_id:
            stmt = stmt.where(SalesCommission.salesperson_id == salesperson_id)
        if status:
            stmt = stmt.where(SalesCommission.status == status)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_for_job_and_salesperson(
        self, job_id: str, salesperson_id: str
    ) -> SalesCommission | None:
        result = await self.session.execute(
            select(SalesCommission).where(
                SalesCommission.job_id == job_id,
                SalesCommission.salesperson_id == salesperson_id,
            )
        )
        return result.scalar_one_or_none()
