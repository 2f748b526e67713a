"""Repository for business intake submissions."""

from sqlalchemy import select

from fieldcrm.db.business_intake.model import BusinessIntake
from fieldcrm.db.repository import CrudRepository


class BusinessIntakeRepository(CrudRepository[BusinessIntake]):
    model = BusinessIntake

    async def list_intakes(self, status: str | None = None) -> list[BusinessIntake]:
        stmt = select(BusinessIntake).order_by(BusinessIntake.created_at.desc())
        if status:
            stmt = stmt.where(BusinessIntake.status == status)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
