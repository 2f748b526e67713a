"""Repository for call records."""

from sqlalchemy import select

from fieldcrm.db.calls.model import Call
from fieldcrm.db.repository import CrudRepository


class CallRepository(CrudRepository[Call]):
    model = Call

    async def list_for_lead(self, lead_id: str) -> list[Call]:
        result = await self.session.execute(
            select(Call).where(Call.lead_id == lead_id).order_by(Call.created_at.desc())
        )
        return list(result.scalars().all())
