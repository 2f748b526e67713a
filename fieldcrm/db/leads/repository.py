"""Repository for leads."""

from sqlalchemy import select

from fieldcrm.db.leads.model import Lead
from fieldcrm.db.repository import CrudRepository


class LeadRepository(CrudRepository[Lead]):
    """Repository for managing leads in the database."""

    model = Lead

    async def list_leads(
        self, status: str | None = None, source: str | None = None
    ) -> list[Lead]:
        stmt = select(Lead).order_by(Lead.created_at.desc())
        if status:
            stmt = stmt.where(Lead.status == status)
        if source:
            stmt = stmt.where(Lead.source == source)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_by_phone(self, phone: str) -> list[Lead]:
        """All leads with this phone number, oldest first."""
        result = await self.session.execute(
            select(Lead)
            .where(Lead.customer_phone == phone)
            .order_by(Lead.created_at.asc())
        )
        return list(result.scalars().all())

    async def list_duplicates(self) -> list[Lead]:
        result = await self.session.execute(
            select(Lead)
            .where(Lead.is_duplicate == True)  # noqa: E712
            .order_by(Lead.created_at.desc())
        )
        return list(result.scalars().all())
