"""Repository for quotes."""

from sqlalchemy import select

from fieldcrm.db.quotes.model import Quote
from fieldcrm.db.repository import CrudRepository


class QuoteRepository(CrudRepository[Quote]):
    model = Quote

    async def get_by_token(self, token: str) -> Quote | None:
        result = await self.session.execute(
            select(Quote).where(Quote.public_token == token)
        )
        return result.scalar_one_or_none()

    async def list_quotes(
        self, job_id: str | None = None, status: str | None = None
    ) -> list[Quote]:
        """List quotes newest first, optionally filtered by job and status."""
        stmt = select(Quote)
        if job_id:
            stmt = stmt.where(Quote.job_id == job_id)
        if status:
            stmt = stmt.where(Quote.status == status)
        result = await self.session.execute(stmt.order_by(Quote.created_at.desc()))
        return list(result.scalars().all())

    async def list_for_jobs(self, job_ids: list[str]) -> list[Quote]:
        if not job_ids:
            return []
        result = await self.session.execute(
            select(Quote).where(Quote.job_id.in_(job_ids))
        )
        return list(result.scalars().all())
