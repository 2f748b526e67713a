"""Repositories for pricebook categories and items."""

from sqlalchemy import select

from fieldcrm.db.pricebook.model import PricebookCategory, PricebookItem
from fieldcrm.db.repository import CrudRepository


class PricebookCategoryRepository(CrudRepository[PricebookCategory]):
    model = PricebookCategory

    async def list_all(
        self, limit: int | None = None, offset: int = 0
    ) -> list[PricebookCategory]:
        stmt = (
            select(PricebookCategory)
            .order_by(PricebookCategory.sort_order, PricebookCategory.name)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class PricebookItemRepository(CrudRepository[PricebookItem]):
    model = PricebookItem

    async def list_items(
        self, category_id: str | None = None, active_only: bool = False
    ) -> list[PricebookItem]:
        stmt = select(PricebookItem).order_by(PricebookItem.name)
        if category_id:
            stmt = stmt.where(PricebookItem.category_id == category_id)
        if active_only:
            stmt = stmt.where(PricebookItem.is_active == True)  # noqa: E712
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
