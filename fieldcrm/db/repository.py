"""
Shared CRUD repository.

Entity repositories subclass ``CrudRepository`` and add their own queries.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fieldcrm.db.database import Base
from fieldcrm.utils.logger import logger

ModelT = TypeVar("ModelT", bound=Base)


class CrudRepository(Generic[ModelT]):
    """Create, read, update and delete for a single model."""

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        """
        Initialize the repository.

        Args:
            session: Async database session
        """
        self.session = session

    @property
    def _name(self) -> str:
        return type(self).__name__

    async def create(self, data: BaseModel | dict[str, Any]) -> ModelT:
        """
        Insert a new row.

        Args:
            data: Creation schema or plain column mapping

        Returns:
            The created model with server defaults loaded
        """
        values = data.model_dump() if isinstance(data, BaseModel) else dict(data)
        instance = self.model(**values)
        return await self.add(instance)

    async def add(self, instance: ModelT) -> ModelT:
        """Persist an already-built model instance."""
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        logger.info(f"[{self._name}] Created {self.model.__name__}: id={instance.id}")
        return instance

    async def get_by_id(self, record_id: str) -> ModelT | None:
        result = await self.session.execute(
            select(self.model).where(self.model.id == record_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self, limit: int | None = None, offset: int = 0) -> list[ModelT]:
        stmt = select(self.model).order_by(self.model.created_at.desc()).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(
        self, record_id: str, data: BaseModel | dict[str, Any]
    ) -> ModelT | None:
        """
        Apply a partial update.

        Args:
            record_id: Primary key
            data: Update schema (only explicitly set fields are applied) or mapping

        Returns:
            The updated model, or None if not found
        """
        instance = await self.get_by_id(record_id)
        if not instance:
            logger.warning(
                f"[{self._name}] Cannot update: {self.model.__name__} {record_id} not found"
            )
            return None

        changes = (
            data.model_dump(exclude_unset=True)
            if isinstance(data, BaseModel)
            else dict(data)
        )
        for field, value in changes.items():
            setattr(instance, field, value)

        return await self.save(instance)

    async def save(self, instance: ModelT) -> ModelT:
        """Flush pending changes on a loaded instance and reload it."""
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, record_id: str) -> bool:
        """
        Delete a row.

        Returns:
            True if deleted, False if not found
        """
        instance = await self.get_by_id(record_id)
        if not instance:
            return False
        await self.session.delete(instance)
        await self.session.flush()
        logger.info(f"[{self._name}] Deleted {self.model.__name__}: id={record_id}")
        return True
