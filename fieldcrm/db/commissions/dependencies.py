"""FastAPI dependencies for commission services."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fieldcrm.db.commissions.service import CommissionService
from fieldcrm.db.database import get_db


async def get_commission_service(
    session: AsyncSession = Depends(get_db),
) -> CommissionService:
    """Get commission service instance."""
    return CommissionService(session)
