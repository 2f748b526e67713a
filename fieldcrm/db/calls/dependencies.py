"""FastAPI dependencies for call services."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fieldcrm.db.calls.service import CallService
from fieldcrm.db.database import get_db


async def get_call_service(session: AsyncSession = Depends(get_db)) -> CallService:
    """Get call service instance."""
    return CallService(session)
