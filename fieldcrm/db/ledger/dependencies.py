"""FastAPI dependencies for the job ledger."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fieldcrm.db.database import get_db
from fieldcrm.db.ledger.service import LedgerService


async def get_ledger_service(session: AsyncSession = Depends(get_db)) -> LedgerService:
    """Get ledger service instance."""
    return LedgerService(session)
