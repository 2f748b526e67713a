"""FastAPI dependencies for quote services."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fieldcrm.db.database import get_db
from fieldcrm.db.quotes.service import QuoteService


async def get_quote_service(session: AsyncSession = Depends(get_db)) -> QuoteService:
    """Get quote service instance."""
    return QuoteService(session)
