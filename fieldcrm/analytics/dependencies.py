"""FastAPI dependencies for analytics."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fieldcrm.analytics.service import AnalyticsService
from fieldcrm.db.database import get_db


async def get_analytics_service(
    session: AsyncSession = Depends(get_db),
) -> AnalyticsService:
    """Get analytics service instance."""
    return AnalyticsService(session)
