"""FastAPI dependencies for lead services."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fieldcrm.db.database import get_db
from fieldcrm.db.leads.service import LeadService


async def get_lead_service(session: AsyncSession = Depends(get_db)) -> LeadService:
    """Get lead service instance."""
    return LeadService(session)
