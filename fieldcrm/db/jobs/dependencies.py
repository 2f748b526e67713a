"""FastAPI dependencies for job services."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fieldcrm.db.database import get_db
from fieldcrm.db.jobs.service import JobService


async def get_job_service(session: AsyncSession = Depends(get_db)) -> JobService:
    """Get job service instance."""
    return JobService(session)
