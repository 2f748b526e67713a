"""
FastAPI dependencies for database repositories.

Provides dependency injection for routers that work directly against a
repository rather than a service.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fieldcrm.db.business_intake.repository import BusinessIntakeRepository
from fieldcrm.db.database import get_db
from fieldcrm.db.marketing.repository import (
    MarketingCampaignRepository,
    MarketingSpendRepository,
)
from fieldcrm.db.notifications.repository import NotificationRepository
from fieldcrm.db.pricebook.repository import (
    PricebookCategoryRepository,
    PricebookItemRepository,
)
from fieldcrm.db.salespersons.repository import SalespersonRepository
from fieldcrm.db.technicians.repository import TechnicianRepository
from fieldcrm.db.users.repository import UserRepository


def get_user_repository(
    session: AsyncSession = Depends(get_db),
) -> UserRepository:
    """
    FastAPI dependency for getting the user repository.

    Args:
        session: Database session from get_db dependency

    Returns:
        UserRepository: Repository instance with injected session
    """
    return UserRepository(session)


def get_technician_repository(
    session: AsyncSession = Depends(get_db),
) -> TechnicianRepository:
    """
    FastAPI dependency for getting the technician repository.

    Args:
        session: Database session from get_db dependency

    Returns:
        TechnicianRepository: Repository instance with injected session
    """
    return TechnicianRepository(session)


def get_salesperson_repository(
    session: AsyncSession = Depends(get_db),
) -> SalespersonRepository:
    """FastAPI dependency for getting the salesperson repository."""
    return SalespersonRepository(session)


def get_notification_repository(
    session: AsyncSession = Depends(get_db),
) -> NotificationRepository:
    """FastAPI dependency for getting the notification repository."""
    return NotificationRepository(session)


def get_pricebook_category_repository(
    session: AsyncSession = Depends(get_db),
) -> PricebookCategoryRepository:
    return PricebookCategoryRepository(session)


def get_pricebook_item_repository(
    session: AsyncSession = Depends(get_db),
) -> PricebookItemRepository:
    return PricebookItemRepository(session)


def get_marketing_campaign_repository(
    session: AsyncSession = Depends(get_db),
) -> MarketingCampaignRepository:
    return MarketingCampaignRepository(session)


def get_marketing_spend_repository(
    session: AsyncSession = Depends(get_db),
) -> MarketingSpendRepository:
    return MarketingSpendRepository(session)


def get_business_intake_repository(
    session: AsyncSession = Depends(get_db),
) -> BusinessIntakeRepository:
    """FastAPI dependency for getting the business intake repository."""
    return BusinessIntakeRepository(session)
