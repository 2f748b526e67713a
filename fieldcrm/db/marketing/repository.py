"""Repositories for marketing campaigns and spend."""

from sqlalchemy import select

from fieldcrm.db.marketing.model import MarketingCampaign, MarketingSpend
from fieldcrm.db.repository import CrudRepository


class MarketingCampaignRepository(CrudRepository[MarketingCampaign]):
    model = MarketingCampaign

    async def list_campaigns(
        self, source: str | None = None, active_only: bool = False
    ) -> list[MarketingCampaign]:
        stmt = select(MarketingCampaign).order_by(MarketingCampaign.name)
        if source:
            stmt = stmt.where(MarketingCampaign.source == source)
        if active_only:
            stmt = stmt.where(MarketingCampaign.is_active == True)  # noqa: E712
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class MarketingSpendRepository(CrudRepository[MarketingSpend]):
    model = MarketingSpend

    async def list_spend(
        self, campaign_id: str | None = None, period: str | None = None
    ) -> list[MarketingSpend]:
        stmt = select(MarketingSpend).order_by(
            MarketingSpend.period.desc(), MarketingSpend.source
        )
        if campaign_id:
            stmt = stmt.where(MarketingSpend.campaign_id == campaign_id)
        if period:
            stmt = stmt.where(MarketingSpend.period == period)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
