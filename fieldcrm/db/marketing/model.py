"""SQLAlchemy models for marketing campaigns and their spend."""

from datetime import UTC, datetime
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fieldcrm.db.database import Base


class MarketingCampaign(Base):
    """A paid or organic campaign tied to a lead source."""

    __tablename__ = "marketing_campaigns"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    source: Mapped[str] = mapped_column(
        String(50), nullable=False, index=True, comment="Lead source this campaign feeds"
    )
    type: Mapped[str] = mapped_column(
        String(30), nullable=False, default="paid", comment="paid, organic, referral, ..."
    )
    budget: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )


class MarketingSpend(Base):
    """Spend recorded against a lead source for one month."""

    __tablename__ = "marketing_spend"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    campaign_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("marketing_campaigns.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    source: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    period: Mapped[str] = mapped_column(
        String(7), nullable=False, index=True, comment="Month as YYYY-MM"
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    leads_generated: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    leads_converted: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    revenue_generated: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0.00")
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )
