"""SQLAlchemy model for inbound leads."""

from datetime import UTC, datetime
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fieldcrm.db.database import Base
from fieldcrm.db.leads.constants import LeadPriority, LeadStatus


class Lead(Base):
    """
    Inbound customer inquiry.

    Leads arrive from the CRM itself or from lead-source webhooks. Every lead
    gets a score, an SLA deadline and a duplicate check on creation.
    """

    __tablename__ = "leads"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    source: Mapped[str] = mapped_column(
        String(50), nullable=False, index=True, comment="Lead source, e.g. eLocal"
    )
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_phone: Mapped[str] = mapped_column(
        String(30), nullable=False, index=True
    )
    customer_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    customer_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    zip_code: Mapped[str | None] = mapped_column(String(10), nullable=True)
    service_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=LeadStatus.NEW.value,
        index=True,
        comment="new, contacted, qualified, scheduled, converted, lost, duplicate, spam",
    )
    priority: Mapped[str] = mapped_column(
        String(20), nullable=False, default=LeadPriority.NORMAL.value
    )
    cost: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True, comment="Price paid for the lead"
    )
    revenue: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True, comment="Revenue attributed to the lead"
    )
    assigned_to: Mapped[str | None] = mapped_column(String(36), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    contacted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    converted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    sla_deadline: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, comment="Contact-by deadline"
    )
    sla_breach: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    lead_score: Mapped[int] = mapped_column(
        Integer, nullable=False, default=50, comment="0-100 quality score"
    )
    is_duplicate: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    duplicate_of_id: Mapped[str | None] = mapped_column(
        String(36), nullable=True, comment="Original lead this duplicates"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        comment="Record creation timestamp",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        comment="Record last update timestamp",
    )

    __table_args__ = (Index("idx_leads_source_status", "source", "status"),)

    def __repr__(self) -> str:
        return (
            f"<Lead(id={self.id}, source={self.source}, "
            f"status={self.status}, score={self.lead_score})>"
        )
