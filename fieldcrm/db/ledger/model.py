"""
SQLAlchemy models for per-job financial ledger entries.

``JobRevenueEvent`` rows are the authoritative revenue record for a job.
``JobLeadFee`` rows record the lead fee charged to a technician for a job.
"""

from datetime import UTC, datetime
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fieldcrm.db.database import Base


class JobLeadFee(Base):
    """Lead fee charged against a technician for one job."""

    __tablename__ = "job_lead_fees"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    job_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("jobs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    technician_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("technicians.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("125.00")
    )
    accepted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        comment="When the technician accepted the job",
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )

    def __repr__(self) -> str:
        return f"<JobLeadFee(job_id={self.job_id}, amount={self.amount})>"


class JobRevenueEvent(Base):
    """Recorded revenue, cost and profit for a job."""

    __tablename__ = "job_revenue_events"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    job_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("jobs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    technician_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("technicians.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    gross_revenue: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    total_costs: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0.00")
    )
    net_profit: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, comment="gross_revenue - total_costs"
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    recorded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )

    def __repr__(self) -> str:
        return (
            f"<JobRevenueEvent(job_id={self.job_id}, "
            f"gross_revenue={self.gross_revenue})>"
        )
