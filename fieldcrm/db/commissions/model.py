"""
SQLAlchemy model for salesperson commissions.

The commission rate is copied onto each record when it is calculated, so
later changes to a salesperson's rate never alter past commissions.
"""

from datetime import UTC, datetime
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from fieldcrm.db.commissions.constants import CommissionStatus
from fieldcrm.db.database import Base


class SalesCommission(Base):
    """Commission owed to a salesperson for one completed job."""

    __tablename__ = "sales_commissions"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    salesperson_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("salespersons.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    job_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False
    )
    lead_id: Mapped[str | None] = mapped_column(String(36), nullable=True)

    job_revenue: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    labor_cost: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0.00")
    )
    materials_cost: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0.00")
    )
    travel_expense: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0.00")
    )
    equipment_cost: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0.00")
    )
    other_expenses: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0.00")
    )
    total_costs: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    net_profit: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, comment="job_revenue - total_costs"
    )
    commission_rate: Mapped[Decimal] = mapped_column(
        Numeric(6, 4), nullable=False, comment="Rate copied at calculation time"
    )
    commission_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, comment="net_profit * commission_rate"
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=CommissionStatus.PENDING.value,
        index=True,
        comment="pending, approved or paid",
    )
    payroll_period: Mapped[str | None] = mapped_column(String(20), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    approved_by: Mapped[str | None] = mapped_column(String(36), nullable=True)
    calculated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )
    approved_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    paid_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )

    __table_args__ = (
        UniqueConstraint("salesperson_id", "job_id", name="uq_commission_salesperson_job"),
    )

    def __repr__(self) -> str:
        return (
            f"<SalesCommission(id={self.id}, job_id={self.job_id}, "
            f"amount={self.commission_amount}, status={self.status})>"
        )
