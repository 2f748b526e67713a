"""SQLAlchemy model for salespersons."""

from datetime import UTC, datetime
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from fieldcrm.db.database import Base


class Salesperson(Base):
    """Salesperson profile. Commission is paid on job net profit."""

    __tablename__ = "salespersons"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    user_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        unique=True,
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(30), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="available"
    )
    commission_rate: Mapped[Decimal] = mapped_column(
        Numeric(6, 4),
        nullable=False,
        default=Decimal("0.15"),
        comment="Commission rate applied to job net profit",
    )
    hourly_rate: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("20.00")
    )
    max_daily_leads: Mapped[int] = mapped_column(Integer, nullable=False, default=20)
    handled_leads_today: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )
    priority: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1, comment="Lead routing priority, 1 is highest"
    )
    coverage_zones: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list, comment="Zip codes or areas covered"
    )
    specializations: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )

    def __repr__(self) -> str:
        return f"<Salesperson(id={self.id}, full_name={self.full_name})>"
