"""
SQLAlchemy model for technicians.

Rates are stored on the profile and read at payroll time.
"""

from datetime import UTC, datetime
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from fieldcrm.db.database import Base
from fieldcrm.db.technicians.constants import (
    TechnicianClassification,
    TechnicianStatus,
)


class Technician(Base):
    """Field technician profile."""

    __tablename__ = "technicians"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    user_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        unique=True,
        comment="Owning login, if any",
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(30), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=TechnicianStatus.AVAILABLE.value,
        index=True,
        comment="available, busy, off_duty or on_break",
    )
    current_job_id: Mapped[str | None] = mapped_column(
        String(36), nullable=True, comment="Job the technician is travelling to or working"
    )
    classification: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=TechnicianClassification.JUNIOR.value,
        comment="senior, junior or digger",
    )
    approved_job_types: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Service types this technician may claim; empty means all",
    )
    commission_rate: Mapped[Decimal] = mapped_column(
        Numeric(6, 4),
        nullable=False,
        default=Decimal("0.10"),
        comment="Commission rate applied to job revenue",
    )
    hourly_rate: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("25.00")
    )
    emergency_rate: Mapped[Decimal] = mapped_column(
        Numeric(6, 4),
        nullable=False,
        default=Decimal("1.5"),
        comment="Multiplier applied to emergency hours",
    )
    max_daily_jobs: Mapped[int] = mapped_column(Integer, nullable=False, default=8)
    completed_jobs_today: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )
    last_location_lat: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 7), nullable=True
    )
    last_location_lng: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 7), nullable=True
    )
    last_location_updated: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        comment="Record creation timestamp",
    )

    def is_approved_for(self, service_type: str | None) -> bool:
        """Whether this technician may take jobs of the given service type."""
        if not self.approved_job_types or not service_type:
            return True
        return service_type in self.approved_job_types

    def __repr__(self) -> str:
        return (
            f"<Technician(id={self.id}, full_name={self.full_name}, "
            f"status={self.status})>"
        )
