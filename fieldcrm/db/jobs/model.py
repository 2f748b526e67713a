"""
SQLAlchemy models for jobs and their timeline.

A job is the central work order. Cost fields are stored alongside the derived
``labor_cost``, ``total_cost`` and ``profit`` which are recomputed on every
write that touches their inputs.
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import Any
from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fieldcrm.db.database import Base
from fieldcrm.db.jobs.constants import JobPriority, JobStatus


def _money_column(comment: str | None = None):
    return mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0.00"), comment=comment
    )


class Job(Base):
    """Work order for a customer, optionally assigned to a technician."""

    __tablename__ = "jobs"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    lead_id: Mapped[str | None] = mapped_column(String(36), nullable=True)

    # Customer
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_phone: Mapped[str] = mapped_column(String(30), nullable=False)
    customer_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    zip_code: Mapped[str | None] = mapped_column(String(10), nullable=True)
    latitude: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 7), nullable=True, comment="Geocoded job address latitude"
    )
    longitude: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 7), nullable=True, comment="Geocoded job address longitude"
    )

    # Work
    service_type: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=JobStatus.PENDING.value,
        index=True,
        comment="pending, assigned, confirmed, en_route, on_site, in_progress, completed, cancelled",
    )
    priority: Mapped[str] = mapped_column(
        String(20), nullable=False, default=JobPriority.NORMAL.value
    )
    scheduled_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    scheduled_time_start: Mapped[str | None] = mapped_column(String(10), nullable=True)
    scheduled_time_end: Mapped[str | None] = mapped_column(String(10), nullable=True)
    estimated_duration: Mapped[int | None] = mapped_column(
        Integer, nullable=True, comment="Estimated duration in minutes"
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Assignment
    assigned_technician_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("technicians.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    assigned_salesperson_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("salespersons.id", ondelete="SET NULL"),
        nullable=True,
    )
    dispatcher_id: Mapped[str | None] = mapped_column(String(36), nullable=True)

    # Transition timestamps
    assigned_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    confirmed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    en_route_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    arrived_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    started_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )
    cancelled_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    cancellation_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    cancelled_by: Mapped[str | None] = mapped_column(String(36), nullable=True)

    # Arrival verification
    arrival_lat: Mapped[Decimal | None] = mapped_column(Numeric(10, 7), nullable=True)
    arrival_lng: Mapped[Decimal | None] = mapped_column(Numeric(10, 7), nullable=True)
    arrival_verified: Mapped[bool | None] = mapped_column(
        Boolean,
        nullable=True,
        comment="True within radius, False outside, NULL when location was unavailable",
    )
    arrival_distance: Mapped[int | None] = mapped_column(
        Integer, nullable=True, comment="Metres between technician and job address"
    )

    # Costs and revenue
    labor_hours: Mapped[Decimal] = mapped_column(
        Numeric(8, 2), nullable=False, default=Decimal("0.00")
    )
    labor_rate: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("25.00")
    )
    labor_cost: Mapped[Decimal] = _money_column("labor_hours * labor_rate")
    materials_cost: Mapped[Decimal] = _money_column()
    travel_expense: Mapped[Decimal] = _money_column()
    equipment_cost: Mapped[Decimal] = _money_column()
    other_expenses: Mapped[Decimal] = _money_column()
    expense_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    total_cost: Mapped[Decimal] = _money_column("Sum of all cost components")
    total_revenue: Mapped[Decimal] = _money_column()
    profit: Mapped[Decimal] = _money_column("total_revenue - total_cost")

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
    )

    timeline: Mapped[list["JobTimelineEvent"]] = relationship(
        "JobTimelineEvent",
        back_populates="job",
        cascade="all, delete-orphan",
        order_by="JobTimelineEvent.created_at",
    )

    __table_args__ = (
        # Pool lookup
        Index("idx_jobs_status_technician", "status", "assigned_technician_id"),
        # Payroll lookup
        Index("idx_jobs_technician_completed", "assigned_technician_id", "completed_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Job(id={self.id}, status={self.status}, "
            f"technician={self.assigned_technician_id})>"
        )


class JobTimelineEvent(Base):
    """Append-only audit entry for something that happened to a job."""

    __tablename__ = "job_timeline_events"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    job_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("jobs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    event_type: Mapped[str] = mapped_column(
        String(50), nullable=False, comment="Usually the status the job moved to"
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    created_by: Mapped[str | None] = mapped_column(String(36), nullable=True)
    event_metadata: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata", JSON, nullable=True, comment="Structured event details"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )

    job: Mapped[Job] = relationship("Job", back_populates="timeline")

    def __repr__(self) -> str:
        return f"<JobTimelineEvent(job_id={self.job_id}, event_type={self.event_type})>"
