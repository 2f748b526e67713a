"""SQLAlchemy model for phone call records."""

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fieldcrm.db.database import Base


class Call(Base):
    """Inbound or outbound phone call, optionally tied to a lead or job."""

    __tablename__ = "calls"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    lead_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    job_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    quote_id: Mapped[str | None] = mapped_column(
        String(36), nullable=True, comment="Quote created from this call"
    )
    caller_phone: Mapped[str] = mapped_column(String(30), nullable=False)
    caller_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    direction: Mapped[str] = mapped_column(
        String(20), nullable=False, default="inbound", comment="inbound or outbound"
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="completed"
    )
    duration: Mapped[int | None] = mapped_column(
        Integer, nullable=True, comment="Call duration in seconds"
    )
    recording_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    service_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    handled_by: Mapped[str | None] = mapped_column(String(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Call(id={self.id}, caller_phone={self.caller_phone})>"
