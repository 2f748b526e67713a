"""
SQLAlchemy model for quotes.

Line items and labor entries are stored as serialized JSON text. The derived
``subtotal``, ``labor_total``, ``tax_amount`` and ``total`` are recomputed
whenever either list or the tax rate changes.
"""

import json
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fieldcrm.db.database import Base
from fieldcrm.db.quotes.constants import QuoteStatus


class Quote(Base):
    """Priced proposal sent to a customer."""

    __tablename__ = "quotes"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    job_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    technician_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    customer_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)

    line_items: Mapped[str] = mapped_column(
        Text, nullable=False, default="[]", comment="JSON list of line items"
    )
    labor_entries: Mapped[str | None] = mapped_column(
        Text, nullable=True, comment="JSON list of labor entries"
    )
    subtotal: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0.00")
    )
    labor_total: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0.00")
    )
    tax_rate: Mapped[Decimal] = mapped_column(
        Numeric(6, 4), nullable=False, default=Decimal("0.0000")
    )
    tax_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0.00"), comment="subtotal * tax_rate"
    )
    total: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        default=Decimal("0.00"),
        comment="subtotal + labor_total + tax_amount",
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=QuoteStatus.DRAFT.value,
        index=True,
        comment="draft, sent, viewed, accepted, declined or expired",
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    public_token: Mapped[str | None] = mapped_column(
        String(64), nullable=True, unique=True, comment="Token for unauthenticated access"
    )

    # Customer consent captured at acceptance
    sms_opt_in: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sms_ownership_confirmed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    email_opt_in: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    email_ownership_confirmed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )

    sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    viewed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    accepted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    declined_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        comment="Record creation timestamp",
    )

    __table_args__ = (Index("idx_quotes_job_status", "job_id", "status"),)

    def get_line_items(self) -> list[dict[str, Any]]:
        """Decode the stored line items."""
        return json.loads(self.line_items) if self.line_items else []

    def get_labor_entries(self) -> list[dict[str, Any]]:
        """Decode the stored labor entries."""
        return json.loads(self.labor_entries) if self.labor_entries else []

    def __repr__(self) -> str:
        return f"<Quote(id={self.id}, status={self.status}, total={self.total})>"
