"""
SQLAlchemy model for application users.

A user is a login identity with a role. Technician and salesperson profiles
point back at their user via ``user_id``.
"""

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from fieldcrm.auth.constants import Role
from fieldcrm.db.database import Base


class User(Base):
    """Login identity with a role."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    username: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True, comment="Login name"
    )
    password_hash: Mapped[str] = mapped_column(
        String(255), nullable=False, comment="bcrypt password hash"
    )
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=Role.TECHNICIAN.value,
        comment="admin, dispatcher, technician or salesperson",
    )
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, comment="Whether the user may sign in"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        comment="Record creation timestamp",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, role={self.role})>"
