"""create_core_tables

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-09-28 10:12:41.508113

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str, nullable: bool = True, **kwargs) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), nullable=nullable, **kwargs)


def _money(name: str, **kwargs) -> sa.Column:
    return sa.Column(
        name, sa.Numeric(12, 2), nullable=False, server_default="0.00", **kwargs
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False, comment="Login name"),
        sa.Column(
            "password_hash",
            sa.String(length=255),
            nullable=False,
            comment="bcrypt password hash",
        ),
        sa.Column(
            "role",
            sa.String(length=20),
            nullable=False,
            server_default="technician",
            comment="admin, dispatcher, technician or salesperson",
        ),
        sa.Column("full_name", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=30), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column(
            "is_active",
            sa.Boolean(),
            nullable=False,
            server_default=sa.true(),
            comment="Whether the user may sign in",
        ),
        _timestamp(
            "created_at",
            nullable=False,
            server_default=sa.text("now()"),
            comment="Record creation timestamp",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)

    op.create_table(
        "technicians",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=True, comment="Owning login, if any"),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=30), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column(
            "status",
            sa.String(length=20),
            nullable=False,
            server_default="available",
            comment="available, busy, off_duty or on_break",
        ),
        sa.Column(
            "current_job_id",
            sa.String(length=36),
            nullable=True,
            comment="Job the technician is travelling to or working",
        ),
        sa.Column(
            "classification",
            sa.String(length=20),
            nullable=False,
            server_default="junior",
            comment="senior, junior or digger",
        ),
        sa.Column(
            "approved_job_types",
            sa.JSON(),
            nullable=False,
            server_default="[]",
            comment="Service types this technician may claim; empty means all",
        ),
        sa.Column(
            "commission_rate",
            sa.Numeric(6, 4),
            nullable=False,
            server_default="0.10",
            comment="Commission rate applied to job revenue",
        ),
        sa.Column("hourly_rate", sa.Numeric(12, 2), nullable=False, server_default="25.00"),
        sa.Column(
            "emergency_rate",
            sa.Numeric(6, 4),
            nullable=False,
            server_default="1.5",
            comment="Multiplier applied to emergency hours",
        ),
        sa.Column("max_daily_jobs", sa.Integer(), nullable=False, server_default="8"),
        sa.Column("completed_jobs_today", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_location_lat", sa.Numeric(10, 7), nullable=True),
        sa.Column("last_location_lng", sa.Numeric(10, 7), nullable=True),
        _timestamp("last_location_updated"),
        _timestamp(
            "created_at",
            nullable=False,
            server_default=sa.text("now()"),
            comment="Record creation timestamp",
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
    )
    op.create_index(op.f("ix_technicians_status"), "technicians", ["status"], unique=False)

    op.create_table(
        "salespersons",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=True),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=30), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="available"),
        sa.Column(
            "commission_rate",
            sa.Numeric(6, 4),
            nullable=False,
            server_default="0.15",
            comment="Commission rate applied to job net profit",
        ),
        sa.Column("hourly_rate", sa.Numeric(12, 2), nullable=False, server_default="20.00"),
        sa.Column("max_daily_leads", sa.Integer(), nullable=False, server_default="20"),
        sa.Column("handled_leads_today", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "priority",
            sa.Integer(),
            nullable=False,
            server_default="1",
            comment="Lead routing priority, 1 is highest",
        ),
        sa.Column(
            "coverage_zones",
            sa.JSON(),
            nullable=False,
            server_default="[]",
            comment="Zip codes or areas covered",
        ),
        sa.Column("specializations", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _timestamp("created_at", nullable=False, server_default=sa.text("now()")),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
    )

    op.create_table(
        "leads",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column(
            "source", sa.String(length=50), nullable=False, comment="Lead source, e.g. eLocal"
        ),
        sa.Column("customer_name", sa.String(length=255), nullable=False),
        sa.Column("customer_phone", sa.String(length=30), nullable=False),
        sa.Column("customer_email", sa.String(length=255), nullable=True),
        sa.Column("customer_address", sa.Text(), nullable=True),
        sa.Column("city", sa.String(length=100), nullable=True),
        sa.Column("zip_code", sa.String(length=10), nullable=True),
        sa.Column("service_type", sa.String(length=100), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "status",
            sa.String(length=20),
            nullable=False,
            server_default="new",
            comment="new, contacted, qualified, scheduled, converted, lost, duplicate, spam",
        ),
        sa.Column("priority", sa.String(length=20), nullable=False, server_default="normal"),
        sa.Column("cost", sa.Numeric(12, 2), nullable=True, comment="Price paid for the lead"),
        sa.Column(
            "revenue",
            sa.Numeric(12, 2),
            nullable=True,
            comment="Revenue attributed to the lead",
        ),
        sa.Column("assigned_to", sa.String(length=36), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _timestamp("contacted_at"),
        _timestamp("converted_at"),
        _timestamp("sla_deadline", comment="Contact-by deadline"),
        sa.Column("sla_breach", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "lead_score",
            sa.Integer(),
            nullable=False,
            server_default="50",
            comment="0-100 quality score",
        ),
        sa.Column("is_duplicate", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "duplicate_of_id",
            sa.String(length=36),
            nullable=True,
            comment="Original lead this duplicates",
        ),
        _timestamp(
            "created_at",
            nullable=False,
            server_default=sa.text("now()"),
            comment="Record creation timestamp",
        ),
        _timestamp(
            "updated_at",
            nullable=False,
            server_default=sa.text("now()"),
            comment="Record last update timestamp",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_leads_source"), "leads", ["source"], unique=False)
    op.create_index(op.f("ix_leads_customer_phone"), "leads", ["customer_phone"], unique=False)
    op.create_index(op.f("ix_leads_status"), "leads", ["status"], unique=False)
    op.create_index("idx_leads_source_status", "leads", ["source", "status"], unique=False)

    op.create_table(
        "jobs",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("lead_id", sa.String(length=36), nullable=True),
        sa.Column("customer_name", sa.String(length=255), nullable=False),
        sa.Column("customer_phone", sa.String(length=30), nullable=False),
        sa.Column("customer_email", sa.String(length=255), nullable=True),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("city", sa.String(length=100), nullable=True),
        sa.Column("zip_code", sa.String(length=10), nullable=True),
        sa.Column(
            "latitude",
            sa.Numeric(10, 7),
            nullable=True,
            comment="Geocoded job address latitude",
        ),
        sa.Column(
            "longitude",
            sa.Numeric(10, 7),
            nullable=True,
            comment="Geocoded job address longitude",
        ),
        sa.Column("service_type", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "status",
            sa.String(length=20),
            nullable=False,
            server_default="pending",
            comment="pending, assigned, confirmed, en_route, on_site, in_progress, completed, cancelled",
        ),
        sa.Column("priority", sa.String(length=20), nullable=False, server_default="normal"),
        _timestamp("scheduled_date"),
        sa.Column("scheduled_time_start", sa.String(length=10), nullable=True),
        sa.Column("scheduled_time_end", sa.String(length=10), nullable=True),
        sa.Column(
            "estimated_duration",
            sa.Integer(),
            nullable=True,
            comment="Estimated duration in minutes",
        ),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("assigned_technician_id", sa.String(length=36), nullable=True),
        sa.Column("assigned_salesperson_id", sa.String(length=36), nullable=True),
        sa.Column("dispatcher_id", sa.String(length=36), nullable=True),
        _timestamp("assigned_at"),
        _timestamp("confirmed_at"),
        _timestamp("en_route_at"),
        _timestamp("arrived_at"),
        _timestamp("started_at"),
        _timestamp("completed_at"),
        _timestamp("cancelled_at"),
        sa.Column("cancellation_reason", sa.Text(), nullable=True),
        sa.Column("cancelled_by", sa.String(length=36), nullable=True),
        sa.Column("arrival_lat", sa.Numeric(10, 7), nullable=True),
        sa.Column("arrival_lng", sa.Numeric(10, 7), nullable=True),
        sa.Column(
            "arrival_verified",
            sa.Boolean(),
            nullable=True,
            comment="True within radius, False outside, NULL when location was unavailable",
        ),
        sa.Column(
            "arrival_distance",
            sa.Integer(),
            nullable=True,
            comment="Metres between technician and job address",
        ),
        sa.Column("labor_hours", sa.Numeric(8, 2), nullable=False, server_default="0.00"),
        sa.Column("labor_rate", sa.Numeric(12, 2), nullable=False, server_default="25.00"),
        _money("labor_cost", comment="labor_hours * labor_rate"),
        _money("materials_cost"),
        _money("travel_expense"),
        _money("equipment_cost"),
        _money("other_expenses"),
        sa.Column("expense_notes", sa.Text(), nullable=True),
        _money("total_cost", comment="Sum of all cost components"),
        _money("total_revenue"),
        _money("profit", comment="total_revenue - total_cost"),
        _timestamp(
            "created_at",
            nullable=False,
            server_default=sa.text("now()"),
            comment="Record creation timestamp",
        ),
        _timestamp("updated_at", nullable=False, server_default=sa.text("now()")),
        sa.ForeignKeyConstraint(
            ["assigned_technician_id"], ["technicians.id"], ondelete="SET NULL"
        ),
        sa.ForeignKeyConstraint(
            ["assigned_salesperson_id"], ["salespersons.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_jobs_status"), "jobs", ["status"], unique=False)
    op.create_index(
        op.f("ix_jobs_assigned_technician_id"),
        "jobs",
        ["assigned_technician_id"],
        unique=False,
    )
    op.create_index(op.f("ix_jobs_completed_at"), "jobs", ["completed_at"], unique=False)
    op.create_index(
        "idx_jobs_status_technician",
        "jobs",
        ["status", "assigned_technician_id"],
        unique=False,
    )
    op.create_index(
        "idx_jobs_technician_completed",
        "jobs",
        ["assigned_technician_id", "completed_at"],
        unique=False,
    )

    op.create_table(
        "job_timeline_events",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("job_id", sa.String(length=36), nullable=False),
        sa.Column(
            "event_type",
            sa.String(length=50),
            nullable=False,
            comment="Usually the status the job moved to",
        ),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("created_by", sa.String(length=36), nullable=True),
        sa.Column("metadata", sa.JSON(), nullable=True, comment="Structured event details"),
        _timestamp("created_at", nullable=False, server_default=sa.text("now()")),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_job_timeline_events_job_id"),
        "job_timeline_events",
        ["job_id"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f("ix_job_timeline_events_job_id"), table_name="job_timeline_events")
    op.drop_table("job_timeline_events")

    op.drop_index("idx_jobs_technician_completed", table_name="jobs")
    op.drop_index("idx_jobs_status_technician", table_name="jobs")
    op.drop_index(op.f("ix_jobs_completed_at"), table_name="jobs")
    op.drop_index(op.f("ix_jobs_assigned_technician_id"), table_name="jobs")
    op.drop_index(op.f("ix_jobs_status"), table_name="jobs")
    op.drop_table("jobs")

    op.drop_index("idx_leads_source_status", table_name="leads")
    op.drop_index(op.f("ix_leads_status"), table_name="leads")
    op.drop_index(op.f("ix_leads_customer_phone"), table_name="leads")
    op.drop_index(op.f("ix_leads_source"), table_name="leads")
    op.drop_table("leads")

    op.drop_table("salespersons")

    op.drop_index(op.f("ix_technicians_status"), table_name="technicians")
    op.drop_table("technicians")

    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
