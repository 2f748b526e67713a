"""create_sales_and_ledger_tables

Revision ID: 8b4e6d2f1a37
Revises: 3f1c2a9d7b10
Create Date: 2026-09-28 11:47:03.219845

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "8b4e6d2f1a37"
down_revision: Union[str, Sequence[str], None] = "3f1c2a9d7b10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("now()"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "quotes",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("job_id", sa.String(length=36), nullable=True),
        sa.Column("technician_id", sa.String(length=36), nullable=True),
        sa.Column("customer_name", sa.String(length=255), nullable=False),
        sa.Column("customer_phone", sa.String(length=30), nullable=True),
        sa.Column("customer_email", sa.String(length=255), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column(
            "line_items",
            sa.Text(),
            nullable=False,
            server_default="[]",
            comment="JSON list of line items",
        ),
        sa.Column(
            "labor_entries", sa.Text(), nullable=True, comment="JSON list of labor entries"
        ),
        sa.Column("subtotal", sa.Numeric(12, 2), nullable=False, server_default="0.00"),
        sa.Column("labor_total", sa.Numeric(12, 2), nullable=False, server_default="0.00"),
        sa.Column("tax_rate", sa.Numeric(6, 4), nullable=False, server_default="0.0000"),
        sa.Column(
            "tax_amount",
            sa.Numeric(12, 2),
            nullable=False,
            server_default="0.00",
            comment="subtotal * tax_rate",
        ),
        sa.Column(
            "total",
            sa.Numeric(12, 2),
            nullable=False,
            server_default="0.00",
            comment="subtotal + labor_total + tax_amount",
        ),
        sa.Column(
            "status",
            sa.String(length=20),
            nullable=False,
            server_default="draft",
            comment="draft, sent, viewed, accepted, declined or expired",
        ),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "public_token",
            sa.String(length=64),
            nullable=True,
            comment="Token for unauthenticated access",
        ),
        sa.Column("sms_opt_in", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "sms_ownership_confirmed", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("email_opt_in", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "email_ownership_confirmed",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("viewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("accepted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("declined_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
            comment="Record creation timestamp",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("public_token"),
    )
    op.create_index(op.f("ix_quotes_job_id"), "quotes", ["job_id"], unique=False)
    op.create_index(op.f("ix_quotes_status"), "quotes", ["status"], unique=False)
    op.create_index("idx_quotes_job_status", "quotes", ["job_id", "status"], unique=False)

    op.create_table(
        "calls",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("lead_id", sa.String(length=36), nullable=True),
        sa.Column("job_id", sa.String(length=36), nullable=True),
        sa.Column(
            "quote_id",
            sa.String(length=36),
            nullable=True,
            comment="Quote created from this call",
        ),
        sa.Column("caller_phone", sa.String(length=30), nullable=False),
        sa.Column("caller_name", sa.String(length=255), nullable=True),
        sa.Column(
            "direction",
            sa.String(length=20),
            nullable=False,
            server_default="inbound",
            comment="inbound or outbound",
        ),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="completed"),
        sa.Column(
            "duration", sa.Integer(), nullable=True, comment="Call duration in seconds"
        ),
        sa.Column("recording_url", sa.Text(), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("service_type", sa.String(length=100), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("handled_by", sa.String(length=36), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_calls_created_at"), "calls", ["created_at"], unique=False)

    op.create_table(
        "sales_commissions",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("salesperson_id", sa.String(length=36), nullable=False),
        sa.Column("job_id", sa.String(length=36), nullable=False),
        sa.Column("lead_id", sa.String(length=36), nullable=True),
        sa.Column("job_revenue", sa.Numeric(12, 2), nullable=False),
        sa.Column("labor_cost", sa.Numeric(12, 2), nullable=False, server_default="0.00"),
        sa.Column("materials_cost", sa.Numeric(12, 2), nullable=False, server_default="0.00"),
        sa.Column("travel_expense", sa.Numeric(12, 2), nullable=False, server_default="0.00"),
        sa.Column("equipment_cost", sa.Numeric(12, 2), nullable=False, server_default="0.00"),
        sa.Column("other_expenses", sa.Numeric(12, 2), nullable=False, server_default="0.00"),
        sa.Column("total_costs", sa.Numeric(12, 2), nullable=False),
        sa.Column(
            "net_profit",
            sa.Numeric(12, 2),
            nullable=False,
            comment="job_revenue - total_costs",
        ),
        sa.Column(
            "commission_rate",
            sa.Numeric(6, 4),
            nullable=False,
            comment="Rate copied at calculation time",
        ),
        sa.Column(
            "commission_amount",
            sa.Numeric(12, 2),
            nullable=False,
            comment="net_profit * commission_rate",
        ),
        sa.Column(
            "status",
            sa.String(length=20),
            nullable=False,
            server_default="pending",
            comment="pending, approved or paid",
        ),
        sa.Column("payroll_period", sa.String(length=20), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("approved_by", sa.String(length=36), nullable=True),
        sa.Column(
            "calculated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["salesperson_id"], ["salespersons.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "salesperson_id", "job_id", name="uq_commission_salesperson_job"
        ),
    )
    op.create_index(
        op.f("ix_sales_commissions_salesperson_id"),
        "sales_commissions",
        ["salesperson_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_sales_commissions_status"), "sales_commissions", ["status"], unique=False
    )

    op.create_table(
        "job_lead_fees",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("job_id", sa.String(length=36), nullable=False),
        sa.Column("technician_id", sa.String(length=36), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False, server_default="125.00"),
        sa.Column(
            "accepted_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
            comment="When the technician accepted the job",
        ),
        sa.Column("notes", sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["technician_id"], ["technicians.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_job_lead_fees_job_id"), "job_lead_fees", ["job_id"], unique=False)
    op.create_index(
        op.f("ix_job_lead_fees_technician_id"),
        "job_lead_fees",
        ["technician_id"],
        unique=False,
    )

    op.create_table(
        "job_revenue_events",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("job_id", sa.String(length=36), nullable=False),
        sa.Column("technician_id", sa.String(length=36), nullable=True),
        sa.Column("gross_revenue", sa.Numeric(12, 2), nullable=False),
        sa.Column("total_costs", sa.Numeric(12, 2), nullable=False, server_default="0.00"),
        sa.Column(
            "net_profit",
            sa.Numeric(12, 2),
            nullable=False,
            comment="gross_revenue - total_costs",
        ),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "recorded_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["technician_id"], ["technicians.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_job_revenue_events_job_id"), "job_revenue_events", ["job_id"], unique=False
    )
    op.create_index(
        op.f("ix_job_revenue_events_technician_id"),
        "job_revenue_events",
        ["technician_id"],
        unique=False,
    )

    op.create_table(
        "notifications",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("type", sa.String(length=30), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("job_id", sa.String(length=36), nullable=True),
        sa.Column(
            "action_url",
            sa.String(length=255),
            nullable=True,
            comment="Deep link in the client",
        ),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("read_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_notifications_user_read", "notifications", ["user_id", "is_read"], unique=False
    )

    op.create_table(
        "pricebook_categories",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "pricebook_items",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("category_id", sa.String(length=36), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("unit_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("unit_cost", sa.Numeric(12, 2), nullable=True),
        sa.Column(
            "unit",
            sa.String(length=30),
            nullable=False,
            server_default="each",
            comment="each, hour, foot, ...",
        ),
        sa.Column("taxable", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _created_at(),
        sa.ForeignKeyConstraint(
            ["category_id"], ["pricebook_categories.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_pricebook_items_category_id"),
        "pricebook_items",
        ["category_id"],
        unique=False,
    )

    op.create_table(
        "marketing_campaigns",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "source",
            sa.String(length=50),
            nullable=False,
            comment="Lead source this campaign feeds",
        ),
        sa.Column(
            "type",
            sa.String(length=30),
            nullable=False,
            server_default="paid",
            comment="paid, organic, referral, ...",
        ),
        sa.Column("budget", sa.Numeric(12, 2), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_marketing_campaigns_source"), "marketing_campaigns", ["source"], unique=False
    )

    op.create_table(
        "marketing_spend",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("campaign_id", sa.String(length=36), nullable=True),
        sa.Column("source", sa.String(length=50), nullable=False),
        sa.Column("period", sa.String(length=7), nullable=False, comment="Month as YYYY-MM"),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("leads_generated", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("leads_converted", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "revenue_generated", sa.Numeric(12, 2), nullable=False, server_default="0.00"
        ),
        sa.Column("notes", sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(
            ["campaign_id"], ["marketing_campaigns.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_marketing_spend_campaign_id"), "marketing_spend", ["campaign_id"], unique=False
    )
    op.create_index(
        op.f("ix_marketing_spend_source"), "marketing_spend", ["source"], unique=False
    )
    op.create_index(
        op.f("ix_marketing_spend_period"), "marketing_spend", ["period"], unique=False
    )

    op.create_table(
        "business_intakes",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("business_name", sa.String(length=255), nullable=False),
        sa.Column("owner_name", sa.String(length=255), nullable=False),
        sa.Column("owner_phone", sa.String(length=30), nullable=True),
        sa.Column("owner_email", sa.String(length=255), nullable=False),
        sa.Column("business_type", sa.String(length=100), nullable=True),
        sa.Column("service_area", sa.Text(), nullable=True),
        sa.Column("team_size", sa.String(length=50), nullable=True),
        sa.Column("current_software", sa.Text(), nullable=True),
        sa.Column("priority_features", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("automation_goals", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "status",
            sa.String(length=20),
            nullable=False,
            server_default="new",
            comment="new, reviewed, onboarded",
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("business_intakes")

    op.drop_index(op.f("ix_marketing_spend_period"), table_name="marketing_spend")
    op.drop_index(op.f("ix_marketing_spend_source"), table_name="marketing_spend")
    op.drop_index(op.f("ix_marketing_spend_campaign_id"), table_name="marketing_spend")
    op.drop_table("marketing_spend")
    op.drop_index(op.f("ix_marketing_campaigns_source"), table_name="marketing_campaigns")
    op.drop_table("marketing_campaigns")

    op.drop_index(op.f("ix_pricebook_items_category_id"), table_name="pricebook_items")
    op.drop_table("pricebook_items")
    op.drop_table("pricebook_categories")

    op.drop_index("idx_notifications_user_read", table_name="notifications")
    op.drop_table("notifications")

    op.drop_index(
        op.f("ix_job_revenue_events_technician_id"), table_name="job_revenue_events"
    )
    op.drop_index(op.f("ix_job_revenue_events_job_id"), table_name="job_revenue_events")
    op.drop_table("job_revenue_events")
    op.drop_index(op.f("ix_job_lead_fees_technician_id"), table_name="job_lead_fees")
    op.drop_index(op.f("ix_job_lead_fees_job_id"), table_name="job_lead_fees")
    op.drop_table("job_lead_fees")

    op.drop_index(op.f("ix_sales_commissions_status"), table_name="sales_commissions")
    op.drop_index(
        op.f("ix_sales_commissions_salesperson_id"), table_name="sales_commissions"
    )
    op.drop_table("sales_commissions")

    op.drop_index(op.f("ix_calls_created_at"), table_name="calls")
    op.drop_table("calls")

    op.drop_index("idx_quotes_job_status", table_name="quotes")
    op.drop_index(op.f("ix_quotes_status"), table_name="quotes")
    op.drop_index(op.f("ix_quotes_job_id"), table_name="quotes")
    op.drop_table("quotes")
