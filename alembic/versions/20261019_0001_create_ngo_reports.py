"""create ngo_reports table

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 10:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "ngo_reports",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("ngo_id", sa.String(length=120), nullable=False, comment="Submitting NGO identifier"),
        sa.Column("month", sa.String(length=7), nullable=False, comment="Reporting period, YYYY-MM"),
        sa.Column("people_helped", sa.Integer(), nullable=False),
        sa.Column("events_conducted", sa.Integer(), nullable=False),
        sa.Column("funds_utilized", sa.Numeric(), nullable=False, comment="Stored at the precision submitted"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.CheckConstraint("people_helped >= 0", name="ck_ngo_reports_people_helped_non_negative"),
        sa.CheckConstraint("events_conducted >= 0", name="ck_ngo_reports_events_conducted_non_negative"),
        sa.CheckConstraint("funds_utilized >= 0", name="ck_ngo_reports_funds_utilized_non_negative"),
        sa.PrimaryKeyConstraint("id", name="pk_ngo_reports"),
        sa.UniqueConstraint("ngo_id", "month", name="uq_ngo_reports_ngo_id_month"),
    )
    op.create_index("ix_ngo_reports_month", "ngo_reports", ["month"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_ngo_reports_month", table_name="ngo_reports")
    op.drop_table("ngo_reports")
