"""create bulk_import_jobs table

Revision ID: 20261019_0002
Revises: 20261019_0001
Create Date: 2026-10-19 10:15:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261019_0002"
down_revision = "20261019_0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "bulk_import_jobs",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("total_rows", sa.Integer(), nullable=True),
        sa.Column("processed_rows", sa.Integer(), nullable=False),
        sa.Column("success_count", sa.Integer(), nullable=False),
        sa.Column("failed_count", sa.Integer(), nullable=False),
        sa.Column("errors", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("request_payload", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_bulk_import_jobs"),
    )
    op.create_index("ix_bulk_import_jobs_created_at", "bulk_import_jobs", ["created_at"], unique=False)
    op.create_index("ix_bulk_import_jobs_status", "bulk_import_jobs", ["status"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_bulk_import_jobs_status", table_name="bulk_import_jobs")
    op.drop_index("ix_bulk_import_jobs_created_at", table_name="bulk_import_jobs")
    op.drop_table("bulk_import_jobs")
