"""
db/models/bulk_import_job.py

Lifecycle and progress of one bulk CSV import.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Index, Integer, String
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class BulkImportJobStatus:
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    TERMINAL = frozenset({COMPLETED, FAILED})

    # pending -> failed is reserved for jobs that never got to run.
    TRANSITIONS: dict[str, frozenset[str]] = {
        PENDING: frozenset({PROCESSING, FAILED}),
        PROCESSING: frozenset({COMPLETED, FAILED}),
        COMPLETED: frozenset(),
        FAILED: frozenset(),
    }

    @classmethod
    def can_transition(cls, current: str, target: str) -> bool:
        return target in cls.TRANSITIONS.get(current, frozenset())


class BulkImportJob(Base, TimestampMixin):
    """
    One uploaded CSV file being imported row by row.

    processed_rows == success_count + failed_count holds for every committed
    snapshot. total_rows stays NULL until the file has been parsed.
    """

    __tablename__ = "bulk_import_jobs"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=BulkImportJobStatus.PENDING,
        comment="pending -> processing -> completed | failed",
    )
    total_rows: Mapped[int | None] = mapped_column(Integer, nullable=True)
    processed_rows: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    success_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    failed_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    errors: Mapped[list[dict[str, Any]]] = mapped_column(
        JSONB,
        nullable=False,
        default=list,
        comment="Ordered [{row, message}] entries",
    )
    request_payload: Mapped[dict[str, Any] | None] = mapped_column(
        JSONB,
        nullable=True,
        comment="Upload metadata: file_name, content_type, file_size_bytes",
    )
    started_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    __table_args__ = (
        Index("ix_bulk_import_jobs_status", "status"),
        Index("ix_bulk_import_jobs_created_at", "created_at"),
    )

    @property
    def is_terminal(self) -> bool:
        return self.status in BulkImportJobStatus.TERMINAL

    def __repr__(self) -> str:
        return (
            f"<BulkImportJob id={self.id} status={self.status!r} "
            f"processed={self.processed_rows}/{self.total_rows}>"
        )
