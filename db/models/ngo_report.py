"""
db/models/ngo_report.py

One NGO's reported figures for one month.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from sqlalchemy import CheckConstraint, Index, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin

REPORT_KEY_CONSTRAINT = "uq_ngo_reports_ngo_id_month"


class NgoReport(Base, TimestampMixin):
    """
    Monthly impact report.

    (ngo_id, month) is unique: a resubmission updates the numeric columns of
    the existing row instead of inserting a second one.
    """

    __tablename__ = "ngo_reports"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    ngo_id: Mapped[str] = mapped_column(
        String(120),
        nullable=False,
        comment="Submitting NGO identifier",
    )
    month: Mapped[str] = mapped_column(
        String(7),
        nullable=False,
        comment="Reporting period, YYYY-MM",
    )
    people_helped: Mapped[int] = mapped_column(Integer, nullable=False)
    events_conducted: Mapped[int] = mapped_column(Integer, nullable=False)
    funds_utilized: Mapped[Decimal] = mapped_column(
        Numeric(),
        nullable=False,
        comment="Stored at the precision submitted",
    )

    __table_args__ = (
        UniqueConstraint("ngo_id", "month", name=REPORT_KEY_CONSTRAINT),
        CheckConstraint("people_helped >= 0", name="people_helped_non_negative"),
        CheckConstraint("events_conducted >= 0", name="events_conducted_non_negative"),
        CheckConstraint("funds_utilized >= 0", name="funds_utilized_non_negative"),
        Index("ix_ngo_reports_month", "month"),
    )

    def __repr__(self) -> str:
        return f"<NgoReport id={self.id} ngo_id={self.ngo_id!r} month={self.month!r}>"
