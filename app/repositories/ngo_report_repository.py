"""
Persistence for NGO monthly reports.

Both the single-report endpoint and the bulk importer write through
``upsert_report``: one ``INSERT ... ON CONFLICT DO UPDATE`` keyed on
(ngo_id, month). Concurrent writers to the same key are not serialised; the
last statement to commit wins.
"""

from __future__ import annotations

from sqlalchemy import Boolean, func, literal_column, select
from sqlalchemy.dialects.postgresql import Insert, insert
from sqlalchemy.orm import Session

from app.domain.ngo_report import ReportInput
from db.models.ngo_report import REPORT_KEY_CONSTRAINT, NgoReport


def build_upsert_statement(report: ReportInput) -> Insert:
    """
    Build the keyed upsert for one report.

    RETURNING yields the row plus ``inserted``: PostgreSQL leaves ``xmax`` at
    0 for a freshly inserted tuple and sets it when ON CONFLICT updated one.
    """

    stmt = insert(NgoReport).values(
        ngo_id=report.ngo_id,
        month=report.month,
        people_helped=report.people_helped,
        events_conducted=report.events_conducted,
        funds_utilized=report.funds_utilized,
    )
    return stmt.on_conflict_do_update(
        constraint=REPORT_KEY_CONSTRAINT,
        set_={
            "people_helped": stmt.excluded.people_helped,
            "events_conducted": stmt.excluded.events_conducted,
            "funds_utilized": stmt.excluded.funds_utilized,
            "updated_at": func.now(),
        },
    ).returning(
        NgoReport,
        literal_column("(xmax = 0)", Boolean).label("inserted"),
    )


class NgoReportRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def upsert_report(self, report: ReportInput) -> tuple[NgoReport, bool]:
        """
        Create or update the report for (ngo_id, month).

        Returns the persisted row and True when it was newly created.
        """

        row = self._session.execute(
            build_upsert_statement(report),
            execution_options={"populate_existing": True},
        ).one()
        return row[0], bool(row[1])

    def list_by_month(self, month: str) -> list[NgoReport]:
        stmt = select(NgoReport).where(NgoReport.month == month).order_by(NgoReport.ngo_id)
        return list(self._session.scalars(stmt).all())
