"""
app/services/dashboard_service.py

Per-month report lookup and the totals shown on the dashboard.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal

from sqlalchemy.orm import Session

from app.repositories.ngo_report_repository import NgoReportRepository
from app.validators.report_validator import ReportValidationError, is_valid_month
from db.models.ngo_report import NgoReport

MONTH_REQUIRED_MESSAGE = "Month parameter is required"
MONTH_FORMAT_MESSAGE = "Month must be in YYYY-MM format"


@dataclass(frozen=True)
class DashboardSummary:
    month: str
    total_ngos: int
    total_people_helped: int
    total_events: int
    total_funds: Decimal
    reports: list[NgoReport] = field(default_factory=list)


class DashboardService:
    def __init__(
        self,
        *,
        repository_factory: Callable[[Session], NgoReportRepository] = NgoReportRepository,
    ) -> None:
        self._repository_factory = repository_factory

    def query_records(self, *, db: Session, month: str) -> list[NgoReport]:
        """Reports for one month, ordered by ngo_id."""
        return self._repository_factory(db).list_by_month(month)

    def summarize(self, *, db: Session, month: str | None) -> DashboardSummary:
        if month is None or not month.strip():
            raise ReportValidationError(MONTH_REQUIRED_MESSAGE)
        if not is_valid_month(month):
            raise ReportValidationError(MONTH_FORMAT_MESSAGE)

        month = month.strip()
        reports = self.query_records(db=db, month=month)
        return DashboardSummary(
            month=month,
            total_ngos=len(reports),
            total_people_helped=sum(report.people_helped for report in reports),
            total_events=sum(report.events_conducted for report in reports),
            total_funds=sum((Decimal(report.funds_utilized) for report in reports), Decimal("0")),
            reports=reports,
        )


def get_dashboard_service() -> DashboardService:
    return DashboardService()
