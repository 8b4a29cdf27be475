from __future__ import annotations

from decimal import Decimal

import pytest

from app.schemas.dashboard import DashboardResponse
from app.services.dashboard_service import (
    MONTH_FORMAT_MESSAGE,
    MONTH_REQUIRED_MESSAGE,
    DashboardService,
)
from app.validators.report_validator import ReportValidationError


@pytest.fixture()
def dashboard(report_store) -> DashboardService:
    return DashboardService(repository_factory=report_store.repository)


@pytest.fixture()
def seeded(submission_service, session) -> None:
    for ngo_id, month, people, events, funds in [
        ("NGO002", "2024-01", 100, 2, "1000.50"),
        ("NGO001", "2024-01", 150, 5, "50000"),
        ("NGO001", "2024-02", 999, 9, "9"),
    ]:
        submission_service.submit_report(
            db=session,
            ngo_id=ngo_id,
            month=month,
            people_helped=people,
            events_conducted=events,
            funds_utilized=funds,
        )


@pytest.mark.usefixtures("seeded")
def test_summary_totals_one_month(dashboard, session) -> None:
    summary = dashboard.summarize(db=session, month="2024-01")

    assert summary.total_ngos == 2
    assert summary.total_people_helped == 250
    assert summary.total_events == 7
    assert summary.total_funds == Decimal("51000.50")
    assert [report.ngo_id for report in summary.reports] == ["NGO001", "NGO002"]


@pytest.mark.usefixtures("seeded")
def test_response_uses_camel_case(dashboard, session) -> None:
    payload = DashboardResponse.from_summary(dashboard.summarize(db=session, month="2024-02")).model_dump(
        by_alias=True
    )

    assert payload["totalNGOs"] == 1
    assert payload["totalPeopleHelped"] == 999
    assert payload["ngoBreakdown"] == [
        {"ngoId": "NGO001", "peopleHelped": 999, "eventsConducted": 9, "fundsUtilized": 9.0}
    ]


def test_empty_month_has_zero_totals(dashboard, session) -> None:
    summary = dashboard.summarize(db=session, month="2030-12")

    assert summary.total_ngos == 0
    assert summary.total_funds == Decimal("0")
    assert summary.reports == []


@pytest.mark.parametrize(
    ("month", "message"),
    [(None, MONTH_REQUIRED_MESSAGE), ("  ", MONTH_REQUIRED_MESSAGE), ("Jan 2024", MONTH_FORMAT_MESSAGE)],
)
def test_month_is_validated(dashboard, session, month, message) -> None:
    with pytest.raises(ReportValidationError) as exc_info:
        dashboard.summarize(db=session, month=month)

    assert exc_info.value.message == message
