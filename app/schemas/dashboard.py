"""
app/schemas/dashboard.py

Response schema for the monthly dashboard.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from app.services.dashboard_service import DashboardSummary


class NgoBreakdownResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ngo_id: str = Field(..., alias="ngoId")
    people_helped: int = Field(..., alias="peopleHelped")
    events_conducted: int = Field(..., alias="eventsConducted")
    funds_utilized: float = Field(..., alias="fundsUtilized")


class DashboardResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    month: str
    total_ngos: int = Field(..., ge=0, alias="totalNGOs")
    total_people_helped: int = Field(..., ge=0, alias="totalPeopleHelped")
    total_events: int = Field(..., ge=0, alias="totalEvents")
    total_funds: float = Field(..., ge=0, alias="totalFunds")
    ngo_breakdown: list[NgoBreakdownResponse] = Field(default_factory=list, alias="ngoBreakdown")

    @classmethod
    def from_summary(cls, summary: DashboardSummary) -> "DashboardResponse":
        return cls(
            month=summary.month,
            total_ngos=summary.total_ngos,
            total_people_helped=summary.total_people_helped,
            total_events=summary.total_events,
            total_funds=float(summary.total_funds),
            ngo_breakdown=[
                NgoBreakdownResponse(
                    ngo_id=report.ngo_id,
                    people_helped=report.people_helped,
                    events_conducted=report.events_conducted,
                    funds_utilized=float(report.funds_utilized),
                )
                for report in summary.reports
            ],
        )
