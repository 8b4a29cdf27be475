"""
app/schemas/reports.py

Request and response schemas for single-report submission.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from db.models.ngo_report import NgoReport

# Accept loosely typed values; ReportRowValidator owns the rules and messages.
LooseNumber = int | float | str | None


class ReportSubmitRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ngo_id: str | int | None = Field(default=None, alias="ngoId")
    month: str | None = None
    people_helped: LooseNumber = Field(default=None, alias="peopleHelped")
    events_conducted: LooseNumber = Field(default=None, alias="eventsConducted")
    funds_utilized: LooseNumber = Field(default=None, alias="fundsUtilized")


class ReportResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    ngo_id: str = Field(..., alias="ngoId")
    month: str
    people_helped: int = Field(..., ge=0, alias="peopleHelped")
    events_conducted: int = Field(..., ge=0, alias="eventsConducted")
    funds_utilized: float = Field(..., ge=0, alias="fundsUtilized")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    @classmethod
    def from_model(cls, report: NgoReport) -> "ReportResponse":
        return cls(
            id=str(report.id),
            ngo_id=report.ngo_id,
            month=report.month,
            people_helped=report.people_helped,
            events_conducted=report.events_conducted,
            funds_utilized=float(Decimal(report.funds_utilized)),
            created_at=report.created_at,
            updated_at=report.updated_at,
        )


class ReportSubmitResponse(BaseModel):
    message: str
    report: ReportResponse
