"""
app/api/routers/dashboard.py

Monthly dashboard endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.schemas.dashboard import DashboardResponse
from app.services.dashboard_service import DashboardService, get_dashboard_service
from app.validators.report_validator import ReportValidationError
from db.session import get_db

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    month: str | None = Query(default=None, description="Reporting month, YYYY-MM"),
    db: Session = Depends(get_db),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> DashboardResponse:
    try:
        summary = dashboard_service.summarize(db=db, month=month)
    except ReportValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.message,
        ) from exc
    return DashboardResponse.from_summary(summary)
