"""
app/api/routers/reports.py

Single-report submission endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.schemas.reports import ReportResponse, ReportSubmitRequest, ReportSubmitResponse
from app.services.report_submission_service import (
    ReportSubmissionService,
    get_report_submission_service,
)
from app.validators.report_validator import ReportValidationError
from db.repositories.errors import ReportPersistenceError
from db.session import get_db

router = APIRouter(tags=["reports"])


@router.post(
    "/report",
    status_code=status.HTTP_201_CREATED,
    response_model=ReportSubmitResponse,
)
def submit_report(
    payload: ReportSubmitRequest,
    response: Response,
    db: Session = Depends(get_db),
    submission_service: ReportSubmissionService = Depends(get_report_submission_service),
) -> ReportSubmitResponse:
    """
    Create the report for (ngoId, month), or update it if one exists.
    """

    try:
        result = submission_service.submit_report(
            db=db,
            ngo_id=payload.ngo_id,
            month=payload.month,
            people_helped=payload.people_helped,
            events_conducted=payload.events_conducted,
            funds_utilized=payload.funds_utilized,
        )
    except ReportValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.message,
        ) from exc
    except ReportPersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit report",
        ) from exc

    if result.created:
        message = "Report submitted successfully"
    else:
        response.status_code = status.HTTP_200_OK
        message = "Report updated successfully"

    return ReportSubmitResponse(message=message, report=ReportResponse.from_model(result.report))
