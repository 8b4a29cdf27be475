"""
Bulk CSV upload and job status polling endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_csv_upload
from app.schemas.bulk_import import BulkImportAcceptedResponse, BulkImportJobStatusResponse
from app.services.bulk_import_orchestrator_service import (
    BulkImportOrchestratorService,
    FastAPIBackgroundTaskExecutor,
    get_bulk_import_orchestrator_service,
)
from app.services.job_status_service import JobStatusService, get_job_status_service
from db.repositories.errors import JobNotFoundError, UploadValidationError
from db.session import get_db

router = APIRouter(tags=["bulk-import"])


@router.post(
    "/reports/upload",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=BulkImportAcceptedResponse,
)
def upload_bulk_reports(
    background_tasks: BackgroundTasks,
    file: UploadFile = Depends(get_csv_upload),
    db: Session = Depends(get_db),
    orchestrator: BulkImportOrchestratorService = Depends(get_bulk_import_orchestrator_service),
) -> BulkImportAcceptedResponse:
    try:
        job = orchestrator.trigger_bulk_import(
            db=db,
            executor=FastAPIBackgroundTaskExecutor(background_tasks),
            upload_file=file,
        )
    except UploadValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    finally:
        file.file.close()

    return BulkImportAcceptedResponse(
        message="File uploaded successfully. Processing started.",
        job_id=job.id,
    )


@router.get("/job-status/{job_id}", response_model=BulkImportJobStatusResponse)
def get_job_status(
    job_id: str,
    db: Session = Depends(get_db),
    status_service: JobStatusService = Depends(get_job_status_service),
) -> BulkImportJobStatusResponse:
    try:
        job = status_service.get_job_status(db=db, job_id=job_id)
    except JobNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Job not found",
        ) from exc
    return BulkImportJobStatusResponse.from_job(job)
