"""
Schemas for bulk import upload and job status polling.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from db.models.bulk_import_job import BulkImportJob


class BulkImportAcceptedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    job_id: UUID = Field(..., alias="jobId")


class JobErrorResponse(BaseModel):
    row: int = Field(..., ge=0)
    message: str


class BulkImportJobStatusResponse(BaseModel):
    """
    Job snapshot returned to polling clients.

    totalRows is null until the file has been parsed.
    """

    model_config = ConfigDict(populate_by_name=True)

    job_id: UUID = Field(..., alias="jobId")
    status: str
    total_rows: int | None = Field(default=None, ge=0, alias="totalRows")
    processed_rows: int = Field(..., ge=0, alias="processedRows")
    success_count: int = Field(..., ge=0, alias="successCount")
    failed_count: int = Field(..., ge=0, alias="failedCount")
    errors: list[JobErrorResponse] = Field(default_factory=list)
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    @classmethod
    def from_job(cls, job: BulkImportJob) -> "BulkImportJobStatusResponse":
        return cls(
            job_id=job.id,
            status=job.status,
            total_rows=job.total_rows,
            processed_rows=job.processed_rows,
            success_count=job.success_count,
            failed_count=job.failed_count,
            errors=[
                JobErrorResponse(row=int(entry["row"]), message=str(entry["message"]))
                for entry in job.errors or []
            ],
            created_at=job.created_at,
            updated_at=job.updated_at,
        )
