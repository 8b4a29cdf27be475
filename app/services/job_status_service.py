"""
Read-only lookup of bulk import job state for polling clients.
"""

from __future__ import annotations

import uuid

from sqlalchemy.orm import Session

from db.models.bulk_import_job import BulkImportJob
from db.repositories.bulk_import_job_repository import BulkImportJobRepository
from db.repositories.errors import JobNotFoundError


class JobStatusService:
    def get_job_status(self, *, db: Session, job_id: uuid.UUID | str) -> BulkImportJob:
        """
        Return the job as last persisted.

        Progress may trail the running import by up to one snapshot interval.
        Identifiers that are not UUIDs are reported as not found.
        """

        try:
            key = job_id if isinstance(job_id, uuid.UUID) else uuid.UUID(str(job_id))
        except ValueError as exc:
            raise JobNotFoundError(f"Job not found: {job_id}") from exc

        job = BulkImportJobRepository(db).get_job(key)
        if job is None:
            raise JobNotFoundError(f"Job not found: {job_id}")
        return job


def get_job_status_service() -> JobStatusService:
    return JobStatusService()
