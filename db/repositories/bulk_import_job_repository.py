"""
Repository for bulk import job lifecycle persistence and status lookup.

Methods only mutate the session; callers decide when to commit. Every write
is checked against ``BulkImportJobStatus.TRANSITIONS`` so a terminal job is
never modified.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from db.models.bulk_import_job import BulkImportJob, BulkImportJobStatus
from db.repositories.errors import InvalidJobTransitionError


class BulkImportJobRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def create_job(self, *, request_payload: dict[str, Any] | None = None) -> BulkImportJob:
        job = BulkImportJob(
            status=BulkImportJobStatus.PENDING,
            processed_rows=0,
            success_count=0,
            failed_count=0,
            errors=[],
            request_payload=request_payload,
        )
        self._session.add(job)
        self._session.flush()
        self._session.refresh(job)
        return job

    def get_job(self, job_id: uuid.UUID) -> BulkImportJob | None:
        return self._session.get(BulkImportJob, job_id)

    def mark_processing(self, *, job_id: uuid.UUID) -> BulkImportJob | None:
        job = self.get_job(job_id)
        if job is None:
            return None
        self._transition(job, BulkImportJobStatus.PROCESSING)
        job.started_at = datetime.now(timezone.utc)
        return job

    def set_total_rows(self, *, job_id: uuid.UUID, total_rows: int) -> BulkImportJob | None:
        job = self.get_job(job_id)
        if job is None:
            return None
        self._ensure_processing(job)
        job.total_rows = total_rows
        return job

    def save_progress(
        self,
        *,
        job_id: uuid.UUID,
        processed_rows: int,
        success_count: int,
        failed_count: int,
        errors: Sequence[dict[str, Any]],
    ) -> BulkImportJob | None:
        job = self.get_job(job_id)
        if job is None:
            return None
        self._ensure_processing(job)
        self._apply_counts(
            job,
            processed_rows=processed_rows,
            success_count=success_count,
            failed_count=failed_count,
            errors=errors,
        )
        return job

    def mark_finished(
        self,
        *,
        job_id: uuid.UUID,
        status: str,
        processed_rows: int,
        success_count: int,
        failed_count: int,
        errors: Sequence[dict[str, Any]],
    ) -> BulkImportJob | None:
        job = self.get_job(job_id)
        if job is None:
            return None
        if status not in BulkImportJobStatus.TERMINAL:
            raise InvalidJobTransitionError(f"'{status}' is not a terminal status.")
        self._check_transition(job, status)
        self._apply_counts(
            job,
            processed_rows=processed_rows,
            success_count=success_count,
            failed_count=failed_count,
            errors=errors,
        )
        self._transition(job, status)
        job.completed_at = datetime.now(timezone.utc)
        return job

    def mark_failed(
        self,
        *,
        job_id: uuid.UUID,
        error_message: str,
        row_number: int = 0,
    ) -> BulkImportJob | None:
        """
        Fail the job outright, appending one error entry to the stored list.

        Counters keep whatever the last persisted snapshot holds.
        """

        job = self.get_job(job_id)
        if job is None:
            return None
        self._transition(job, BulkImportJobStatus.FAILED)
        job.errors = [*(job.errors or []), {"row": row_number, "message": error_message}]
        job.completed_at = datetime.now(timezone.utc)
        return job

    def _apply_counts(
        self,
        job: BulkImportJob,
        *,
        processed_rows: int,
        success_count: int,
        failed_count: int,
        errors: Sequence[dict[str, Any]],
    ) -> None:
        if success_count + failed_count != processed_rows:
            raise ValueError(
                f"Inconsistent progress for job {job.id}: "
                f"{success_count} + {failed_count} != {processed_rows}"
            )
        if processed_rows < job.processed_rows:
            raise ValueError(
                f"processed_rows may not decrease for job {job.id}: "
                f"{job.processed_rows} -> {processed_rows}"
            )
        if job.total_rows is not None and processed_rows > job.total_rows:
            raise ValueError(
                f"processed_rows exceeds total_rows for job {job.id}: "
                f"{processed_rows} > {job.total_rows}"
            )
        job.processed_rows = processed_rows
        job.success_count = success_count
        job.failed_count = failed_count
        # JSONB is not mutation-tracked; assign a fresh list.
        job.errors = [dict(entry) for entry in errors]

    @staticmethod
    def _ensure_processing(job: BulkImportJob) -> None:
        if job.status != BulkImportJobStatus.PROCESSING:
            raise InvalidJobTransitionError(
                f"Job {job.id} is '{job.status}'; progress can only be written while processing."
            )

    @staticmethod
    def _check_transition(job: BulkImportJob, target: str) -> None:
        if not BulkImportJobStatus.can_transition(job.status, target):
            raise InvalidJobTransitionError(
                f"Job {job.id} cannot move from '{job.status}' to '{target}'."
            )

    def _transition(self, job: BulkImportJob, target: str) -> None:
        self._check_transition(job, target)
        job.status = target
