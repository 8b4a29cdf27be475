"""
app/services/bulk_import_pipeline.py

Background execution of one bulk CSV report import.

One run per job id, in its own session:

    pending -> processing     status committed before the file is read
    parse                     all rows read up front; total_rows committed
    per row, in file order    validate -> upsert (SAVEPOINT) -> count
    every N rows / last row   progress snapshot committed with the upserts
    finish                    failed if every row failed (also when there
                              were no rows), otherwise completed

Row-level problems (validation, integrity/data errors on one upsert) are
recorded against their row number and never stop the run. Anything else
(unreadable file, lost database) fails the job with a row 0 error entry.
The uploaded file is deleted on every exit path.
"""

from __future__ import annotations

import csv
import logging
import os
import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path

from sqlalchemy.orm import Session

from app.config import get_bulk_import_settings
from app.domain.ngo_report import ImportProgress, RowValidationError
from app.services.report_submission_service import (
    ReportSubmissionService,
    get_report_submission_service,
)
from app.validators.report_validator import ReportRowValidator
from db.models.bulk_import_job import BulkImportJobStatus
from db.repositories.bulk_import_job_repository import BulkImportJobRepository
from db.repositories.errors import InvalidJobTransitionError, ReportPersistenceError

logger = logging.getLogger(__name__)

_MAX_ERROR_MESSAGE_LENGTH = 2000
_FIRST_DATA_ROW_NUMBER = 2

RawRow = dict[str, str | None]


class BulkImportFileError(ValueError):
    """
    Raised when the uploaded file cannot be parsed as a report CSV at all.
    """


def parse_report_csv(file_path: str | os.PathLike[str]) -> list[RawRow]:
    """
    Read every data row of a header-driven CSV file.

    Header names and cell values are trimmed. Empty and whitespace-only lines
    are skipped; a line of empty cells such as ",,,," is kept as a data row.
    Columns beyond the header are dropped.
    """

    rows: list[RawRow] = []
    try:
        with open(file_path, "r", encoding="utf-8-sig", newline="") as handle:
            reader = csv.DictReader(handle)
            headers = reader.fieldnames or []
            if not any(header and header.strip() for header in headers):
                raise BulkImportFileError("CSV header row is missing.")

            for raw_row in reader:
                if _is_whitespace_line(raw_row):
                    continue
                row: RawRow = {
                    key.strip(): value.strip() if isinstance(value, str) else value
                    for key, value in raw_row.items()
                    if key is not None
                }
                rows.append(row)
    except UnicodeDecodeError as exc:
        raise BulkImportFileError("CSV must be UTF-8 encoded.") from exc
    except csv.Error as exc:
        raise BulkImportFileError(f"Invalid CSV format: {exc}") from exc

    return rows


def _is_whitespace_line(raw_row: dict[str | None, str | None]) -> bool:
    cells = [value for key, value in raw_row.items() if key is not None and value is not None]
    return len(cells) == 1 and not cells[0].strip()


@contextmanager
def claimed_upload(file_path: str | os.PathLike[str]) -> Iterator[Path]:
    """
    Hold the transient upload for the duration of a job and delete it after.
    """

    path = Path(file_path)
    try:
        yield path
    finally:
        try:
            path.unlink(missing_ok=True)
        except OSError:
            logger.warning("Unable to delete transient upload path=%s", path, exc_info=True)


class BulkImportPipeline:
    """
    Runs bulk import jobs handed over by the upload intake.
    """

    def __init__(
        self,
        *,
        session_factory: Callable[[], Session] | None = None,
        submission_service: ReportSubmissionService | None = None,
        validator: ReportRowValidator | None = None,
        progress_interval: int | None = None,
        max_errors_logged: int | None = None,
    ) -> None:
        if session_factory is None:
            from db.session import SessionLocal

            self._session_factory = SessionLocal
        else:
            self._session_factory = session_factory

        settings = get_bulk_import_settings()
        self._submission_service = submission_service or get_report_submission_service()
        self._validator = validator or ReportRowValidator()
        self._progress_interval = max(1, progress_interval or settings.progress_interval)
        self._max_errors_logged = (
            settings.max_errors_logged if max_errors_logged is None else max(0, max_errors_logged)
        )

    def run(self, job_id: uuid.UUID, file_path: str) -> None:
        """
        Execute one job to a terminal state. Never raises.
        """

        try:
            with claimed_upload(file_path):
                with self._session_factory() as db:
                    repository = BulkImportJobRepository(db)
                    try:
                        self._process(db=db, repository=repository, job_id=job_id, file_path=file_path)
                    except Exception as exc:
                        self._mark_job_failed(db=db, repository=repository, job_id=job_id, exc=exc)
        except Exception:
            logger.exception("Bulk import job aborted before its state could be recorded id=%s", job_id)

    def _process(
        self,
        *,
        db: Session,
        repository: BulkImportJobRepository,
        job_id: uuid.UUID,
        file_path: str,
    ) -> None:
        job = repository.get_job(job_id)
        if job is None:
            logger.warning("Bulk import job not found id=%s; nothing to do", job_id)
            return
        if job.status != BulkImportJobStatus.PENDING:
            logger.warning("Bulk import job id=%s is already '%s'; not running it again", job_id, job.status)
            return

        repository.mark_processing(job_id=job_id)
        db.commit()
        logger.info("Bulk import job started id=%s", job_id)

        rows = parse_report_csv(file_path)
        total_rows = len(rows)
        repository.set_total_rows(job_id=job_id, total_rows=total_rows)
        db.commit()
        logger.info("Bulk import job id=%s parsed %d data rows", job_id, total_rows)

        progress = ImportProgress()
        for index, raw_row in enumerate(rows):
            self._process_row(
                db=db,
                raw_row=raw_row,
                row_number=index + _FIRST_DATA_ROW_NUMBER,
                progress=progress,
            )
            if self._is_snapshot_point(progress.processed_rows, total_rows):
                repository.save_progress(
                    job_id=job_id,
                    processed_rows=progress.processed_rows,
                    success_count=progress.success_count,
                    failed_count=progress.failed_count,
                    errors=progress.error_entries(),
                )
                db.commit()
                logger.debug(
                    "Bulk import job id=%s progress %d/%d",
                    job_id,
                    progress.processed_rows,
                    total_rows,
                )

        # Zero rows lands here too: 0 failed == 0 total.
        final_status = (
            BulkImportJobStatus.FAILED
            if progress.failed_count == total_rows
            else BulkImportJobStatus.COMPLETED
        )
        repository.mark_finished(
            job_id=job_id,
            status=final_status,
            processed_rows=progress.processed_rows,
            success_count=progress.success_count,
            failed_count=progress.failed_count,
            errors=progress.error_entries(),
        )
        db.commit()

        logger.info(
            "Bulk import job finished id=%s status=%s total=%d success=%d failed=%d",
            job_id,
            final_status,
            total_rows,
            progress.success_count,
            progress.failed_count,
        )
        for error in progress.errors[: self._max_errors_logged]:
            logger.warning(
                "Bulk import job id=%s row=%d rejected: %s",
                job_id,
                error.row_number,
                error.message,
            )

    def _process_row(
        self,
        *,
        db: Session,
        raw_row: RawRow,
        row_number: int,
        progress: ImportProgress,
    ) -> None:
        report, error = self._validator.validate_row(raw_row=raw_row, row_number=row_number)
        if error is not None:
            progress.record_failure(error)
            return

        try:
            self._submission_service.upsert(db=db, report=report)
        except ReportPersistenceError as exc:
            progress.record_failure(RowValidationError(row_number=row_number, message=str(exc)))
            return
        progress.record_success()

    def _is_snapshot_point(self, processed_rows: int, total_rows: int) -> bool:
        return processed_rows % self._progress_interval == 0 or processed_rows == total_rows

    def _mark_job_failed(
        self,
        *,
        db: Session,
        repository: BulkImportJobRepository,
        job_id: uuid.UUID,
        exc: Exception,
    ) -> None:
        if isinstance(exc, BulkImportFileError):
            error_message = str(exc)
        else:
            error_message = f"{type(exc).__name__}: {exc}"
        logger.exception("Bulk import job failed id=%s error=%s", job_id, error_message)
        try:
            db.rollback()
            failed_job = repository.mark_failed(
                job_id=job_id,
                error_message=error_message[:_MAX_ERROR_MESSAGE_LENGTH],
            )
            if failed_job is None:
                logger.error("Unable to mark bulk import job as failed because it was not found id=%s", job_id)
            db.commit()
        except InvalidJobTransitionError:
            db.rollback()
            logger.error("Bulk import job id=%s already reached a terminal state; failure not recorded", job_id)
        except Exception:
            db.rollback()
            logger.exception("Failed to persist failed bulk import job state id=%s", job_id)


@lru_cache(maxsize=1)
def get_bulk_import_pipeline() -> BulkImportPipeline:
    return BulkImportPipeline()
