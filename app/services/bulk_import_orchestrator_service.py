"""
Upload intake for bulk report imports.

Accepts the uploaded file, stores it as a transient file, creates the job in
``pending`` and hands (job id, file path) to a task executor. Returns without
waiting for the import.
"""

from __future__ import annotations

import logging
import os
import tempfile
import uuid
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any, Protocol

from fastapi import BackgroundTasks, UploadFile
from sqlalchemy.orm import Session

from app.config import BulkImportSettings, get_bulk_import_settings
from app.services.bulk_import_pipeline import BulkImportPipeline, get_bulk_import_pipeline
from db.models.bulk_import_job import BulkImportJob
from db.repositories.bulk_import_job_repository import BulkImportJobRepository
from db.repositories.errors import UploadValidationError
from db.repositories.validators import (
    validate_upload_content_type,
    validate_upload_file_name,
    validate_upload_size,
)

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024


class BulkImportTaskExecutor(Protocol):
    def submit(self, task: Callable[..., None], *args: Any, **kwargs: Any) -> None:
        ...


class FastAPIBackgroundTaskExecutor:
    """
    Runs the task after the response has been sent, off the request path.
    """

    def __init__(self, background_tasks: BackgroundTasks) -> None:
        self._background_tasks = background_tasks

    def submit(self, task: Callable[..., None], *args: Any, **kwargs: Any) -> None:
        self._background_tasks.add_task(task, *args, **kwargs)


class BulkImportOrchestratorService:
    """
    Coordinates file intake, job creation and background hand-off.
    """

    def __init__(
        self,
        *,
        pipeline: BulkImportPipeline | None = None,
        settings: BulkImportSettings | None = None,
    ) -> None:
        self._pipeline = pipeline or get_bulk_import_pipeline()
        self._settings = settings or get_bulk_import_settings()

    def trigger_bulk_import(
        self,
        *,
        db: Session,
        executor: BulkImportTaskExecutor,
        upload_file: UploadFile,
    ) -> BulkImportJob:
        """
        Validate and store an uploaded CSV, then start importing it.

        Raises UploadValidationError, with no job created, when the upload is
        rejected.
        """

        file_name = validate_upload_file_name(upload_file.filename)
        validate_upload_content_type(upload_file.content_type)
        temp_file_path, file_size = self._persist_temp_upload(upload_file, file_name)

        try:
            validate_upload_size(file_size, max_bytes=self._settings.max_upload_bytes)
        except UploadValidationError:
            self._delete_file_quietly(temp_file_path)
            raise

        return self.start_bulk_import(
            db=db,
            executor=executor,
            file_path=temp_file_path,
            request_payload={
                "file_name": file_name,
                "content_type": upload_file.content_type,
                "file_size_bytes": file_size,
            },
        )

    def start_bulk_import(
        self,
        *,
        db: Session,
        executor: BulkImportTaskExecutor,
        file_path: str,
        request_payload: dict[str, Any] | None = None,
    ) -> BulkImportJob:
        """
        Create a pending job for an already stored file and schedule it.

        Ownership of ``file_path`` passes to the job: it is deleted when the
        job ends, or right away if the job cannot be created or scheduled.
        """

        repository = BulkImportJobRepository(db)
        try:
            with db.begin():
                job = repository.create_job(
                    request_payload=request_payload or {"file_name": Path(file_path).name},
                )
        except Exception:
            self._delete_file_quietly(file_path)
            raise

        try:
            executor.submit(self._pipeline.run, job.id, file_path)
        except Exception:
            logger.exception("Failed to schedule bulk import job id=%s", job.id)
            self._delete_file_quietly(file_path)
            with db.begin():
                repository.mark_failed(
                    job_id=job.id,
                    error_message="Failed to schedule bulk import job.",
                )
            raise

        logger.info("Bulk import job accepted id=%s file=%s", job.id, file_path)
        return job

    def _persist_temp_upload(self, upload_file: UploadFile, file_name: str) -> tuple[str, int]:
        upload_dir = Path(self._settings.upload_dir)
        upload_dir.mkdir(parents=True, exist_ok=True)
        suffix = Path(file_name).suffix or ".csv"
        upload_file.file.seek(0)

        with tempfile.NamedTemporaryFile(
            delete=False,
            dir=upload_dir,
            prefix=f"bulk_import_{uuid.uuid4().hex}_",
            suffix=suffix,
        ) as temp_file:
            while True:
                chunk = upload_file.file.read(_CHUNK_SIZE)
                if not chunk:
                    break
                temp_file.write(chunk)
                if temp_file.tell() > self._settings.max_upload_bytes:
                    break
            temp_path = temp_file.name
            file_size = temp_file.tell()

        upload_file.file.seek(0)
        return temp_path, file_size

    def _delete_file_quietly(self, file_path: str) -> None:
        try:
            os.remove(file_path)
        except OSError:
            logger.debug("Transient upload already gone path=%s", file_path)


@lru_cache(maxsize=1)
def get_bulk_import_orchestrator_service() -> BulkImportOrchestratorService:
    return BulkImportOrchestratorService()
