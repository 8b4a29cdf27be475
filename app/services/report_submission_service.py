"""
app/services/report_submission_service.py

Single-report submission and the keyed upsert reused by bulk imports.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import lru_cache
from typing import Any

from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.ngo_report import ReportInput, ReportSubmissionResult
from app.repositories.ngo_report_repository import NgoReportRepository
from app.validators.report_validator import ReportRowValidator
from db.repositories.errors import ReportPersistenceError

logger = logging.getLogger(__name__)


class ReportSubmissionService:
    """
    Validates report values and upserts them by (ngo_id, month).
    """

    def __init__(
        self,
        *,
        validator: ReportRowValidator | None = None,
        repository_factory: Callable[[Session], NgoReportRepository] = NgoReportRepository,
    ) -> None:
        self._validator = validator or ReportRowValidator()
        self._repository_factory = repository_factory

    def submit_report(
        self,
        *,
        db: Session,
        ngo_id: Any,
        month: Any,
        people_helped: Any,
        events_conducted: Any,
        funds_utilized: Any,
    ) -> ReportSubmissionResult:
        """
        Validate and persist one report, committing on success.

        Raises ReportValidationError before any write when a rule fails, and
        ReportPersistenceError when the database rejects the write.
        """

        report = self._validator.validate_fields(
            ngo_id=ngo_id,
            month=month,
            people_helped=people_helped,
            events_conducted=events_conducted,
            funds_utilized=funds_utilized,
        )

        try:
            result = self.upsert(db=db, report=report)
            db.commit()
        except ReportPersistenceError:
            db.rollback()
            raise
        except SQLAlchemyError as exc:
            db.rollback()
            raise ReportPersistenceError("Failed to submit report.") from exc

        logger.info(
            "Report %s ngo_id=%r month=%r",
            "created" if result.created else "updated",
            report.ngo_id,
            report.month,
        )
        return result

    def upsert(self, *, db: Session, report: ReportInput) -> ReportSubmissionResult:
        """
        Upsert one validated report inside a SAVEPOINT without committing.

        Integrity and data errors are scoped to this report and surface as
        ReportPersistenceError; any other database error propagates as is.
        """

        repository = self._repository_factory(db)
        try:
            with db.begin_nested():
                entity, created = repository.upsert_report(report)
        except (IntegrityError, DataError) as exc:
            raise ReportPersistenceError(f"Failed to save record: {exc.orig}") from exc
        return ReportSubmissionResult(report=entity, created=created)


@lru_cache(maxsize=1)
def get_report_submission_service() -> ReportSubmissionService:
    return ReportSubmissionService()
