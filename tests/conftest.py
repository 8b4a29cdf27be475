"""
Shared in-memory stand-ins for the database session and report storage.

The job repository under test is the real BulkImportJobRepository: it only
needs add/flush/refresh/get from the session, which FakeSession provides.
Every commit records a snapshot of each job so tests can assert exactly what
a polling client could have observed.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest

from app.domain.ngo_report import ReportInput
from app.services.bulk_import_pipeline import BulkImportPipeline
from app.services.report_submission_service import ReportSubmissionService
from db.models.bulk_import_job import BulkImportJob
from db.models.ngo_report import NgoReport
from db.repositories.bulk_import_job_repository import BulkImportJobRepository

CSV_HEADER = "ngoId,month,peopleHelped,eventsConducted,fundsUtilized"


@dataclass(frozen=True)
class JobSnapshot:
    status: str
    total_rows: int | None
    processed_rows: int
    success_count: int
    failed_count: int
    errors: tuple[tuple[int, str], ...]


class FakeSession:
    def __init__(self) -> None:
        self.jobs: dict[uuid.UUID, BulkImportJob] = {}
        self.commits: list[dict[uuid.UUID, JobSnapshot]] = []
        self.rollbacks = 0
        self.closed = False
        self.fail_on_commit: Exception | None = None

    def __enter__(self) -> "FakeSession":
        return self

    def __exit__(self, *exc_info: Any) -> bool:
        self.close()
        return False

    def add(self, obj: BulkImportJob) -> None:
        if obj.id is None:
            obj.id = uuid.uuid4()
        self.jobs[obj.id] = obj

    def flush(self) -> None:
        return None

    def refresh(self, obj: Any) -> None:
        return None

    def get(self, model: type, key: uuid.UUID) -> BulkImportJob | None:
        return self.jobs.get(key)

    def commit(self) -> None:
        if self.fail_on_commit is not None:
            raise self.fail_on_commit
        self.commits.append({job_id: _snapshot(job) for job_id, job in self.jobs.items()})

    def rollback(self) -> None:
        self.rollbacks += 1

    def close(self) -> None:
        self.closed = True

    @contextmanager
    def begin(self) -> Iterator["FakeSession"]:
        yield self
        self.commit()

    @contextmanager
    def begin_nested(self) -> Iterator["FakeSession"]:
        yield self

    def committed_snapshots(self, job_id: uuid.UUID) -> list[JobSnapshot]:
        return [commit[job_id] for commit in self.commits if job_id in commit]


def _snapshot(job: BulkImportJob) -> JobSnapshot:
    return JobSnapshot(
        status=job.status,
        total_rows=job.total_rows,
        processed_rows=job.processed_rows,
        success_count=job.success_count,
        failed_count=job.failed_count,
        errors=tuple((entry["row"], entry["message"]) for entry in job.errors or []),
    )


class InMemoryReportStore:
    """
    Keyed report storage with the same create-or-update contract as
    NgoReportRepository.upsert_report.
    """

    def __init__(self) -> None:
        self.reports: dict[tuple[str, str], NgoReport] = {}
        self.failures: dict[str, Exception] = {}
        self.upsert_calls = 0

    def repository(self, session: Any) -> "FakeNgoReportRepository":
        return FakeNgoReportRepository(self)


class FakeNgoReportRepository:
    def __init__(self, store: InMemoryReportStore) -> None:
        self._store = store

    def upsert_report(self, report: ReportInput) -> tuple[NgoReport, bool]:
        self._store.upsert_calls += 1
        failure = self._store.failures.get(report.ngo_id)
        if failure is not None:
            raise failure

        key = (report.ngo_id, report.month)
        existing = self._store.reports.get(key)
        if existing is None:
            entity = NgoReport(
                id=uuid.uuid4(),
                ngo_id=report.ngo_id,
                month=report.month,
                people_helped=report.people_helped,
                events_conducted=report.events_conducted,
                funds_utilized=report.funds_utilized,
            )
            self._store.reports[key] = entity
            return entity, True

        existing.people_helped = report.people_helped
        existing.events_conducted = report.events_conducted
        existing.funds_utilized = report.funds_utilized
        return existing, False

    def list_by_month(self, month: str) -> list[NgoReport]:
        matches = [report for (_, report_month), report in self._store.reports.items() if report_month == month]
        return sorted(matches, key=lambda report: report.ngo_id)


@pytest.fixture()
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    """Write a report CSV (header + given lines) and return its path."""

    def _write(*rows: str, header: str = CSV_HEADER, name: str = "reports.csv") -> Path:
        path = tmp_path / name
        path.write_text("\n".join([header, *rows]) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture()
def report_store() -> InMemoryReportStore:
    return InMemoryReportStore()


@pytest.fixture()
def submission_service(report_store: InMemoryReportStore) -> ReportSubmissionService:
    return ReportSubmissionService(repository_factory=report_store.repository)


@pytest.fixture()
def pipeline(session: FakeSession, submission_service: ReportSubmissionService) -> BulkImportPipeline:
    return BulkImportPipeline(
        session_factory=lambda: session,
        submission_service=submission_service,
        progress_interval=10,
        max_errors_logged=5,
    )


@pytest.fixture()
def pending_job(session: FakeSession) -> BulkImportJob:
    job = BulkImportJobRepository(session).create_job(request_payload={"file_name": "reports.csv"})
    session.commit()
    return job
