"""
app/domain/ngo_report.py

Domain types shared by single-report submission and bulk import.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from db.models.ngo_report import NgoReport


@dataclass(frozen=True)
class ReportInput:
    """
    Validated, normalised report ready for upsert.
    """

    ngo_id: str
    month: str
    people_helped: int
    events_conducted: int
    funds_utilized: Decimal


@dataclass(frozen=True)
class RowValidationError:
    """
    Why one CSV data row was rejected.
    """

    row_number: int
    message: str

    def to_entry(self) -> dict[str, Any]:
        return {"row": self.row_number, "message": self.message}


@dataclass(frozen=True)
class ReportSubmissionResult:
    report: NgoReport
    created: bool


@dataclass
class ImportProgress:
    """
    Running counters of one bulk import.

    Mutated by the pipeline after every row; persisted only at snapshot
    points.
    """

    processed_rows: int = 0
    success_count: int = 0
    failed_count: int = 0
    errors: list[RowValidationError] = field(default_factory=list)

    def record_success(self) -> None:
        self.success_count += 1
        self.processed_rows += 1

    def record_failure(self, error: RowValidationError) -> None:
        self.failed_count += 1
        self.errors.append(error)
        self.processed_rows += 1

    def error_entries(self) -> list[dict[str, Any]]:
        return [error.to_entry() for error in self.errors]
