"""
app/domain package marker.
"""

from app.domain.ngo_report import ImportProgress, ReportInput, ReportSubmissionResult, RowValidationError

__all__ = [
    "ImportProgress",
    "ReportInput",
    "ReportSubmissionResult",
    "RowValidationError",
]
