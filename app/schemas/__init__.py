"""
app/schemas package marker.
"""

from app.schemas.bulk_import import (
    BulkImportAcceptedResponse,
    BulkImportJobStatusResponse,
    JobErrorResponse,
)
from app.schemas.dashboard import DashboardResponse, NgoBreakdownResponse
from app.schemas.reports import ReportResponse, ReportSubmitRequest, ReportSubmitResponse

__all__ = [
    "BulkImportAcceptedResponse",
    "BulkImportJobStatusResponse",
    "DashboardResponse",
    "JobErrorResponse",
    "NgoBreakdownResponse",
    "ReportResponse",
    "ReportSubmitRequest",
    "ReportSubmitResponse",
]
