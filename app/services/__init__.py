"""
app/services package marker.
"""

from app.services.bulk_import_orchestrator_service import (
    BulkImportOrchestratorService,
    FastAPIBackgroundTaskExecutor,
    get_bulk_import_orchestrator_service,
)
from app.services.bulk_import_pipeline import (
    BulkImportFileError,
    BulkImportPipeline,
    get_bulk_import_pipeline,
)
from app.services.dashboard_service import DashboardService, get_dashboard_service
from app.services.job_status_service import JobStatusService, get_job_status_service
from app.services.report_submission_service import (
    ReportSubmissionService,
    get_report_submission_service,
)

__all__ = [
    "BulkImportFileError",
    "BulkImportOrchestratorService",
    "BulkImportPipeline",
    "DashboardService",
    "FastAPIBackgroundTaskExecutor",
    "JobStatusService",
    "ReportSubmissionService",
    "get_bulk_import_orchestrator_service",
    "get_bulk_import_pipeline",
    "get_dashboard_service",
    "get_job_status_service",
    "get_report_submission_service",
]
