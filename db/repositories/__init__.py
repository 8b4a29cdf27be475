"""
Repository layer exports.
"""

from db.repositories.bulk_import_job_repository import BulkImportJobRepository
from db.repositories.errors import (
    InvalidJobTransitionError,
    JobNotFoundError,
    ReportPersistenceError,
    RepositoryError,
    UploadValidationError,
)

__all__ = [
    "BulkImportJobRepository",
    "RepositoryError",
    "UploadValidationError",
    "ReportPersistenceError",
    "JobNotFoundError",
    "InvalidJobTransitionError",
]
