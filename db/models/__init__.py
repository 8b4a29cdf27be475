"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.bulk_import_job import BulkImportJob, BulkImportJobStatus
from db.models.ngo_report import NgoReport

__all__ = [
    "BulkImportJob",
    "BulkImportJobStatus",
    "NgoReport",
]
