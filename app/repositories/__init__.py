"""
app/repositories package marker.
"""

from app.repositories.ngo_report_repository import NgoReportRepository, build_upsert_statement

__all__ = [
    "NgoReportRepository",
    "build_upsert_statement",
]
