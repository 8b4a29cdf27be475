"""
app/validators package marker.
"""

from app.validators.report_validator import (
    ReportRowValidator,
    ReportValidationError,
    is_valid_month,
)

__all__ = [
    "ReportRowValidator",
    "ReportValidationError",
    "is_valid_month",
]
