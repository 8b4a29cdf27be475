"""
Repository-layer exceptions for report, job, and upload flows.
"""

from __future__ import annotations


class RepositoryError(Exception):
    """Base exception for repository failures."""


class UploadValidationError(RepositoryError, ValueError):
    """Raised when an uploaded file is rejected before a job is created."""


class ReportPersistenceError(RepositoryError):
    """Raised when one report row cannot be written (integrity or data error)."""


class JobNotFoundError(RepositoryError, LookupError):
    """Raised when a bulk import job id does not exist."""


class InvalidJobTransitionError(RepositoryError):
    """Raised when a job change would violate the status state machine."""
