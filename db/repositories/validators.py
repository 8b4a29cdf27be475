"""
Acceptance checks applied to an uploaded file before any job is created.
"""

from __future__ import annotations

from pathlib import Path

from db.repositories.errors import UploadValidationError

ALLOWED_EXTENSIONS = {".csv"}
ALLOWED_CONTENT_TYPES = {
    "text/csv",
    "text/x-csv",
    "text/comma-separated-values",
    "text/x-comma-separated-values",
    "application/csv",
    "application/x-csv",
    "application/vnd.ms-excel",
    "text/plain",
    "application/octet-stream",
}


def validate_upload_file_name(file_name: str | None) -> str:
    """
    Return the cleaned file name, or raise when it is missing or not a CSV.
    """

    if file_name is None or not file_name.strip():
        raise UploadValidationError("No file uploaded")

    cleaned = Path(file_name.strip()).name
    extension = Path(cleaned).suffix.lower()
    if extension not in ALLOWED_EXTENSIONS:
        raise UploadValidationError("Only CSV files are allowed")
    return cleaned


def validate_upload_content_type(content_type: str | None) -> None:
    if content_type and content_type.split(";", 1)[0].strip().lower() not in ALLOWED_CONTENT_TYPES:
        raise UploadValidationError(f"Unsupported content_type '{content_type}'.")


def validate_upload_size(size_bytes: int, *, max_bytes: int) -> None:
    if size_bytes <= 0:
        raise UploadValidationError("Uploaded file content is empty.")
    if size_bytes > max_bytes:
        raise UploadValidationError("Uploaded file exceeds configured size limit.")
