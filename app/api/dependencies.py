"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

from fastapi import File, HTTPException, UploadFile, status

from db.repositories.errors import UploadValidationError
from db.repositories.validators import validate_upload_file_name


def get_csv_upload(file: UploadFile | None = File(default=None)) -> UploadFile:
    """
    Reject a missing file or a non-CSV file name before any job exists.
    """

    if file is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded",
        )

    try:
        validate_upload_file_name(file.filename)
    except UploadValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return file
