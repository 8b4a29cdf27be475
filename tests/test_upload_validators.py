from __future__ import annotations

import pytest

from db.repositories.errors import UploadValidationError
from db.repositories.validators import (
    validate_upload_content_type,
    validate_upload_file_name,
    validate_upload_size,
)


@pytest.mark.parametrize(
    "content_type",
    [
        "text/csv",
        "text/csv; charset=utf-8",
        "text/x-csv",
        "application/x-csv",
        "text/comma-separated-values",
        "application/vnd.ms-excel",
        None,
    ],
)
def test_csv_content_types_accepted(content_type) -> None:
    validate_upload_content_type(content_type)


def test_unrelated_content_type_rejected() -> None:
    with pytest.raises(UploadValidationError, match="Unsupported content_type"):
        validate_upload_content_type("image/png")


def test_file_name_is_cleaned() -> None:
    assert validate_upload_file_name("  uploads/March.CSV ") == "March.CSV"


@pytest.mark.parametrize(("size", "message"), [(0, "empty"), (11, "size limit")])
def test_size_bounds(size, message) -> None:
    with pytest.raises(UploadValidationError, match=message):
        validate_upload_size(size, max_bytes=10)
