"""
app/validators/report_validator.py

Validation shared by the single-report endpoint and bulk CSV rows.

Rules run in a fixed order and stop at the first failure:
    1. every field present and non-blank
    2. month is YYYY-MM
    3. counts parse as integers, funds as a decimal
    4. no value is negative
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from app.domain.ngo_report import ReportInput, RowValidationError

MISSING_FIELDS_MESSAGE = "Missing required fields"
INVALID_MONTH_MESSAGE = "Invalid month format. Use YYYY-MM"
INVALID_NUMERIC_MESSAGE = "Invalid numeric values"
NEGATIVE_NUMERIC_MESSAGE = "Numeric values must be non-negative"

MONTH_PATTERN = re.compile(r"\d{4}-\d{2}", re.ASCII)
_INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)
_DECIMAL_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)


class ReportValidationError(ValueError):
    """
    Raised when report values fail one of the validation rules.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def is_valid_month(value: Any) -> bool:
    return isinstance(value, str) and MONTH_PATTERN.fullmatch(value.strip()) is not None


class ReportRowValidator:
    """
    Validates and normalises report values. Pure: never touches storage.
    """

    def validate_row(
        self,
        *,
        raw_row: Mapping[str, Any],
        row_number: int,
    ) -> tuple[ReportInput | None, RowValidationError | None]:
        """
        Validate one CSV data row keyed by header name.
        """

        try:
            report = self.validate_fields(
                ngo_id=raw_row.get("ngoId"),
                month=raw_row.get("month"),
                people_helped=raw_row.get("peopleHelped"),
                events_conducted=raw_row.get("eventsConducted"),
                funds_utilized=raw_row.get("fundsUtilized"),
            )
        except ReportValidationError as exc:
            return None, RowValidationError(row_number=row_number, message=exc.message)
        return report, None

    def validate_fields(
        self,
        *,
        ngo_id: Any,
        month: Any,
        people_helped: Any,
        events_conducted: Any,
        funds_utilized: Any,
    ) -> ReportInput:
        values = (ngo_id, month, people_helped, events_conducted, funds_utilized)
        if any(self._is_blank(value) for value in values):
            raise ReportValidationError(MISSING_FIELDS_MESSAGE)

        if not is_valid_month(month):
            raise ReportValidationError(INVALID_MONTH_MESSAGE)

        try:
            people = self._parse_int(people_helped)
            events = self._parse_int(events_conducted)
            funds = self._parse_decimal(funds_utilized)
        except (ValueError, InvalidOperation) as exc:
            raise ReportValidationError(INVALID_NUMERIC_MESSAGE) from exc

        if people < 0 or events < 0 or funds < 0:
            raise ReportValidationError(NEGATIVE_NUMERIC_MESSAGE)

        return ReportInput(
            ngo_id=str(ngo_id).strip(),
            month=str(month).strip(),
            people_helped=people,
            events_conducted=events,
            funds_utilized=funds,
        )

    @staticmethod
    def _parse_int(value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError("booleans are not counts")
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError(f"{value!r} is not a whole number")
            return int(value)
        raw = str(value).strip()
        if _INTEGER_PATTERN.fullmatch(raw) is None:
            raise ValueError(f"{raw!r} is not an integer")
        return int(raw)

    @staticmethod
    def _parse_decimal(value: Any) -> Decimal:
        if isinstance(value, bool):
            raise ValueError("booleans are not amounts")
        if isinstance(value, (int, Decimal)):
            parsed = Decimal(value)
        elif isinstance(value, float):
            parsed = Decimal(str(value))
        else:
            raw = str(value).strip()
            if _DECIMAL_PATTERN.fullmatch(raw) is None:
                raise ValueError(f"{raw!r} is not a decimal number")
            parsed = Decimal(raw)
        if not parsed.is_finite():
            raise ValueError(f"{value!r} is not finite")
        return parsed

    @staticmethod
    def _is_blank(value: Any) -> bool:
        if value is None:
            return True
        if isinstance(value, str):
            return value.strip() == ""
        return False
