from __future__ import annotations

import unittest
from decimal import Decimal

from app.domain.ngo_report import ReportInput, RowValidationError
from app.validators.report_validator import (
    INVALID_MONTH_MESSAGE,
    INVALID_NUMERIC_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    NEGATIVE_NUMERIC_MESSAGE,
    ReportRowValidator,
    ReportValidationError,
)


def _row(**overrides: str) -> dict[str, str]:
    row = {
        "ngoId": "NGO001",
        "month": "2024-01",
        "peopleHelped": "150",
        "eventsConducted": "5",
        "fundsUtilized": "50000",
    }
    row.update(overrides)
    return row


class TestValidateRow(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = ReportRowValidator()

    def test_returns_report_or_error_never_both(self) -> None:
        for row in (_row(), _row(month="2024-1"), _row(peopleHelped=""), _row(fundsUtilized="-5")):
            report, error = self.validator.validate_row(raw_row=row, row_number=2)
            self.assertNotEqual(report is None, error is None)

    def test_valid_row_is_normalised(self) -> None:
        report, error = self.validator.validate_row(raw_row=_row(fundsUtilized="50000.75"), row_number=2)

        self.assertIsNone(error)
        self.assertEqual(
            report,
            ReportInput(
                ngo_id="NGO001",
                month="2024-01",
                people_helped=150,
                events_conducted=5,
                funds_utilized=Decimal("50000.75"),
            ),
        )

    def test_failure_carries_row_number(self) -> None:
        report, error = self.validator.validate_row(raw_row=_row(month="Jan 2024"), row_number=7)

        self.assertIsNone(report)
        self.assertEqual(error, RowValidationError(row_number=7, message=INVALID_MONTH_MESSAGE))

    def test_blank_or_absent_column_is_missing(self) -> None:
        for row in (_row(ngoId=""), _row(fundsUtilized="   ")):
            _, error = self.validator.validate_row(raw_row=row, row_number=2)
            self.assertEqual(error.message, MISSING_FIELDS_MESSAGE)

        incomplete = _row()
        del incomplete["eventsConducted"]
        _, error = self.validator.validate_row(raw_row=incomplete, row_number=2)
        self.assertEqual(error.message, MISSING_FIELDS_MESSAGE)

    def test_zero_is_present_not_missing(self) -> None:
        report, error = self.validator.validate_row(
            raw_row=_row(peopleHelped="0", eventsConducted="0", fundsUtilized="0"),
            row_number=2,
        )
        self.assertIsNone(error)
        self.assertEqual(report.people_helped, 0)

    def test_month_format(self) -> None:
        for month in ("2024-1", "2024/01", "24-01", "2024-01-15", "２０２４-01"):
            _, error = self.validator.validate_row(raw_row=_row(month=month), row_number=2)
            self.assertEqual(error.message, INVALID_MONTH_MESSAGE, month)

    def test_non_numeric_values(self) -> None:
        for overrides in (
            {"peopleHelped": "many"},
            {"peopleHelped": "1.5"},
            {"eventsConducted": "1_000"},
            {"fundsUtilized": "50k"},
            {"fundsUtilized": "NaN"},
            {"fundsUtilized": "Infinity"},
        ):
            _, error = self.validator.validate_row(raw_row=_row(**overrides), row_number=2)
            self.assertEqual(error.message, INVALID_NUMERIC_MESSAGE, overrides)

    def test_negative_values(self) -> None:
        for overrides in ({"peopleHelped": "-1"}, {"eventsConducted": "-3"}, {"fundsUtilized": "-10"}):
            _, error = self.validator.validate_row(raw_row=_row(**overrides), row_number=2)
            self.assertEqual(error.message, NEGATIVE_NUMERIC_MESSAGE, overrides)

    def test_first_failing_rule_wins(self) -> None:
        _, error = self.validator.validate_row(raw_row=_row(ngoId="", month="bad"), row_number=2)
        self.assertEqual(error.message, MISSING_FIELDS_MESSAGE)

        _, error = self.validator.validate_row(raw_row=_row(month="bad", peopleHelped="x"), row_number=2)
        self.assertEqual(error.message, INVALID_MONTH_MESSAGE)

        _, error = self.validator.validate_row(
            raw_row=_row(peopleHelped="x", fundsUtilized="-1"),
            row_number=2,
        )
        self.assertEqual(error.message, INVALID_NUMERIC_MESSAGE)


class TestValidateFields(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = ReportRowValidator()

    def test_funds_keep_submitted_precision(self) -> None:
        for raw, expected in (("0.004", Decimal("0.004")), ("10.005", Decimal("10.005")), (0.125, Decimal("0.125"))):
            report = self.validator.validate_fields(
                ngo_id="NGO002",
                month="2024-02",
                people_helped=1,
                events_conducted=1,
                funds_utilized=raw,
            )
            self.assertEqual(report.funds_utilized, expected)

    def test_accepts_json_typed_values(self) -> None:
        report = self.validator.validate_fields(
            ngo_id="NGO002",
            month="2024-02",
            people_helped=200,
            events_conducted=8.0,
            funds_utilized=75000.5,
        )
        self.assertEqual(report.events_conducted, 8)
        self.assertEqual(report.funds_utilized, Decimal("75000.5"))

    def test_raises_with_reason(self) -> None:
        with self.assertRaises(ReportValidationError) as ctx:
            self.validator.validate_fields(
                ngo_id="NGO002",
                month="2024-02",
                people_helped=None,
                events_conducted=8,
                funds_utilized=1,
            )
        self.assertEqual(ctx.exception.message, MISSING_FIELDS_MESSAGE)

    def test_booleans_are_not_numbers(self) -> None:
        with self.assertRaises(ReportValidationError) as ctx:
            self.validator.validate_fields(
                ngo_id="NGO002",
                month="2024-02",
                people_helped=True,
                events_conducted=8,
                funds_utilized=1,
            )
        self.assertEqual(ctx.exception.message, INVALID_NUMERIC_MESSAGE)


if __name__ == "__main__":
    unittest.main()
