"""Tests for record input validation."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.domain.models import RevenueRecord
from src.domain.services.validation import (
    RecordValidationError,
    parse_amount,
    validate_expense_input,
    validate_revenue_input,
    warn_on_overpayment,
)


def test_validate_revenue_input_accepts_partial_payment() -> None:
    """Partial payments are valid input."""
    validate_revenue_input(
        Decimal("100"),
        Decimal("40"),
        "INV-1",
        "Karimi",
        "CBC",
    )


@pytest.mark.parametrize(
    ("charged", "paid", "invoice", "customer", "category", "message"),
    [
        ("-1", "0", "INV-1", "Karimi", "CBC", "Amount charged"),
        ("10", "-1", "INV-1", "Karimi", "CBC", "Amount paid"),
        ("10", "10", "  ", "Karimi", "CBC", "Invoice number"),
        ("10", "10", None, "Karimi", "CBC", "Invoice number"),
        ("10", "10", "INV-1", "", "CBC", "Customer name"),
        ("10", "10", "INV-1", None, "CBC", "Customer name"),
        ("10", "10", "INV-1", "Karimi", " ", "Category"),
        ("10", "10", "INV-1", "Karimi", None, "Category"),
    ],
)
def test_validate_revenue_input_rejects_bad_values(
    charged: str,
    paid: str,
    invoice: str | None,
    customer: str | None,
    category: str | None,
    message: str,
) -> None:
    """Negative amounts and missing required text should be rejected."""
    with pytest.raises(RecordValidationError, match=message):
        validate_revenue_input(
            Decimal(charged),
            Decimal(paid),
            invoice,
            customer,
            category,
        )


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("100", Decimal("100")),
        (" 40.5 ", Decimal("40.5")),
        (250, Decimal("250")),
        (Decimal("-3"), Decimal("-3")),
    ],
)
def test_parse_amount_accepts_numbers(value, expected: Decimal) -> None:
    """Numeric strings, ints and decimals should parse as-is."""
    assert parse_amount(value, "Amount") == expected


@pytest.mark.parametrize(
    ("value", "message"),
    [
        (None, "Amount is required"),
        ("", "Amount is required"),
        ("   ", "Amount is required"),
        (True, "Amount is required"),
        ("abc", "Amount must be a number"),
        ("12,5", "Amount must be a number"),
        ("NaN", "Amount must be a number"),
        ("Infinity", "Amount must be a number"),
    ],
)
def test_parse_amount_rejects_missing_or_malformed(
    value,
    message: str,
) -> None:
    """Writes must never turn bad input into a zero amount."""
    with pytest.raises(RecordValidationError, match=message):
        parse_amount(value, "Amount")


def test_validate_expense_input_rules() -> None:
    """Expenses need a description, a known type and a valid period."""
    validate_expense_input(Decimal("5"), "Gloves", "normal")
    validate_expense_input(
        Decimal("5"),
        "Salary",
        "doctor_salary",
        date(2024, 1, 1),
        date(2024, 1, 1),
    )

    with pytest.raises(RecordValidationError, match="Amount must be positive"):
        validate_expense_input(Decimal("-5"), "Gloves", "normal")
    with pytest.raises(RecordValidationError, match="Description"):
        validate_expense_input(Decimal("5"), " ", "normal")
    with pytest.raises(RecordValidationError, match="Unknown expense type"):
        validate_expense_input(Decimal("5"), "Gloves", "bonus")
    with pytest.raises(RecordValidationError, match="from and to"):
        validate_expense_input(Decimal("5"), "Salary", "doctor_salary")
    with pytest.raises(RecordValidationError, match="before"):
        validate_expense_input(
            Decimal("5"),
            "Salary",
            "doctor_salary",
            date(2024, 2, 1),
            date(2024, 1, 1),
        )


def test_warn_on_overpayment_only_for_overpaid_records() -> None:
    """Overpayments should be logged but not blocked."""
    logger = MagicMock()
    fine = RevenueRecord(
        date="2024-01-01",
        amount_charged=Decimal("100"),
        amount_paid=Decimal("100"),
        invoice_number="INV-1",
    )
    overpaid = RevenueRecord(
        date="2024-01-01",
        amount_charged=Decimal("100"),
        amount_paid=Decimal("120"),
        invoice_number="INV-2",
    )

    warn_on_overpayment(fine, logger)
    logger.warning.assert_not_called()

    warn_on_overpayment(overpaid, logger)
    logger.warning.assert_called_once()
    assert overpaid.balance_due == Decimal("0")
