"""Tests for percentage based doctor salary calculation."""

from datetime import date
from decimal import Decimal

from src.domain.models import RevenueRecord
from src.domain.services.salary import (
    build_salary_expense,
    clamp_percentage,
    quote_doctor_salary,
    salary_amount,
)


def _revenue(day: str, paid: str, charged: str = "500") -> RevenueRecord:
    return RevenueRecord(
        date=day,
        amount_charged=Decimal(charged),
        amount_paid=Decimal(paid),
    )


def test_clamp_percentage_bounds_and_default() -> None:
    """Percentages should be clamped and default to 100."""
    assert clamp_percentage(None) == Decimal("100")
    assert clamp_percentage("") == Decimal("100")
    assert clamp_percentage(0) == Decimal("0")
    assert clamp_percentage(-5) == Decimal("0")
    assert clamp_percentage(150) == Decimal("100")
    assert clamp_percentage("12.5") == Decimal("12.5")


def test_salary_amount_rounds_to_cents() -> None:
    """Amounts should be rounded half up to two decimals."""
    assert salary_amount(Decimal("1000"), 40) == Decimal("400.00")
    assert salary_amount(Decimal("10.01"), 50) == Decimal("5.01")
    assert salary_amount(Decimal("0"), 40) == Decimal("0.00")


def test_quote_uses_collected_amounts_within_sub_period() -> None:
    """Only payments inside the inclusive sub-period should count."""
    records = [
        _revenue("2024-01-01", "100"),
        _revenue("2024-01-15T17:45:00", "200", charged="300"),
        _revenue("2024-01-31", "300"),
        _revenue("2024-02-01", "1000"),
        _revenue("not-a-date", "1000"),
    ]

    quote = quote_doctor_salary(
        records,
        date(2024, 1, 1),
        date(2024, 1, 31),
        40,
    )

    assert quote.calculated_from_records == Decimal("600")
    assert quote.percentage == Decimal("40")
    assert quote.amount == Decimal("240.00")


def test_forty_percent_of_five_hundred() -> None:
    """40% of AFN 500 collected should give a salary of 200."""
    quote = quote_doctor_salary(
        [_revenue("2024-03-02", "300"), _revenue("2024-03-20", "200")],
        date(2024, 3, 1),
        date(2024, 3, 31),
        40,
    )

    assert quote.calculated_from_records == Decimal("500")
    assert quote.amount == Decimal("200.00")


def test_quote_without_percentage_uses_full_collections() -> None:
    """A missing percentage should yield the whole collected amount."""
    quote = quote_doctor_salary(
        [_revenue("2024-01-10", "125.50")],
        date(2024, 1, 1),
        date(2024, 1, 31),
        None,
    )

    assert quote.amount == Decimal("125.50")


def test_build_salary_expense_freezes_quote() -> None:
    """The expense snapshot should carry the quote metadata."""
    quote = quote_doctor_salary(
        [_revenue("2024-01-10", "1000")],
        date(2024, 1, 1),
        date(2024, 1, 31),
        40,
    )

    expense = build_salary_expense(
        quote,
        expense_date=date(2024, 2, 1),
        description="  January salary ",
        doctor_name=" Ahmadi ",
        report_type="laboratory",
    )

    assert expense.is_doctor_salary
    assert expense.amount == Decimal("400.00")
    assert expense.description == "January salary"
    assert expense.doctor_name == "Ahmadi"
    assert expense.percentage == Decimal("40")
    assert expense.calculated_from_records == Decimal("1000")
    assert expense.from_date == date(2024, 1, 1)
    assert expense.to_date == date(2024, 1, 31)
    assert expense.report_type == "laboratory"
