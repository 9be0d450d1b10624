"""Tests for the GetFinancialReportUseCase."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from src.application.use_cases.get_financial_report import (
    GetFinancialReportUseCase,
)
from src.domain.models import ExpenseRecord, MonthKey, RevenueRecord


def _repository(revenue, expenses) -> MagicMock:
    repository = MagicMock()
    repository.fetch_revenue_records.return_value = revenue
    repository.fetch_expense_records.return_value = expenses
    return repository


def test_execute_builds_summary_and_series() -> None:
    """Use case should aggregate both streams for the period."""
    revenue = [
        RevenueRecord(
            date="2024-01-05",
            amount_charged=Decimal("120"),
            amount_paid=Decimal("100"),
            category="CBC",
            invoice_number="INV-1",
        ),
        RevenueRecord(
            date="2024-02-10",
            amount_charged=Decimal("50"),
            amount_paid=Decimal("50"),
            category="Lipid",
            invoice_number="INV-2",
        ),
    ]
    expenses = [
        ExpenseRecord(
            date="2024-01-15",
            amount=Decimal("30"),
            description="Reagents",
        )
    ]
    repository = _repository(revenue, expenses)
    use_case = GetFinancialReportUseCase(
        records_repository=repository,
        logger=MagicMock(),
        currency_code="AFN",
    )

    report = use_case.execute(
        "laboratory",
        date(2024, 1, 1),
        date(2024, 2, 29),
    )

    repository.fetch_revenue_records.assert_called_once_with(
        "laboratory",
        date(2024, 1, 1),
        date(2024, 2, 29),
    )
    assert report.summary.total_income == Decimal("150")
    assert report.summary.total_expenses == Decimal("30")
    assert report.summary.net_profit == Decimal("120")
    assert report.summary.profit_margin == Decimal("80")
    assert report.summary.total_charged == Decimal("170")
    assert report.summary.outstanding_balance == Decimal("20")
    assert [row.month for row in report.monthly] == [
        MonthKey(2024, 1),
        MonthKey(2024, 2),
    ]
    assert [row.profit for row in report.monthly] == [
        Decimal("70"),
        Decimal("50"),
    ]
    assert [item.category for item in report.revenue_by_category] == [
        "CBC",
        "Lipid",
    ]
    assert [entry.amount for entry in report.transactions] == [
        Decimal("50"),
        Decimal("-30"),
        Decimal("100"),
    ]
    assert len(report.daily) == 3


def test_execute_refilters_rows_returned_by_repository() -> None:
    """Rows outside the period or undated should be excluded and logged."""
    revenue = [
        RevenueRecord(
            date="2024-01-05",
            amount_charged=Decimal("10"),
            amount_paid=Decimal("10"),
        ),
        RevenueRecord(
            date="2023-12-31",
            amount_charged=Decimal("99"),
            amount_paid=Decimal("99"),
        ),
        RevenueRecord(
            date="broken",
            amount_charged=Decimal("99"),
            amount_paid=Decimal("99"),
        ),
    ]
    logger = MagicMock()
    use_case = GetFinancialReportUseCase(
        records_repository=_repository(revenue, []),
        logger=logger,
    )

    report = use_case.execute("pharmacy", date(2024, 1, 1), date(2024, 1, 31))

    assert report.summary.total_income == Decimal("10")
    assert report.summary.total_records == 1
    assert any(
        "Excluded 2" in call.args[0] for call in logger.warning.call_args_list
    )


def test_execute_swaps_inverted_bounds() -> None:
    """A start after the end should be swapped with a warning."""
    repository = _repository([], [])
    logger = MagicMock()
    use_case = GetFinancialReportUseCase(
        records_repository=repository,
        logger=logger,
    )

    report = use_case.execute("glass", date(2024, 3, 1), date(2024, 1, 1))

    assert report.start_date == date(2024, 1, 1)
    assert report.end_date == date(2024, 3, 1)
    repository.fetch_expense_records.assert_called_once_with(
        "glass",
        date(2024, 1, 1),
        date(2024, 3, 1),
    )
    logger.warning.assert_called_once()


def test_execute_with_no_records_returns_zeroes() -> None:
    """An empty period should produce an all zero report."""
    use_case = GetFinancialReportUseCase(
        records_repository=_repository([], []),
        logger=MagicMock(),
    )

    report = use_case.execute("ophthalmology")

    assert report.summary.total_income == Decimal("0")
    assert report.summary.profit_margin == Decimal("0")
    assert report.monthly == []
    assert report.transactions == []
