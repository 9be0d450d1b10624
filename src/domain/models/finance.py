"""Domain models for financial aggregates."""

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from src.domain.models.records import ExpenseRecord, RevenueRecord


def margin_percentage(income: Decimal, expenses: Decimal) -> Decimal:
    """Return (income - expenses) / income in percent, exactly 0 without income."""
    if income <= 0:
        return Decimal("0")
    return (income - expenses) / income * Decimal("100")


@dataclass(frozen=True, order=True)
class MonthKey:
    """Calendar month bucket ordered chronologically."""

    year: int
    month: int

    @classmethod
    def from_date(cls, value: date | datetime) -> "MonthKey":
        return cls(year=value.year, month=value.month)

    @property
    def label(self) -> str:
        """Return the display label, e.g. ``Jan 2024``."""
        return f"{calendar.month_abbr[self.month]} {self.year}"


@dataclass(frozen=True)
class MonthlyRow:
    """Revenue, expenses and profit for one calendar month."""

    month: MonthKey
    revenue: Decimal
    expenses: Decimal

    @property
    def profit(self) -> Decimal:
        return self.revenue - self.expenses

    @property
    def label(self) -> str:
        return self.month.label


@dataclass(frozen=True)
class DailyRow:
    """Income and expenses for one calendar day."""

    day: date
    income: Decimal
    expenses: Decimal
    records: int = 0

    @property
    def profit(self) -> Decimal:
        return self.income - self.expenses


@dataclass(frozen=True)
class CategoryAmount:
    """Amount aggregated for a given category."""

    category: str
    amount: Decimal


@dataclass(frozen=True)
class TransactionEntry:
    """Single row of the combined revenue and expense feed.

    Attributes:
        occurred_at: Parsed timestamp, or None when the source date is invalid.
        kind: ``revenue`` or ``expense``.
        display_type: Label shown in the type column.
        description: Test type, category or expense description.
        amount: Signed amount, positive for revenue and negative for expenses.
        record: Source record for drill-down.
    """

    occurred_at: datetime | None
    kind: str
    display_type: str
    description: str
    amount: Decimal
    record: RevenueRecord | ExpenseRecord

    @property
    def is_positive(self) -> bool:
        return self.amount >= 0


@dataclass(frozen=True)
class FinancialSummary:
    """Period totals for a report."""

    total_income: Decimal
    total_expenses: Decimal
    total_records: int
    total_expense_items: int
    total_charged: Decimal = Decimal("0")
    outstanding_balance: Decimal = Decimal("0")
    currency_code: str = "AFN"

    @property
    def net_profit(self) -> Decimal:
        """Return total income minus total expenses."""
        return self.total_income - self.total_expenses

    @property
    def profit_margin(self) -> Decimal:
        """Return the net profit share of income in percent."""
        return margin_percentage(self.total_income, self.total_expenses)


@dataclass(frozen=True)
class FinancialReport:
    """Summary, series and raw records for a report page."""

    report_type: str
    start_date: date | None
    end_date: date | None
    summary: FinancialSummary
    daily: list[DailyRow] = field(default_factory=list)
    monthly: list[MonthlyRow] = field(default_factory=list)
    revenue_by_category: list[CategoryAmount] = field(default_factory=list)
    expenses_by_type: list[CategoryAmount] = field(default_factory=list)
    transactions: list[TransactionEntry] = field(default_factory=list)
    records: list[RevenueRecord] = field(default_factory=list)
    expenses: list[ExpenseRecord] = field(default_factory=list)


__all__ = [
    "margin_percentage",
    "MonthKey",
    "MonthlyRow",
    "DailyRow",
    "CategoryAmount",
    "TransactionEntry",
    "FinancialSummary",
    "FinancialReport",
]
