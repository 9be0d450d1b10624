"""Domain services for period-bounded revenue and expense aggregates.

Every function here is pure: inputs are never mutated and bad data (missing
amounts, unreadable dates) is coerced to zero or excluded instead of raising,
so a report can always render.
"""

from collections.abc import Callable, Hashable, Iterable, Sequence
from datetime import date, datetime
from decimal import Decimal
from logging import Logger
from typing import TypeVar

from src.domain.constants import (
    EXPENSE_TYPE_LABELS,
    EXPENSE_TYPE_NORMAL,
    FAIR_MARGIN_THRESHOLD,
    HEALTHY_MARGIN_THRESHOLD,
    REVENUE_BASIS,
    UNCATEGORIZED,
)
from src.domain.models import (
    CategoryAmount,
    DailyRow,
    ExpenseRecord,
    FinancialSummary,
    MonthKey,
    MonthlyRow,
    RevenueRecord,
    TransactionEntry,
    margin_percentage,
)
from src.domain.services.normalization import (
    normalize_bound,
    normalize_category,
    parse_record_datetime,
)
from src.domain.services.validation import warn_on_overpayment
from src.utils.decimal_utils import coerce_decimal

RecordT = TypeVar("RecordT", RevenueRecord, ExpenseRecord)


def record_amount(record: RevenueRecord | ExpenseRecord) -> Decimal:
    """Return the amount a record contributes to its stream total.

    Revenue records contribute their ``REVENUE_BASIS`` field (the amount
    paid), expense records their amount.
    """
    if isinstance(record, RevenueRecord):
        return coerce_decimal(getattr(record, REVENUE_BASIS))
    return coerce_decimal(record.amount)


def filter_by_range(
    records: Iterable[RecordT],
    start: date | datetime | str | None = None,
    end: date | datetime | str | None = None,
) -> list[RecordT]:
    """Keep records dated within the inclusive bounds.

    Args:
        records: Revenue or expense records.
        start: Optional inclusive lower bound.
        end: Optional inclusive upper bound. A plain date covers the whole day.

    Returns:
        list: Records in range, in input order. Records without a parseable
        date are dropped.
    """
    lower = normalize_bound(start, end_of_day=False)
    upper = normalize_bound(end, end_of_day=True)
    kept = []
    for record in records:
        occurred_at = parse_record_datetime(record.date)
        if occurred_at is None:
            continue
        if lower is not None and occurred_at < lower:
            continue
        if upper is not None and occurred_at > upper:
            continue
        kept.append(record)
    return kept


def total_revenue(records: Iterable[RevenueRecord]) -> Decimal:
    """Return the collected amount over revenue records, 0 when empty."""
    return sum((record_amount(record) for record in records), Decimal("0"))


def total_expenses(records: Iterable[ExpenseRecord]) -> Decimal:
    """Return the spent amount over expense records, 0 when empty."""
    return sum((record_amount(record) for record in records), Decimal("0"))


def net_profit(
    revenue_records: Sequence[RevenueRecord],
    expense_records: Sequence[ExpenseRecord],
) -> Decimal:
    """Return total revenue minus total expenses, sign preserved."""
    return total_revenue(revenue_records) - total_expenses(expense_records)


def profit_margin(
    revenue_records: Sequence[RevenueRecord],
    expense_records: Sequence[ExpenseRecord],
) -> Decimal:
    """Return net profit as a percentage of revenue, exactly 0 without revenue."""
    return margin_percentage(
        total_revenue(revenue_records),
        total_expenses(expense_records),
    )


def profit_margin_band(margin: Decimal) -> str:
    """Classify a margin for colour coding."""
    if margin >= HEALTHY_MARGIN_THRESHOLD:
        return "healthy"
    if margin >= FAIR_MARGIN_THRESHOLD:
        return "fair"
    return "low"


def group_by(
    records: Iterable[RevenueRecord | ExpenseRecord],
    key_fn: Callable[[RevenueRecord | ExpenseRecord], Hashable | None],
) -> dict[Hashable, Decimal]:
    """Sum record amounts per derived key.

    Records whose key is missing or blank are summed under
    ``Uncategorized`` so the parts always add up to the stream total.

    Args:
        records: Revenue or expense records.
        key_fn: Callable deriving the grouping key from a record.

    Returns:
        dict: Mapping of key to summed amount.
    """
    totals: dict[Hashable, Decimal] = {}
    for record in records:
        key = key_fn(record)
        if key is None or isinstance(key, str):
            key = normalize_category(key)
        totals[key] = totals.get(key, Decimal("0")) + record_amount(record)
    return totals


def month_of(record: RevenueRecord | ExpenseRecord) -> MonthKey | None:
    """Return the month bucket of a record, None when its date is invalid."""
    occurred_at = parse_record_datetime(record.date)
    if occurred_at is None:
        return None
    return MonthKey.from_date(occurred_at)


def day_of(record: RevenueRecord | ExpenseRecord) -> date | None:
    """Return the calendar day of a record, None when its date is invalid."""
    occurred_at = parse_record_datetime(record.date)
    if occurred_at is None:
        return None
    return occurred_at.date()


def category_breakdown(
    records: Iterable[RevenueRecord | ExpenseRecord],
) -> list[CategoryAmount]:
    """Return per-category totals, largest first."""
    totals = group_by(records, lambda record: record.category)
    return _sorted_amounts(totals)


def expense_type_breakdown(
    records: Iterable[ExpenseRecord],
) -> list[CategoryAmount]:
    """Return doctor salary versus other expense totals, largest first."""
    totals = group_by(
        records,
        lambda record: EXPENSE_TYPE_LABELS.get(
            record.expense_type,
            EXPENSE_TYPE_LABELS[EXPENSE_TYPE_NORMAL],
        ),
    )
    return _sorted_amounts(totals)


def monthly_series(
    revenue_records: Sequence[RevenueRecord],
    expense_records: Sequence[ExpenseRecord],
    logger: Logger | None = None,
) -> list[MonthlyRow]:
    """Bucket both streams by calendar month.

    Args:
        revenue_records: Revenue records.
        expense_records: Expense records.
        logger: Optional logger notified about undated records.

    Returns:
        list[MonthlyRow]: One row per month present in either stream, in
        chronological order. The missing side of a month is 0.
    """
    revenue_by_month = _group_dated(revenue_records, month_of, logger)
    expenses_by_month = _group_dated(expense_records, month_of, logger)
    months = sorted(set(revenue_by_month) | set(expenses_by_month))
    return [
        MonthlyRow(
            month=month,
            revenue=revenue_by_month.get(month, Decimal("0")),
            expenses=expenses_by_month.get(month, Decimal("0")),
        )
        for month in months
    ]


def daily_series(
    revenue_records: Sequence[RevenueRecord],
    expense_records: Sequence[ExpenseRecord],
    logger: Logger | None = None,
) -> list[DailyRow]:
    """Bucket both streams by calendar day, oldest first."""
    income_by_day = _group_dated(revenue_records, day_of, logger)
    expenses_by_day = _group_dated(expense_records, day_of, logger)
    counts: dict[date, int] = {}
    for record in revenue_records:
        day = day_of(record)
        if day is not None:
            counts[day] = counts.get(day, 0) + 1
    days = sorted(set(income_by_day) | set(expenses_by_day))
    return [
        DailyRow(
            day=day,
            income=income_by_day.get(day, Decimal("0")),
            expenses=expenses_by_day.get(day, Decimal("0")),
            records=counts.get(day, 0),
        )
        for day in days
    ]


def combined_transaction_feed(
    revenue_records: Sequence[RevenueRecord],
    expense_records: Sequence[ExpenseRecord],
) -> list[TransactionEntry]:
    """Merge both streams into one feed, most recent first.

    Revenue entries carry a positive amount and expense entries a negative
    one. Entries sharing a timestamp keep their input order (revenue before
    expenses); entries without a readable date go last.
    """
    entries: list[TransactionEntry] = []
    for record in revenue_records:
        entries.append(
            TransactionEntry(
                occurred_at=parse_record_datetime(record.date),
                kind="revenue",
                display_type="Revenue",
                description=normalize_category(record.category),
                amount=record_amount(record),
                record=record,
            )
        )
    for record in expense_records:
        entries.append(
            TransactionEntry(
                occurred_at=parse_record_datetime(record.date),
                kind="expense",
                display_type=(
                    "Doctor Salary" if record.is_doctor_salary else "Expense"
                ),
                description=(record.description or "").strip() or "Expense",
                amount=-record_amount(record),
                record=record,
            )
        )
    # sorted() stays stable with reverse=True.
    return sorted(
        entries,
        key=lambda entry: (
            entry.occurred_at is not None,
            entry.occurred_at or datetime.min,
        ),
        reverse=True,
    )


def compute_financial_summary(
    revenue_records: Sequence[RevenueRecord],
    expense_records: Sequence[ExpenseRecord],
    *,
    currency_code: str = "AFN",
    logger: Logger | None = None,
) -> FinancialSummary:
    """Compute period totals for a report.

    Args:
        revenue_records: Revenue records already filtered to the period.
        expense_records: Expense records already filtered to the period.
        currency_code: Currency the amounts are expressed in.
        logger: Optional logger used for data quality warnings.

    Returns:
        FinancialSummary: Income, expenses, counts and receivable figures.
    """
    total_charged = Decimal("0")
    outstanding = Decimal("0")
    for record in revenue_records:
        if logger is not None:
            warn_on_overpayment(record, logger)
        total_charged += coerce_decimal(record.amount_charged)
        outstanding += record.balance_due
    return FinancialSummary(
        total_income=total_revenue(revenue_records),
        total_expenses=total_expenses(expense_records),
        total_records=len(revenue_records),
        total_expense_items=len(expense_records),
        total_charged=total_charged,
        outstanding_balance=outstanding,
        currency_code=currency_code,
    )


def _group_dated(
    records: Iterable[RevenueRecord | ExpenseRecord],
    key_fn: Callable[[RevenueRecord | ExpenseRecord], Hashable | None],
    logger: Logger | None,
) -> dict[Hashable, Decimal]:
    dated = []
    skipped = 0
    for record in records:
        if key_fn(record) is None:
            skipped += 1
            continue
        dated.append(record)
    if skipped and logger is not None:
        logger.warning(f"Skipped {skipped} records without a valid date")
    return group_by(dated, key_fn)


def _sorted_amounts(totals: dict[Hashable, Decimal]) -> list[CategoryAmount]:
    return [
        CategoryAmount(category=str(category), amount=amount)
        for category, amount in sorted(
            totals.items(),
            key=lambda item: (-item[1], str(item[0])),
        )
    ]


__all__ = [
    "record_amount",
    "filter_by_range",
    "total_revenue",
    "total_expenses",
    "net_profit",
    "profit_margin",
    "profit_margin_band",
    "group_by",
    "month_of",
    "day_of",
    "category_breakdown",
    "expense_type_breakdown",
    "monthly_series",
    "daily_series",
    "combined_transaction_feed",
    "compute_financial_summary",
]
