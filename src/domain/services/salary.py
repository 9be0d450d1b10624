"""Doctor salary derived as a percentage of collections."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.domain.constants import EXPENSE_TYPE_DOCTOR_SALARY
from src.domain.models import ExpenseRecord, RevenueRecord
from src.domain.services.finance import filter_by_range, total_revenue
from src.utils.decimal_utils import coerce_decimal, quantize_amount

MIN_PERCENTAGE = Decimal("0")
MAX_PERCENTAGE = Decimal("100")


@dataclass(frozen=True)
class SalaryQuote:
    """Salary amount derived from collections over a sub-period.

    Attributes:
        from_date: First day of the sub-period.
        to_date: Last day of the sub-period.
        calculated_from_records: Collections summed over the sub-period.
        percentage: Clamped share applied to the collections.
        amount: Resulting salary amount, rounded to cents.
    """

    from_date: date
    to_date: date
    calculated_from_records: Decimal
    percentage: Decimal
    amount: Decimal


def clamp_percentage(percentage) -> Decimal:
    """Clamp a percentage to [0, 100]; a missing value means 100."""
    if percentage is None or (
        isinstance(percentage, str) and not percentage.strip()
    ):
        return MAX_PERCENTAGE
    value = coerce_decimal(percentage)
    return max(MIN_PERCENTAGE, min(MAX_PERCENTAGE, value))


def salary_amount(calculated_from_records: Decimal, percentage) -> Decimal:
    """Return ``calculated_from_records * percentage / 100`` rounded to cents."""
    base = coerce_decimal(calculated_from_records)
    return quantize_amount(base * clamp_percentage(percentage) / Decimal("100"))


def quote_doctor_salary(
    revenue_records: list[RevenueRecord],
    from_date: date,
    to_date: date,
    percentage,
) -> SalaryQuote:
    """Compute the salary for a sub-period from the given revenue records.

    Args:
        revenue_records: Candidate revenue records, filtered again here.
        from_date: First day of the sub-period (inclusive).
        to_date: Last day of the sub-period (inclusive).
        percentage: Share of collections, clamped to [0, 100].

    Returns:
        SalaryQuote: Base collections, clamped percentage and amount.
    """
    in_period = filter_by_range(revenue_records, from_date, to_date)
    collected = total_revenue(in_period)
    clamped = clamp_percentage(percentage)
    return SalaryQuote(
        from_date=from_date,
        to_date=to_date,
        calculated_from_records=collected,
        percentage=clamped,
        amount=salary_amount(collected, clamped),
    )


def build_salary_expense(
    quote: SalaryQuote,
    *,
    expense_date: date,
    description: str,
    doctor_name: str | None,
    report_type: str | None,
) -> ExpenseRecord:
    """Freeze a quote into an expense record snapshot."""
    return ExpenseRecord(
        date=expense_date,
        amount=quote.amount,
        description=description.strip(),
        category="salary",
        expense_type=EXPENSE_TYPE_DOCTOR_SALARY,
        doctor_name=doctor_name.strip() if doctor_name else None,
        percentage=quote.percentage,
        calculated_from_records=quote.calculated_from_records,
        from_date=quote.from_date,
        to_date=quote.to_date,
        report_type=report_type,
    )


__all__ = [
    "SalaryQuote",
    "clamp_percentage",
    "salary_amount",
    "quote_doctor_salary",
    "build_salary_expense",
]
