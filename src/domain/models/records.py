"""Domain models for persisted revenue and expense records."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from src.domain.constants import EXPENSE_TYPE_DOCTOR_SALARY, EXPENSE_TYPE_NORMAL
from src.utils.decimal_utils import coerce_decimal


RecordDate = date | datetime | str | None


@dataclass(frozen=True)
class RevenueRecord:
    """Dated entry for money billed to and collected from a customer.

    Attributes:
        date: Timestamp of the sale, test or order. May be unparseable when
            read from legacy rows.
        amount_charged: Amount billed.
        amount_paid: Amount actually collected; the canonical revenue figure.
        category: Test type, payment method or glass type.
        customer_name: Patient or customer name.
        invoice_number: Unique invoice reference.
    """

    date: RecordDate
    amount_charged: Decimal
    amount_paid: Decimal
    category: str | None = None
    customer_name: str | None = None
    invoice_number: str | None = None
    report_type: str | None = None
    record_id: int | None = None

    @property
    def balance_due(self) -> Decimal:
        """Return the unpaid part of the charge, never negative."""
        outstanding = coerce_decimal(self.amount_charged) - coerce_decimal(
            self.amount_paid
        )
        return outstanding if outstanding > 0 else Decimal("0")

    @property
    def is_overpaid(self) -> bool:
        return coerce_decimal(self.amount_paid) > coerce_decimal(
            self.amount_charged
        )


@dataclass(frozen=True)
class ExpenseRecord:
    """Dated entry for money spent.

    Salary expenses carry the metadata they were derived from. The stored
    ``amount`` is a snapshot and stays authoritative after creation.
    """

    date: RecordDate
    amount: Decimal
    description: str = ""
    category: str | None = None
    expense_type: str = EXPENSE_TYPE_NORMAL
    doctor_name: str | None = None
    percentage: Decimal | None = None
    calculated_from_records: Decimal | None = None
    from_date: date | None = None
    to_date: date | None = None
    report_type: str | None = None
    record_id: int | None = None

    @property
    def is_doctor_salary(self) -> bool:
        return self.expense_type == EXPENSE_TYPE_DOCTOR_SALARY


__all__ = ["RecordDate", "RevenueRecord", "ExpenseRecord"]
