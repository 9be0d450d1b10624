"""Domain validation helpers."""

from datetime import date
from decimal import Decimal, InvalidOperation
from logging import Logger

from src.domain.constants import EXPENSE_TYPE_DOCTOR_SALARY, EXPENSE_TYPES
from src.domain.models.records import RevenueRecord


class RecordValidationError(ValueError):
    """Raised when record input is rejected before persistence."""


def warn_on_overpayment(record: RevenueRecord, logger: Logger) -> None:
    """Warn when a record collected more than it charged.

    Overpayments are kept as entered; only the balance due clamps at zero.

    Args:
        record: Revenue record to inspect.
        logger: Logger used for warnings.
    """
    if record.is_overpaid:
        logger.warning(
            f"Amount paid exceeds amount charged for invoice="
            f"{record.invoice_number}: paid={record.amount_paid}, "
            f"charged={record.amount_charged}"
        )


def parse_amount(value, label: str) -> Decimal:
    """Parse a form amount strictly.

    Unlike report aggregation, writes never coerce bad input to zero.

    Args:
        value: Raw amount from a form or command line.
        label: Field name used in the error message.

    Returns:
        Decimal: Parsed finite amount.

    Raises:
        RecordValidationError: When the amount is missing or not a number.
    """
    if value is None or isinstance(value, bool):
        raise RecordValidationError(f"{label} is required")
    if isinstance(value, Decimal):
        parsed = value
    else:
        cleaned = str(value).strip()
        if not cleaned:
            raise RecordValidationError(f"{label} is required")
        try:
            parsed = Decimal(cleaned)
        except InvalidOperation:
            raise RecordValidationError(
                f"{label} must be a number"
            ) from None
    if not parsed.is_finite():
        raise RecordValidationError(f"{label} must be a number")
    return parsed


def _require_text(value: str | None, label: str) -> None:
    if not value or not str(value).strip():
        raise RecordValidationError(f"{label} is required")


def validate_revenue_input(
    amount_charged: Decimal,
    amount_paid: Decimal,
    invoice_number: str | None,
    customer_name: str | None,
    category: str | None,
) -> None:
    """Reject revenue input that cannot be stored.

    Raises:
        RecordValidationError: On negative amounts or a missing invoice,
            customer name or category.
    """
    if amount_charged < 0:
        raise RecordValidationError("Amount charged must be positive")
    if amount_paid < 0:
        raise RecordValidationError("Amount paid must be positive")
    _require_text(invoice_number, "Invoice number")
    _require_text(customer_name, "Customer name")
    _require_text(category, "Category")


def validate_expense_input(
    amount: Decimal,
    description: str | None,
    expense_type: str,
    from_date: date | None = None,
    to_date: date | None = None,
) -> None:
    """Reject expense input that cannot be stored.

    Raises:
        RecordValidationError: On negative amounts, missing description,
            unknown type, or an inverted salary period.
    """
    if amount < 0:
        raise RecordValidationError("Amount must be positive")
    _require_text(description, "Description")
    if expense_type not in EXPENSE_TYPES:
        raise RecordValidationError(f"Unknown expense type: {expense_type}")
    if expense_type == EXPENSE_TYPE_DOCTOR_SALARY:
        if from_date is None or to_date is None:
            raise RecordValidationError(
                "Doctor salary requires a from and to date"
            )
        if from_date > to_date:
            raise RecordValidationError("From date must be before to date")


__all__ = [
    "RecordValidationError",
    "warn_on_overpayment",
    "parse_amount",
    "validate_revenue_input",
    "validate_expense_input",
]
