"""Use cases to record, edit and delete revenue and expense entries."""

from datetime import date

from src.application.ports.records_repository import RecordsRepositoryPort
from src.domain.constants import (
    EXPENSE_TYPE_DOCTOR_SALARY,
    EXPENSE_TYPE_NORMAL,
)
from src.domain.models import ExpenseRecord, RevenueRecord
from src.domain.services.validation import (
    parse_amount,
    validate_expense_input,
    validate_revenue_input,
    warn_on_overpayment,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import quantize_amount


class RecordEntriesUseCase:
    """Validate form input and write records through the repository.

    Amounts are parsed strictly: a missing or non numeric value raises
    ``RecordValidationError`` instead of being stored as zero.
    """

    def __init__(
        self,
        records_repository: RecordsRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            records_repository: Port providing revenue and expense records.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._records_repository = records_repository
        self._logger = logger or get_app_logger()

    def add_revenue(
        self,
        *,
        report_type: str,
        record_date: date,
        invoice_number: str,
        customer_name: str,
        category: str,
        amount_charged,
        amount_paid,
    ) -> RevenueRecord:
        """Validate and store a revenue record.

        Raises:
            RecordValidationError: On missing or negative amounts, or a
                missing invoice, customer name or category.
        """
        record = self._build_revenue(
            report_type=report_type,
            record_date=record_date,
            invoice_number=invoice_number,
            customer_name=customer_name,
            category=category,
            amount_charged=amount_charged,
            amount_paid=amount_paid,
        )
        saved = self._records_repository.add_revenue_record(record)
        self._logger.info(
            f"Stored revenue record id={saved.record_id} "
            f"invoice={saved.invoice_number} for {report_type}"
        )
        return saved

    def update_revenue(
        self,
        record_id: int,
        *,
        report_type: str,
        record_date: date,
        invoice_number: str,
        customer_name: str,
        category: str,
        amount_charged,
        amount_paid,
    ) -> RevenueRecord | None:
        """Validate and replace a revenue record.

        Returns:
            RevenueRecord | None: Updated record, None when the id is unknown.

        Raises:
            RecordValidationError: On invalid input.
        """
        record = self._build_revenue(
            report_type=report_type,
            record_date=record_date,
            invoice_number=invoice_number,
            customer_name=customer_name,
            category=category,
            amount_charged=amount_charged,
            amount_paid=amount_paid,
            record_id=record_id,
        )
        updated = self._records_repository.update_revenue_record(record)
        if updated is None:
            self._logger.warning(f"Revenue record id={record_id} not found")
        return updated

    def delete_revenue(self, record_id: int) -> bool:
        """Delete a revenue record, returning False when it was not found."""
        deleted = self._records_repository.delete_revenue_record(record_id)
        if not deleted:
            self._logger.warning(f"Revenue record id={record_id} not found")
        return deleted

    def add_expense(
        self,
        *,
        report_type: str,
        expense_date: date,
        description: str,
        amount,
        category: str | None = None,
    ) -> ExpenseRecord:
        """Validate and store a normal expense.

        Raises:
            RecordValidationError: On a missing or negative amount or an
                empty description.
        """
        value = parse_amount(amount, "Amount")
        validate_expense_input(value, description, EXPENSE_TYPE_NORMAL)
        expense = ExpenseRecord(
            date=expense_date,
            amount=quantize_amount(value),
            description=description.strip(),
            category=_clean(category),
            expense_type=EXPENSE_TYPE_NORMAL,
            report_type=report_type,
        )
        saved = self._records_repository.add_expense_record(expense)
        self._logger.info(
            f"Stored expense id={saved.record_id} amount={saved.amount} "
            f"for {report_type}"
        )
        return saved

    def update_expense(
        self,
        existing: ExpenseRecord,
        *,
        expense_date: date,
        description: str,
        amount,
        category: str | None = None,
    ) -> ExpenseRecord | None:
        """Validate and replace an expense.

        Doctor salary metadata (doctor, percentage, period, collections) is
        carried over from ``existing``; the edited amount becomes the new
        snapshot.

        Returns:
            ExpenseRecord | None: Updated expense, None when it no longer
            exists.

        Raises:
            RecordValidationError: On invalid input.
        """
        value = parse_amount(amount, "Amount")
        validate_expense_input(
            value,
            description,
            existing.expense_type,
            existing.from_date,
            existing.to_date,
        )
        expense = ExpenseRecord(
            date=expense_date,
            amount=quantize_amount(value),
            description=description.strip(),
            category=_clean(category),
            expense_type=existing.expense_type,
            doctor_name=existing.doctor_name,
            percentage=existing.percentage,
            calculated_from_records=existing.calculated_from_records,
            from_date=existing.from_date,
            to_date=existing.to_date,
            report_type=existing.report_type,
            record_id=existing.record_id,
        )
        if expense.expense_type == EXPENSE_TYPE_DOCTOR_SALARY:
            self._logger.info(
                f"Doctor salary id={existing.record_id} edited by hand: "
                f"{existing.amount} -> {expense.amount}"
            )
        updated = self._records_repository.update_expense_record(expense)
        if updated is None:
            self._logger.warning(f"Expense id={existing.record_id} not found")
        return updated

    def delete_expense(self, record_id: int) -> bool:
        """Delete an expense by id, returning False when it was not found."""
        deleted = self._records_repository.delete_expense_record(record_id)
        if not deleted:
            self._logger.warning(f"Expense id={record_id} not found")
        return deleted

    def _build_revenue(
        self,
        *,
        report_type: str,
        record_date: date,
        invoice_number: str,
        customer_name: str,
        category: str,
        amount_charged,
        amount_paid,
        record_id: int | None = None,
    ) -> RevenueRecord:
        charged = parse_amount(amount_charged, "Amount charged")
        paid = parse_amount(amount_paid, "Amount paid")
        validate_revenue_input(
            charged,
            paid,
            invoice_number,
            customer_name,
            category,
        )
        record = RevenueRecord(
            date=record_date,
            amount_charged=quantize_amount(charged),
            amount_paid=quantize_amount(paid),
            category=category.strip(),
            customer_name=customer_name.strip(),
            invoice_number=invoice_number.strip(),
            report_type=report_type,
            record_id=record_id,
        )
        warn_on_overpayment(record, self._logger)
        return record


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


__all__ = ["RecordEntriesUseCase"]
