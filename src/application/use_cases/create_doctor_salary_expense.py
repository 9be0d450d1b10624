"""Use case to create a doctor salary expense from collections."""

from datetime import date

from src.application.ports.records_repository import RecordsRepositoryPort
from src.domain.constants import EXPENSE_TYPE_DOCTOR_SALARY
from src.domain.models import ExpenseRecord
from src.domain.services.salary import (
    SalaryQuote,
    build_salary_expense,
    quote_doctor_salary,
)
from src.domain.services.validation import (
    RecordValidationError,
    validate_expense_input,
)
from src.infrastructure.logging.logger import get_app_logger


class CreateDoctorSalaryExpenseUseCase:
    """Derive a salary from collections over a sub-period and store it.

    The stored amount is a snapshot: editing revenue records afterwards does
    not change an expense that was already saved.
    """

    def __init__(
        self,
        records_repository: RecordsRepositoryPort,
        logger=None,
        report_type: str = "laboratory",
    ) -> None:
        """Initialize the use case.

        Args:
            records_repository: Port providing revenue and expense records.
            logger: Optional logger compatible with logging.Logger-like API.
            report_type: Department whose collections fund the salary.
        """
        self._records_repository = records_repository
        self._logger = logger or get_app_logger()
        self._report_type = report_type

    def quote(
        self,
        from_date: date,
        to_date: date,
        percentage=None,
    ) -> SalaryQuote:
        """Return the salary amount for the current percentage.

        Called again whenever the percentage changes in the creation form.

        Raises:
            RecordValidationError: When the period is inverted.
        """
        if from_date > to_date:
            raise RecordValidationError("From date must be before to date")
        records = self._records_repository.fetch_revenue_records(
            self._report_type,
            from_date,
            to_date,
        )
        quote = quote_doctor_salary(records, from_date, to_date, percentage)
        self._logger.info(
            f"Doctor salary quote: collected={quote.calculated_from_records}, "
            f"percentage={quote.percentage}, amount={quote.amount}"
        )
        return quote

    def execute(
        self,
        *,
        description: str,
        from_date: date,
        to_date: date,
        percentage=None,
        doctor_name: str | None = None,
        expense_date: date | None = None,
    ) -> ExpenseRecord:
        """Compute and persist the salary expense.

        Args:
            description: Expense description shown in tables.
            from_date: First day of the collections period.
            to_date: Last day of the collections period.
            percentage: Share of collections, clamped to [0, 100].
            doctor_name: Optional doctor name.
            expense_date: Date of the expense, today when omitted.

        Returns:
            ExpenseRecord: Stored expense with its id.

        Raises:
            RecordValidationError: On invalid input.
        """
        quote = self.quote(from_date, to_date, percentage)
        validate_expense_input(
            quote.amount,
            description,
            EXPENSE_TYPE_DOCTOR_SALARY,
            from_date,
            to_date,
        )
        expense = build_salary_expense(
            quote,
            expense_date=expense_date or date.today(),
            description=description,
            doctor_name=doctor_name,
            report_type=self._report_type,
        )
        saved = self._records_repository.add_expense_record(expense)
        self._logger.info(
            f"Stored doctor salary expense id={saved.record_id} "
            f"amount={saved.amount} for {self._report_type}"
        )
        return saved


__all__ = ["CreateDoctorSalaryExpenseUseCase", "SalaryQuote"]
