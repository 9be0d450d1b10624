"""Use case to compute a financial report for a period."""

from datetime import date

from src.application.ports.records_repository import RecordsRepositoryPort
from src.domain.models import FinancialReport
from src.domain.services.finance import (
    category_breakdown,
    combined_transaction_feed,
    compute_financial_summary,
    daily_series,
    expense_type_breakdown,
    filter_by_range,
    monthly_series,
)
from src.infrastructure.logging.logger import get_app_logger


class GetFinancialReportUseCase:
    """Compute summary, series and drill-down data for a report page."""

    def __init__(
        self,
        records_repository: RecordsRepositoryPort,
        logger=None,
        currency_code: str = "AFN",
    ) -> None:
        """Initialize the use case.

        Args:
            records_repository: Port providing revenue and expense records.
            logger: Optional logger compatible with logging.Logger-like API.
            currency_code: Currency the stored amounts are expressed in.
        """
        self._records_repository = records_repository
        self._logger = logger or get_app_logger()
        self._currency_code = currency_code

    def execute(
        self,
        report_type: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> FinancialReport:
        """Return the financial report for the period.

        Args:
            report_type: Department to report on (laboratory, pharmacy, ...).
            start_date: Optional inclusive lower bound.
            end_date: Optional inclusive upper bound.

        Returns:
            FinancialReport: Summary totals, daily and monthly series,
            breakdowns and the raw records.
        """
        if start_date and end_date and start_date > end_date:
            self._logger.warning(
                f"Start date {start_date} is after end date {end_date}; "
                "swapping bounds"
            )
            start_date, end_date = end_date, start_date

        fetched_records = self._records_repository.fetch_revenue_records(
            report_type,
            start_date,
            end_date,
        )
        fetched_expenses = self._records_repository.fetch_expense_records(
            report_type,
            start_date,
            end_date,
        )
        records = filter_by_range(fetched_records, start_date, end_date)
        expenses = filter_by_range(fetched_expenses, start_date, end_date)
        dropped = (
            len(fetched_records) - len(records)
            + len(fetched_expenses) - len(expenses)
        )
        if dropped:
            self._logger.warning(
                f"Excluded {dropped} {report_type} rows outside the period "
                "or without a valid date"
            )
        self._logger.info(
            f"Fetched {len(records)} revenue records and {len(expenses)} "
            f"expenses for {report_type}"
        )

        summary = compute_financial_summary(
            records,
            expenses,
            currency_code=self._currency_code,
            logger=self._logger,
        )
        self._logger.info(
            f"Report totals computed: income={summary.total_income}, "
            f"expenses={summary.total_expenses}, "
            f"report_type={report_type}"
        )
        return FinancialReport(
            report_type=report_type,
            start_date=start_date,
            end_date=end_date,
            summary=summary,
            daily=daily_series(records, expenses, logger=self._logger),
            monthly=monthly_series(records, expenses, logger=self._logger),
            revenue_by_category=category_breakdown(records),
            expenses_by_type=expense_type_breakdown(expenses),
            transactions=combined_transaction_feed(records, expenses),
            records=records,
            expenses=expenses,
        )


__all__ = ["GetFinancialReportUseCase", "FinancialReport"]
