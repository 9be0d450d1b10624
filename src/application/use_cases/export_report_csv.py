"""Use case to export report records as comma-separated values."""

import csv
from dataclasses import dataclass
from datetime import date
import io

from src.application.ports.records_repository import RecordsRepositoryPort
from src.domain.models import ExpenseRecord, RevenueRecord
from src.domain.services.finance import filter_by_range
from src.domain.services.normalization import parse_record_datetime
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal, quantize_amount


CSV_COLUMNS = (
    "date",
    "kind",
    "category",
    "name",
    "invoice_number",
    "description",
    "amount_charged",
    "amount_paid",
    "amount",
)


@dataclass(frozen=True)
class CsvExport:
    """Exported file name, content and row count."""

    filename: str
    content: str
    row_count: int


def export_filename(report_type: str, today: date) -> str:
    """Return ``<report-type>-report-<yyyy-MM-dd>.csv``."""
    return f"{report_type}-report-{today.isoformat()}.csv"


class ExportReportCsvUseCase:
    """Serialize the filtered record set of a report to CSV."""

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

    def execute(
        self,
        report_type: str,
        start_date: date | None = None,
        end_date: date | None = None,
        today: date | None = None,
    ) -> CsvExport:
        """Return the CSV export for the period.

        Args:
            report_type: Department to export.
            start_date: Optional inclusive lower bound.
            end_date: Optional inclusive upper bound.
            today: Date used in the file name, defaults to today.

        Returns:
            CsvExport: File name and CSV text, revenue rows before expenses.
        """
        records = filter_by_range(
            self._records_repository.fetch_revenue_records(
                report_type,
                start_date,
                end_date,
            ),
            start_date,
            end_date,
        )
        expenses = filter_by_range(
            self._records_repository.fetch_expense_records(
                report_type,
                start_date,
                end_date,
            ),
            start_date,
            end_date,
        )

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_COLUMNS)
        for record in records:
            writer.writerow(_revenue_row(record))
        for expense in expenses:
            writer.writerow(_expense_row(expense))

        row_count = len(records) + len(expenses)
        filename = export_filename(report_type, today or date.today())
        self._logger.info(f"Exported {row_count} rows to {filename}")
        return CsvExport(
            filename=filename,
            content=buffer.getvalue(),
            row_count=row_count,
        )


def _format_date(value) -> str:
    parsed = parse_record_datetime(value)
    return parsed.date().isoformat() if parsed else ""


def _format_amount(value) -> str:
    return str(quantize_amount(coerce_decimal(value)))


def _revenue_row(record: RevenueRecord) -> list[str]:
    return [
        _format_date(record.date),
        "revenue",
        record.category or "",
        record.customer_name or "",
        record.invoice_number or "",
        "",
        _format_amount(record.amount_charged),
        _format_amount(record.amount_paid),
        _format_amount(record.amount_paid),
    ]


def _expense_row(record: ExpenseRecord) -> list[str]:
    return [
        _format_date(record.date),
        record.expense_type,
        record.category or "",
        record.doctor_name or "",
        "",
        record.description or "",
        "",
        "",
        _format_amount(record.amount),
    ]


__all__ = [
    "CSV_COLUMNS",
    "CsvExport",
    "ExportReportCsvUseCase",
    "export_filename",
]
