"""Port for reading and writing revenue and expense records."""

from datetime import date
from typing import Protocol

from src.domain.models import ExpenseRecord, RevenueRecord


class RecordsRepositoryPort(Protocol):
    """Port exposing the record store used by report pages and forms."""

    def prepare_storage(self) -> None:
        """Ensure the record tables exist."""

    def fetch_revenue_records(
        self,
        report_type: str,
        start_date: date | None,
        end_date: date | None,
    ) -> list[RevenueRecord]:
        """Return revenue records for a report type, most recent first."""

    def fetch_expense_records(
        self,
        report_type: str,
        start_date: date | None,
        end_date: date | None,
        expense_type: str | None = None,
    ) -> list[ExpenseRecord]:
        """Return expense records for a report type, most recent first."""

    def add_revenue_record(self, record: RevenueRecord) -> RevenueRecord:
        """Persist a revenue record and return it with its id."""

    def add_expense_record(self, record: ExpenseRecord) -> ExpenseRecord:
        """Persist an expense record and return it with its id."""

    def update_revenue_record(
        self,
        record: RevenueRecord,
    ) -> RevenueRecord | None:
        """Replace the stored revenue record with the same id.

        Returns None when no record has that id.
        """

    def update_expense_record(
        self,
        record: ExpenseRecord,
    ) -> ExpenseRecord | None:
        """Replace the stored expense record with the same id.

        Returns None when no record has that id.
        """

    def delete_revenue_record(self, record_id: int) -> bool:
        """Delete a revenue record, returning False when it does not exist."""

    def delete_expense_record(self, record_id: int) -> bool:
        """Delete an expense record, returning False when it does not exist."""


__all__ = ["RecordsRepositoryPort"]
