"""Application use cases package."""

from .create_doctor_salary_expense import (
    CreateDoctorSalaryExpenseUseCase,
    SalaryQuote,
)
from .export_report_csv import CsvExport, ExportReportCsvUseCase
from .get_financial_report import FinancialReport, GetFinancialReportUseCase
from .record_entries import RecordEntriesUseCase
from .report_payload import build_report_payload

__all__ = [
    "CreateDoctorSalaryExpenseUseCase",
    "SalaryQuote",
    "CsvExport",
    "ExportReportCsvUseCase",
    "FinancialReport",
    "GetFinancialReportUseCase",
    "RecordEntriesUseCase",
    "build_report_payload",
]
