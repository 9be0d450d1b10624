"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.records_repository import RecordsRepositoryPort
from src.application.use_cases.create_doctor_salary_expense import (
    CreateDoctorSalaryExpenseUseCase,
)
from src.application.use_cases.export_report_csv import ExportReportCsvUseCase
from src.application.use_cases.get_financial_report import (
    GetFinancialReportUseCase,
)
from src.application.use_cases.record_entries import RecordEntriesUseCase
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.records_repository import SqlAlchemyRecordsRepository
from src.infrastructure.settings import DashboardSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_records_repository(
    db_port: DatabaseEnginePort | None = None,
) -> RecordsRepositoryPort:
    """Return the record store repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyRecordsRepository(resolved_db, logger=get_app_logger())


def build_report_use_case(
    repository: RecordsRepositoryPort | None = None,
    settings: DashboardSettings | None = None,
) -> GetFinancialReportUseCase:
    """Return the report use case wired to the configured store."""
    resolved_settings = settings or DashboardSettings.from_env()
    return GetFinancialReportUseCase(
        repository or build_records_repository(),
        logger=get_app_logger(),
        currency_code=resolved_settings.currency_code,
    )


def build_export_use_case(
    repository: RecordsRepositoryPort | None = None,
) -> ExportReportCsvUseCase:
    """Return the CSV export use case."""
    return ExportReportCsvUseCase(
        repository or build_records_repository(),
        logger=get_app_logger(),
    )


def build_salary_use_case(
    report_type: str,
    repository: RecordsRepositoryPort | None = None,
) -> CreateDoctorSalaryExpenseUseCase:
    """Return the doctor salary use case for a report type."""
    return CreateDoctorSalaryExpenseUseCase(
        repository or build_records_repository(),
        logger=get_app_logger(),
        report_type=report_type,
    )


def build_record_entries_use_case(
    repository: RecordsRepositoryPort | None = None,
) -> RecordEntriesUseCase:
    """Return the use case writing revenue and expense entries."""
    return RecordEntriesUseCase(
        repository or build_records_repository(),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_records_repository",
    "build_report_use_case",
    "build_export_use_case",
    "build_salary_use_case",
    "build_record_entries_use_case",
]
