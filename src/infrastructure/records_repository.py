"""SQLAlchemy-backed store for revenue and expense records."""

from dataclasses import replace
from datetime import date, datetime, time

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Integer,
    MetaData,
    Numeric,
    Select,
    String,
    Table,
    delete,
    insert,
    select,
    update,
)

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.records_repository import RecordsRepositoryPort
from src.domain.models import ExpenseRecord, RevenueRecord
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal


metadata = MetaData()

revenue_records_table = Table(
    "revenue_records",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("report_type", String(32), nullable=False, index=True),
    Column("date", DateTime, nullable=False, index=True),
    Column("customer_name", String(255)),
    Column("invoice_number", String(64), nullable=False, unique=True),
    Column("category", String(128)),
    Column("amount_charged", Numeric(12, 2), nullable=False),
    Column("amount_paid", Numeric(12, 2), nullable=False),
)

expense_records_table = Table(
    "expense_records",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("report_type", String(32), nullable=False, index=True),
    Column("date", DateTime, nullable=False, index=True),
    Column("description", String(500), nullable=False),
    Column("category", String(128)),
    Column("expense_type", String(32), nullable=False),
    Column("amount", Numeric(12, 2), nullable=False),
    Column("doctor_name", String(255)),
    Column("percentage", Numeric(5, 2)),
    Column("calculated_from_records", Numeric(12, 2)),
    Column("from_date", Date),
    Column("to_date", Date),
)


class SqlAlchemyRecordsRepository(RecordsRepositoryPort):
    """Record store backed by SQLAlchemy."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the records engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def prepare_storage(self) -> None:
        """Ensure the record tables exist."""
        engine = self._db_port.get_records_engine()
        metadata.create_all(engine)
        self._logger.info("Record tables are ready")

    def fetch_revenue_records(
        self,
        report_type: str,
        start_date: date | None,
        end_date: date | None,
    ) -> list[RevenueRecord]:
        query = self._build_query(
            revenue_records_table,
            report_type,
            start_date,
            end_date,
        )
        engine = self._db_port.get_records_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return [
            RevenueRecord(
                date=row.date,
                amount_charged=coerce_decimal(row.amount_charged),
                amount_paid=coerce_decimal(row.amount_paid),
                category=row.category,
                customer_name=row.customer_name,
                invoice_number=row.invoice_number,
                report_type=row.report_type,
                record_id=row.id,
            )
            for row in rows
        ]

    def fetch_expense_records(
        self,
        report_type: str,
        start_date: date | None,
        end_date: date | None,
        expense_type: str | None = None,
    ) -> list[ExpenseRecord]:
        query = self._build_query(
            expense_records_table,
            report_type,
            start_date,
            end_date,
        )
        if expense_type:
            query = query.where(
                expense_records_table.c.expense_type == expense_type
            )
        engine = self._db_port.get_records_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return [
            ExpenseRecord(
                date=row.date,
                amount=coerce_decimal(row.amount),
                description=row.description or "",
                category=row.category,
                expense_type=row.expense_type,
                doctor_name=row.doctor_name,
                percentage=(
                    coerce_decimal(row.percentage)
                    if row.percentage is not None
                    else None
                ),
                calculated_from_records=(
                    coerce_decimal(row.calculated_from_records)
                    if row.calculated_from_records is not None
                    else None
                ),
                from_date=row.from_date,
                to_date=row.to_date,
                report_type=row.report_type,
                record_id=row.id,
            )
            for row in rows
        ]

    def add_revenue_record(self, record: RevenueRecord) -> RevenueRecord:
        engine = self._db_port.get_records_engine()
        with engine.begin() as conn:
            result = conn.execute(
                insert(revenue_records_table),
                _revenue_values(record),
            )
            record_id = result.inserted_primary_key[0]
        return _with_id(record, record_id)

    def add_expense_record(self, record: ExpenseRecord) -> ExpenseRecord:
        engine = self._db_port.get_records_engine()
        with engine.begin() as conn:
            result = conn.execute(
                insert(expense_records_table),
                _expense_values(record),
            )
            record_id = result.inserted_primary_key[0]
        return _with_id(record, record_id)

    def update_revenue_record(
        self,
        record: RevenueRecord,
    ) -> RevenueRecord | None:
        updated = self._update_row(
            revenue_records_table,
            record.record_id,
            _revenue_values(record),
        )
        return record if updated else None

    def update_expense_record(
        self,
        record: ExpenseRecord,
    ) -> ExpenseRecord | None:
        updated = self._update_row(
            expense_records_table,
            record.record_id,
            _expense_values(record),
        )
        return record if updated else None

    def delete_revenue_record(self, record_id: int) -> bool:
        return self._delete_row(revenue_records_table, record_id)

    def delete_expense_record(self, record_id: int) -> bool:
        return self._delete_row(expense_records_table, record_id)

    def _update_row(self, table: Table, record_id: int | None, values) -> bool:
        if record_id is None:
            return False
        statement = (
            update(table).where(table.c.id == record_id).values(values)
        )
        engine = self._db_port.get_records_engine()
        with engine.begin() as conn:
            changed = conn.execute(statement).rowcount
        if changed:
            self._logger.info(f"Updated {table.name} id={record_id}")
        return changed > 0

    def _delete_row(self, table: Table, record_id: int) -> bool:
        statement = delete(table).where(table.c.id == record_id)
        engine = self._db_port.get_records_engine()
        with engine.begin() as conn:
            deleted = conn.execute(statement).rowcount
        if deleted:
            self._logger.info(f"Deleted {table.name} id={record_id}")
        return deleted > 0

    @staticmethod
    def _build_query(
        table: Table,
        report_type: str,
        start_date: date | None,
        end_date: date | None,
    ) -> Select:
        query = select(table).where(table.c.report_type == report_type)
        if start_date:
            query = query.where(
                table.c.date >= datetime.combine(start_date, time.min)
            )
        if end_date:
            query = query.where(
                table.c.date <= datetime.combine(end_date, time.max)
            )
        return query.order_by(table.c.date.desc(), table.c.id.desc())


def _as_datetime(value) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    return datetime.fromisoformat(str(value))


def _revenue_values(record: RevenueRecord) -> dict:
    return {
        "report_type": record.report_type,
        "date": _as_datetime(record.date),
        "customer_name": record.customer_name,
        "invoice_number": record.invoice_number,
        "category": record.category,
        "amount_charged": record.amount_charged,
        "amount_paid": record.amount_paid,
    }


def _expense_values(record: ExpenseRecord) -> dict:
    return {
        "report_type": record.report_type,
        "date": _as_datetime(record.date),
        "description": record.description,
        "category": record.category,
        "expense_type": record.expense_type,
        "amount": record.amount,
        "doctor_name": record.doctor_name,
        "percentage": record.percentage,
        "calculated_from_records": record.calculated_from_records,
        "from_date": record.from_date,
        "to_date": record.to_date,
    }


def _with_id(record, record_id):
    return replace(record, record_id=record_id)


__all__ = [
    "SqlAlchemyRecordsRepository",
    "metadata",
    "revenue_records_table",
    "expense_records_table",
]
