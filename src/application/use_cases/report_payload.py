"""Serialize financial reports into the report API payload."""

from datetime import date, datetime
from decimal import Decimal

from src.domain.models import ExpenseRecord, FinancialReport, RevenueRecord
from src.domain.services.normalization import parse_record_datetime
from src.utils.decimal_utils import coerce_decimal


def build_report_payload(report: FinancialReport) -> dict:
    """Return the JSON-ready payload for a report.

    The shape is a ``summary`` scalar block, ``dailyData`` and
    ``monthlyData`` series, and the raw ``records`` and ``expenses`` arrays
    for drill-down tables.

    Args:
        report: Computed financial report.

    Returns:
        dict: Payload with float amounts and ISO-8601 dates.
    """
    summary = report.summary
    return {
        "reportType": report.report_type,
        "startDate": _iso(report.start_date),
        "endDate": _iso(report.end_date),
        "summary": {
            "totalIncome": _amount(summary.total_income),
            "totalExpenses": _amount(summary.total_expenses),
            "netProfit": _amount(summary.net_profit),
            "profitMargin": _amount(summary.profit_margin),
            "totalRecords": summary.total_records,
            "totalExpenseItems": summary.total_expense_items,
            "totalCharged": _amount(summary.total_charged),
            "outstandingBalance": _amount(summary.outstanding_balance),
            "currency": summary.currency_code,
        },
        "dailyData": [
            {
                "date": row.day.isoformat(),
                "income": _amount(row.income),
                "expenses": _amount(row.expenses),
                "records": row.records,
            }
            for row in report.daily
        ],
        "monthlyData": [
            {
                "month": row.label,
                "revenue": _amount(row.revenue),
                "expenses": _amount(row.expenses),
                "profit": _amount(row.profit),
            }
            for row in report.monthly
        ],
        "records": [_revenue_payload(record) for record in report.records],
        "expenses": [_expense_payload(record) for record in report.expenses],
    }


def _revenue_payload(record: RevenueRecord) -> dict:
    return {
        "id": record.record_id,
        "date": _iso(record.date),
        "customerName": record.customer_name,
        "invoiceNumber": record.invoice_number,
        "category": record.category,
        "amountCharged": _amount(record.amount_charged),
        "amountPaid": _amount(record.amount_paid),
        "balanceDue": _amount(record.balance_due),
    }


def _expense_payload(record: ExpenseRecord) -> dict:
    return {
        "id": record.record_id,
        "date": _iso(record.date),
        "description": record.description,
        "category": record.category,
        "expenseType": record.expense_type,
        "amount": _amount(record.amount),
        "doctorName": record.doctor_name,
        "percentage": (
            _amount(record.percentage)
            if record.percentage is not None
            else None
        ),
        "calculatedFromRecords": (
            _amount(record.calculated_from_records)
            if record.calculated_from_records is not None
            else None
        ),
        "fromDate": _iso(record.from_date),
        "toDate": _iso(record.to_date),
    }


def _amount(value: Decimal | None) -> float:
    return float(coerce_decimal(value))


def _iso(value) -> str | None:
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    parsed = parse_record_datetime(value)
    return parsed.isoformat() if parsed else None


__all__ = ["build_report_payload"]
