"""Domain package for business rules and core models."""

from .constants import (
    EXPENSE_TYPE_DOCTOR_SALARY,
    EXPENSE_TYPE_NORMAL,
    EXPENSE_TYPES,
    REPORT_TYPES,
)
from .models import (
    CategoryAmount,
    DailyRow,
    ExpenseRecord,
    FinancialReport,
    FinancialSummary,
    MonthKey,
    MonthlyRow,
    RevenueRecord,
    TransactionEntry,
)
from .services import (
    RecordValidationError,
    combined_transaction_feed,
    compute_financial_summary,
    filter_by_range,
    group_by,
    monthly_series,
    net_profit,
    profit_margin,
    total_expenses,
    total_revenue,
)

__all__ = [
    "EXPENSE_TYPE_DOCTOR_SALARY",
    "EXPENSE_TYPE_NORMAL",
    "EXPENSE_TYPES",
    "REPORT_TYPES",
    "CategoryAmount",
    "DailyRow",
    "ExpenseRecord",
    "FinancialReport",
    "FinancialSummary",
    "MonthKey",
    "MonthlyRow",
    "RevenueRecord",
    "TransactionEntry",
    "RecordValidationError",
    "combined_transaction_feed",
    "compute_financial_summary",
    "filter_by_range",
    "group_by",
    "monthly_series",
    "net_profit",
    "profit_margin",
    "total_expenses",
    "total_revenue",
]
