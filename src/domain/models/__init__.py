"""Domain models package."""

from .finance import (
    CategoryAmount,
    DailyRow,
    FinancialReport,
    FinancialSummary,
    MonthKey,
    MonthlyRow,
    TransactionEntry,
    margin_percentage,
)
from .records import ExpenseRecord, RecordDate, RevenueRecord

__all__ = [
    "RevenueRecord",
    "ExpenseRecord",
    "RecordDate",
    "MonthKey",
    "MonthlyRow",
    "DailyRow",
    "CategoryAmount",
    "TransactionEntry",
    "FinancialSummary",
    "FinancialReport",
    "margin_percentage",
]
