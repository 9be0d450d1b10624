"""Domain services package."""

from .finance import (
    category_breakdown,
    combined_transaction_feed,
    compute_financial_summary,
    daily_series,
    expense_type_breakdown,
    filter_by_range,
    group_by,
    monthly_series,
    net_profit,
    profit_margin,
    profit_margin_band,
    total_expenses,
    total_revenue,
)
from .normalization import (
    normalize_bound,
    normalize_category,
    parse_record_datetime,
)
from .salary import (
    SalaryQuote,
    build_salary_expense,
    clamp_percentage,
    quote_doctor_salary,
    salary_amount,
)
from .validation import (
    RecordValidationError,
    parse_amount,
    validate_expense_input,
    validate_revenue_input,
    warn_on_overpayment,
)

__all__ = [
    "category_breakdown",
    "combined_transaction_feed",
    "compute_financial_summary",
    "daily_series",
    "expense_type_breakdown",
    "filter_by_range",
    "group_by",
    "monthly_series",
    "net_profit",
    "profit_margin",
    "profit_margin_band",
    "total_expenses",
    "total_revenue",
    "normalize_bound",
    "normalize_category",
    "parse_record_datetime",
    "SalaryQuote",
    "build_salary_expense",
    "clamp_percentage",
    "quote_doctor_salary",
    "salary_amount",
    "RecordValidationError",
    "parse_amount",
    "validate_expense_input",
    "validate_revenue_input",
    "warn_on_overpayment",
]
