"""Report presentation logic for the Streamlit UI.

This module contains pure, testable transformations from a
``FinancialReport`` produced by ``GetFinancialReportUseCase`` to
Altair-ready rows and table records. The UI is responsible for loading the
report (no IO here) and rendering what these helpers return.
"""

from decimal import Decimal

from src.domain.models import (
    CategoryAmount,
    ExpenseRecord,
    FinancialReport,
    MonthlyRow,
    RevenueRecord,
)
from src.domain.services.finance import profit_margin_band, record_amount
from src.domain.services.normalization import parse_record_datetime

MARGIN_COLORS = {
    "healthy": "#2e7d32",
    "fair": "#f4a261",
    "low": "#e76f51",
}

POSITIVE_COLOR = "#2e7d32"
NEGATIVE_COLOR = "#c62828"


def format_currency(value: Decimal, currency_code: str) -> str:
    """Format currency values for display."""
    return f"{currency_code} {value:,.2f}"


def format_signed(value: Decimal, currency_code: str) -> str:
    """Format a signed feed amount, e.g. ``+AFN 10.00`` or ``-AFN 5.00``."""
    sign = "+" if value >= 0 else "-"
    return f"{sign}{currency_code} {abs(value):,.2f}"


def amount_color(value: Decimal) -> str:
    """Return green for non negative amounts and red otherwise."""
    return POSITIVE_COLOR if value >= 0 else NEGATIVE_COLOR


def margin_color(margin: Decimal) -> str:
    """Return the colour of a profit margin bar."""
    return MARGIN_COLORS[profit_margin_band(margin)]


def prepare_monthly_chart_data(
    rows: list[MonthlyRow],
) -> list[dict[str, str | float | int]]:
    """Return long-form rows for a revenue/expenses/profit line chart.

    Each month yields three rows, one per series. ``order`` keeps the
    chronological month order on a nominal axis.
    """
    data: list[dict[str, str | float | int]] = []
    for order, row in enumerate(rows):
        for series, amount in (
            ("Revenue", row.revenue),
            ("Expenses", row.expenses),
            ("Profit", row.profit),
        ):
            data.append(
                {
                    "month": row.label,
                    "order": order,
                    "series": series,
                    "amount": float(amount),
                }
            )
    return data


def prepare_donut_chart_data(
    items: list[CategoryAmount],
    currency_code: str,
    max_categories: int = 6,
) -> tuple[list[dict[str, str | float]], Decimal]:
    """Prepare donut chart data with a Top-N + Other grouping.

    Args:
        items: Aggregated totals by category.
        currency_code: Currency used in labels.
        max_categories: Maximum categories to keep before grouping into Other.

    Returns:
        Tuple with Altair-ready chart data and the total amount.
    """
    sorted_items = sorted(items, key=lambda item: item.amount, reverse=True)
    top_items = sorted_items[:max_categories]
    other_amount = sum(
        (item.amount for item in sorted_items[max_categories:]),
        start=Decimal("0"),
    )
    if other_amount != 0:
        top_items = [
            *top_items,
            CategoryAmount(category="Other", amount=other_amount),
        ]
    total_amount = sum(
        (item.amount for item in sorted_items),
        start=Decimal("0"),
    )
    data: list[dict[str, str | float]] = []
    for item in top_items:
        share = (
            (item.amount / total_amount) * Decimal("100")
            if total_amount
            else Decimal("0")
        )
        data.append(
            {
                "category": item.category,
                "amount": float(item.amount),
                "amount_label": format_currency(item.amount, currency_code),
                "share_label": f"{share:.1f}%",
            }
        )
    return data, total_amount


def prepare_transaction_rows(
    report: FinancialReport,
    limit: int | None = None,
) -> list[dict[str, str]]:
    """Return table rows for the combined transactions feed."""
    currency_code = report.summary.currency_code
    entries = report.transactions[:limit] if limit else report.transactions
    rows = []
    for entry in entries:
        doctor_name = getattr(entry.record, "doctor_name", None)
        description = entry.description
        if doctor_name:
            description = f"{description} (Dr. {doctor_name})"
        rows.append(
            {
                "Date": (
                    entry.occurred_at.strftime("%b %d, %Y")
                    if entry.occurred_at
                    else "Invalid Date"
                ),
                "Type": entry.display_type,
                "Description": description,
                "Amount": format_signed(entry.amount, currency_code),
            }
        )
    return rows


def record_option_label(
    record: RevenueRecord | ExpenseRecord,
    currency_code: str,
) -> str:
    """Return the label of a record in the edit selector."""
    occurred_at = parse_record_datetime(record.date)
    day = occurred_at.strftime("%b %d, %Y") if occurred_at else "Invalid Date"
    amount = format_currency(record_amount(record), currency_code)
    if isinstance(record, RevenueRecord):
        who = record.customer_name or "Unknown customer"
        return f"{day} | {record.invoice_number} | {who} | {amount}"
    return f"{day} | {record.description} | {amount}"


__all__ = [
    "format_currency",
    "format_signed",
    "amount_color",
    "margin_color",
    "prepare_monthly_chart_data",
    "prepare_donut_chart_data",
    "prepare_transaction_rows",
    "record_option_label",
]
