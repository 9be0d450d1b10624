"""Streamlit dashboard entry point."""

from datetime import date, timedelta

import streamlit as st
import altair as alt
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.adapters.interface.streamlit.report_charts import (
    amount_color,
    format_currency,
    margin_color,
    prepare_donut_chart_data,
    prepare_monthly_chart_data,
    prepare_transaction_rows,
    record_option_label,
)
from src.application.use_cases.export_report_csv import CsvExport
from src.application.use_cases.get_financial_report import FinancialReport
from src.domain.models import ExpenseRecord, RevenueRecord
from src.domain.services.normalization import parse_record_datetime
from src.domain.services.validation import RecordValidationError
from src.infrastructure.container import (
    build_export_use_case,
    build_record_entries_use_case,
    build_report_use_case,
    build_salary_use_case,
)
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger
from src.infrastructure.settings import DashboardSettings


PERIODS = ["MTD", "Last 30 Days", "QTD", "YTD", "All Time", "Custom"]

# Failures that leave the page usable once the database is reachable again.
RETRYABLE_ERRORS = (SQLAlchemyError, RuntimeError)


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Return whether numpy and pandas are importable for Altair."""
    try:
        import numpy
        import pandas
    except ImportError as exc:
        return False, f"Altair charts need numpy and pandas: {exc}"
    if not hasattr(numpy, "ndarray"):
        return False, "numpy import is incomplete (missing ndarray)."
    if not hasattr(pandas, "Timestamp"):
        return False, "pandas import is incomplete (missing Timestamp)."
    return True, None


def _fetch_report(
    report_type: str,
    start_date: date | None,
    end_date: date | None,
) -> FinancialReport:
    """Fetch the financial report from the record store."""
    use_case = build_report_use_case()
    return use_case.execute(report_type, start_date, end_date)


@st.cache_data(show_spinner=False, ttl=60)
def _load_report(
    report_type: str,
    start_date: date | None,
    end_date: date | None,
    schema_version: int = 1,
) -> FinancialReport:
    """Cached wrapper around _fetch_report."""
    _ = schema_version
    return _fetch_report(report_type, start_date, end_date)


def _fetch_export(
    report_type: str,
    start_date: date | None,
    end_date: date | None,
) -> CsvExport:
    """Build the CSV export for the period."""
    return build_export_use_case().execute(report_type, start_date, end_date)


def _get_period_bounds(
    period: str,
    today: date,
) -> tuple[date | None, date | None]:
    """Return the inclusive bounds for the selected period."""
    if period == "All Time":
        return None, None
    if period == "YTD":
        return date(today.year, 1, 1), today
    if period == "MTD":
        return date(today.year, today.month, 1), today
    if period == "QTD":
        quarter = (today.month - 1) // 3
        return date(today.year, quarter * 3 + 1, 1), today
    if period == "Last 30 Days":
        return today - timedelta(days=29), today
    return None, None


def _render_summary(report: FinancialReport) -> None:
    """Render the summary metrics row."""
    summary = report.summary
    currency = summary.currency_code
    income_col, expenses_col, profit_col, margin_col = st.columns(4)
    income_col.metric(
        "Total Income",
        format_currency(summary.total_income, currency),
        f"{summary.total_records} records",
        delta_color="off",
    )
    expenses_col.metric(
        "Total Expenses",
        format_currency(summary.total_expenses, currency),
        f"{summary.total_expense_items} items",
        delta_color="off",
    )
    net = summary.net_profit
    profit_col.metric("Net Profit", format_currency(net, currency))
    profit_col.markdown(
        f"<span style='color:{amount_color(net)}'>"
        f"{'Profit' if net >= 0 else 'Loss'}</span>",
        unsafe_allow_html=True,
    )
    margin = summary.profit_margin
    margin_col.metric("Profit Margin", f"{margin:.1f}%")
    margin_col.markdown(
        f"<span style='color:{margin_color(margin)}'>"
        f"Outstanding: {format_currency(summary.outstanding_balance, currency)}"
        "</span>",
        unsafe_allow_html=True,
    )


def _render_monthly_chart(report: FinancialReport) -> None:
    """Render revenue, expenses and profit per month."""
    st.subheader("Monthly Trend")
    if not report.monthly:
        st.info("No monthly data available for this period.")
        return
    data = prepare_monthly_chart_data(report.monthly)
    chart = alt.Chart(alt.Data(values=data)).mark_line(point=True).encode(
        x=alt.X(
            "month:N",
            sort=alt.EncodingSortField(field="order", op="min"),
            title=None,
        ),
        y=alt.Y("amount:Q", title=report.summary.currency_code),
        color=alt.Color(
            "series:N",
            scale=alt.Scale(
                domain=["Revenue", "Expenses", "Profit"],
                range=["#2e7d32", "#c62828", "#1b9aaa"],
            ),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[
            alt.Tooltip("month:N"),
            alt.Tooltip("series:N"),
            alt.Tooltip("amount:Q", format=",.2f"),
        ],
    )
    st.altair_chart(chart, use_container_width=True)


def _render_donut(
    report: FinancialReport,
    title: str,
    by_expense_type: bool,
    chart_size: int = 300,
) -> None:
    """Render a donut chart of a category breakdown."""
    items = (
        report.expenses_by_type
        if by_expense_type
        else report.revenue_by_category
    )
    st.subheader(title)
    if not items:
        st.info("No data available for the chart.")
        return
    data, _ = prepare_donut_chart_data(
        items,
        report.summary.currency_code,
    )
    chart = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.35,
        cornerRadius=6,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            legend=alt.Legend(orient="bottom", title=None, columns=2),
        ),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    ).properties(width=chart_size, height=chart_size)
    st.altair_chart(chart, use_container_width=True)


def _render_transactions(report: FinancialReport) -> None:
    """Render the combined transaction feed."""
    st.subheader("Transactions")
    st.caption(f"{len(report.transactions)} transactions")
    rows = prepare_transaction_rows(report)
    if not rows:
        st.info("No transactions in this period.")
        return
    st.dataframe(rows, use_container_width=True, hide_index=True, height=420)


def _render_export(
    report_type: str,
    start_date: date | None,
    end_date: date | None,
) -> None:
    """Render the CSV download button."""
    export = _fetch_export(report_type, start_date, end_date)
    clicked = st.download_button(
        "Export CSV",
        data=export.content,
        file_name=export.filename,
        mime="text/csv",
    )
    if clicked:
        get_usage_logger().info(f"CSV export downloaded: {export.filename}")


def _render_salary_form(report_type: str, currency_code: str) -> None:
    """Render the doctor salary form with a live amount preview."""
    with st.expander("Record doctor salary"):
        today = date.today()
        from_col, to_col = st.columns(2)
        from_date = from_col.date_input(
            "From",
            value=date(today.year, today.month, 1),
            key="salary_from",
        )
        to_date = to_col.date_input("To", value=today, key="salary_to")
        percentage = st.slider(
            "Percentage of collections",
            min_value=0,
            max_value=100,
            value=40,
            key="salary_percentage",
        )
        doctor_name = st.text_input("Doctor name", key="salary_doctor")
        description = st.text_input(
            "Description",
            value="Doctor salary",
            key="salary_description",
        )
        use_case = build_salary_use_case(report_type)
        try:
            quote = use_case.quote(from_date, to_date, percentage)
        except RecordValidationError as exc:
            st.error(str(exc))
            return
        st.caption(
            "Collected in period: "
            f"{format_currency(quote.calculated_from_records, currency_code)}"
            f" -> salary {format_currency(quote.amount, currency_code)}"
        )
        if st.button("Save salary expense", key="salary_save"):
            try:
                saved = use_case.execute(
                    description=description,
                    from_date=from_date,
                    to_date=to_date,
                    percentage=percentage,
                    doctor_name=doctor_name or None,
                )
            except RecordValidationError as exc:
                st.error(str(exc))
                return
            st.success(
                f"Saved salary expense of "
                f"{format_currency(saved.amount, currency_code)}"
            )
            st.cache_data.clear()


def _amount_input(column, label: str, key: str, value=None):
    """Render an amount field that starts empty for new entries."""
    return column.number_input(
        label,
        min_value=0.0,
        value=value,
        step=10.0,
        format="%.2f",
        key=key,
    )


def _kept_datetime(original, edited: date):
    """Keep the stored time of day unless the date itself was changed."""
    if original is not None and original.date() == edited:
        return original
    return edited


def _report_write(found: bool, message: str) -> None:
    """Show the outcome of an edit and refresh cached reports."""
    if found:
        st.success(message)
        get_usage_logger().info(message)
    else:
        st.warning("The record no longer exists.")
    st.cache_data.clear()


def _render_revenue_form(report_type: str) -> None:
    """Render the form recording a new revenue entry."""
    with st.expander("Record revenue"):
        left, right = st.columns(2)
        record_date = left.date_input(
            "Date",
            value=date.today(),
            key="revenue_date",
        )
        invoice_number = right.text_input(
            "Invoice number",
            key="revenue_invoice",
        )
        customer_name = left.text_input(
            "Customer name",
            key="revenue_customer",
        )
        category = right.text_input("Category", key="revenue_category")
        amount_charged = _amount_input(
            left,
            "Amount charged",
            "revenue_charged",
        )
        amount_paid = _amount_input(right, "Amount paid", "revenue_paid")
        if not st.button("Save revenue", key="revenue_save"):
            return
        use_case = build_record_entries_use_case()
        try:
            saved = use_case.add_revenue(
                report_type=report_type,
                record_date=record_date,
                invoice_number=invoice_number,
                customer_name=customer_name,
                category=category,
                amount_charged=amount_charged,
                amount_paid=amount_paid,
            )
        except RecordValidationError as exc:
            st.error(str(exc))
            return
        except IntegrityError:
            st.error(f"Invoice {invoice_number.strip()} already exists.")
            return
        _report_write(True, f"Saved invoice {saved.invoice_number}")


def _render_expense_form(report_type: str) -> None:
    """Render the form recording a normal expense."""
    with st.expander("Record expense"):
        left, right = st.columns(2)
        expense_date = left.date_input(
            "Date",
            value=date.today(),
            key="expense_date",
        )
        amount = _amount_input(right, "Amount", "expense_amount")
        description = left.text_input("Description", key="expense_description")
        category = right.text_input("Category", key="expense_category")
        if not st.button("Save expense", key="expense_save"):
            return
        try:
            saved = build_record_entries_use_case().add_expense(
                report_type=report_type,
                expense_date=expense_date,
                description=description,
                amount=amount,
                category=category,
            )
        except RecordValidationError as exc:
            st.error(str(exc))
            return
        _report_write(True, f"Saved expense {saved.description}")


def _render_revenue_edit(use_case, record: RevenueRecord) -> None:
    """Render edit and delete controls for one revenue record."""
    prefix = f"edit_revenue_{record.record_id}"
    original = parse_record_datetime(record.date)
    left, right = st.columns(2)
    edited_date = left.date_input(
        "Date",
        value=original.date() if original else date.today(),
        key=f"{prefix}_date",
    )
    invoice_number = right.text_input(
        "Invoice number",
        value=record.invoice_number or "",
        key=f"{prefix}_invoice",
    )
    customer_name = left.text_input(
        "Customer name",
        value=record.customer_name or "",
        key=f"{prefix}_customer",
    )
    category = right.text_input(
        "Category",
        value=record.category or "",
        key=f"{prefix}_category",
    )
    amount_charged = _amount_input(
        left,
        "Amount charged",
        f"{prefix}_charged",
        value=float(record.amount_charged),
    )
    amount_paid = _amount_input(
        right,
        "Amount paid",
        f"{prefix}_paid",
        value=float(record.amount_paid),
    )
    save_col, delete_col = st.columns(2)
    if save_col.button("Save changes", key=f"{prefix}_save"):
        try:
            updated = use_case.update_revenue(
                record.record_id,
                report_type=record.report_type,
                record_date=_kept_datetime(original, edited_date),
                invoice_number=invoice_number,
                customer_name=customer_name,
                category=category,
                amount_charged=amount_charged,
                amount_paid=amount_paid,
            )
        except RecordValidationError as exc:
            st.error(str(exc))
            return
        except IntegrityError:
            st.error(f"Invoice {invoice_number.strip()} already exists.")
            return
        _report_write(
            updated is not None,
            f"Updated invoice {invoice_number.strip()}",
        )
    if delete_col.button("Delete", key=f"{prefix}_delete"):
        _report_write(
            use_case.delete_revenue(record.record_id),
            f"Deleted invoice {record.invoice_number}",
        )


def _render_expense_edit(use_case, expense: ExpenseRecord) -> None:
    """Render edit and delete controls for one expense."""
    prefix = f"edit_expense_{expense.record_id}"
    original = parse_record_datetime(expense.date)
    if expense.is_doctor_salary:
        st.caption(
            f"Doctor salary for {expense.doctor_name or 'unnamed doctor'}, "
            f"{expense.percentage}% of collections "
            f"{expense.from_date} to {expense.to_date}"
        )
    left, right = st.columns(2)
    edited_date = left.date_input(
        "Date",
        value=original.date() if original else date.today(),
        key=f"{prefix}_date",
    )
    amount = _amount_input(
        right,
        "Amount",
        f"{prefix}_amount",
        value=float(expense.amount),
    )
    description = left.text_input(
        "Description",
        value=expense.description,
        key=f"{prefix}_description",
    )
    category = right.text_input(
        "Category",
        value=expense.category or "",
        key=f"{prefix}_category",
    )
    save_col, delete_col = st.columns(2)
    if save_col.button("Save changes", key=f"{prefix}_save"):
        try:
            updated = use_case.update_expense(
                expense,
                expense_date=_kept_datetime(original, edited_date),
                description=description,
                amount=amount,
                category=category,
            )
        except RecordValidationError as exc:
            st.error(str(exc))
            return
        _report_write(
            updated is not None,
            f"Updated expense {description.strip()}",
        )
    if delete_col.button("Delete", key=f"{prefix}_delete"):
        _report_write(
            use_case.delete_expense(expense.record_id),
            f"Deleted expense {expense.description}",
        )


def _render_manage_records(
    report: FinancialReport,
    currency_code: str,
) -> None:
    """Render the selector used to edit or delete stored records."""
    with st.expander("Edit or delete records"):
        kind = st.radio(
            "Records",
            ["Revenue", "Expenses"],
            horizontal=True,
            key="manage_kind",
        )
        items = report.records if kind == "Revenue" else report.expenses
        by_id = {
            item.record_id: item
            for item in items
            if item.record_id is not None
        }
        if not by_id:
            st.info("No stored records in this period.")
            return
        record_id = st.selectbox(
            "Record",
            list(by_id),
            format_func=lambda key: record_option_label(
                by_id[key],
                currency_code,
            ),
            key=f"manage_{kind.lower()}",
        )
        use_case = build_record_entries_use_case()
        selected = by_id[record_id]
        if isinstance(selected, RevenueRecord):
            _render_revenue_edit(use_case, selected)
        else:
            _render_expense_edit(use_case, selected)


def _render_charts(report: FinancialReport) -> None:
    """Render the trend and donut charts, or a warning without Altair."""
    ok, message = _check_altair_dependencies()
    if not ok:
        st.warning(message)
        return
    _render_monthly_chart(report)
    left, right = st.columns(2)
    with left:
        _render_donut(report, "Revenue by Category", by_expense_type=False)
    with right:
        _render_donut(report, "Expenses by Type", by_expense_type=True)


def _render_load_error(message: str, key: str = "retry") -> None:
    """Render a retryable error card."""
    st.error(message)
    if st.button("Try Again", key=key):
        st.cache_data.clear()
        st.rerun()


def _render_section(name: str, render, *args) -> None:
    """Render one page section, replacing it with a retry card on failure."""
    try:
        render(*args)
    except RETRYABLE_ERRORS as exc:
        get_app_logger().error(f"Failed to load {name}: {exc}")
        _render_load_error(
            f"Failed to load {name}.",
            key=f"retry_{name.replace(' ', '_')}",
        )


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Clinic Finance Dashboard", layout="wide")
    st.title("Clinic Finance Dashboard")
    logger = get_app_logger()
    settings = DashboardSettings.from_env()

    report_type = st.sidebar.selectbox(
        "Department",
        list(settings.report_types),
        format_func=str.title,
    )
    period = st.sidebar.selectbox("Period", PERIODS)
    today = date.today()
    start_date, end_date = _get_period_bounds(period, today)
    if period == "Custom":
        start_date = st.sidebar.date_input(
            "From",
            value=today - timedelta(days=29),
        )
        end_date = st.sidebar.date_input("To", value=today)
    get_usage_logger().info(
        f"Report opened: {report_type} {start_date}..{end_date}"
    )

    try:
        with st.spinner("Loading report..."):
            report = _load_report(report_type, start_date, end_date)
    except RETRYABLE_ERRORS as exc:
        logger.error(f"Failed to load {report_type} report: {exc}")
        _render_load_error(f"Failed to load {report_type} report.")
        return

    if not report.records and not report.expenses:
        st.warning("No data available for this period.")
    _render_summary(report)
    _render_charts(report)
    _render_transactions(report)
    _render_section(
        "export",
        _render_export,
        report_type,
        start_date,
        end_date,
    )
    _render_section("revenue form", _render_revenue_form, report_type)
    _render_section("expense form", _render_expense_form, report_type)
    _render_section(
        "salary form",
        _render_salary_form,
        report_type,
        settings.currency_code,
    )
    _render_section(
        "record editor",
        _render_manage_records,
        report,
        settings.currency_code,
    )


if __name__ == "__main__":  # pragma: no cover
    main()
