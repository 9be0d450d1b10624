"""Tests for the Streamlit entry forms, record editor and section guard."""

from contextlib import nullcontext
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from src.adapters.interface.streamlit import app
from src.application.use_cases.record_entries import RecordEntriesUseCase
from src.domain.models import (
    ExpenseRecord,
    FinancialReport,
    FinancialSummary,
    RevenueRecord,
)


class _FakeCache:
    def __init__(self) -> None:
        self.cleared = False

    def clear(self):
        self.cleared = True


class _FormStreamlit:
    """Widgets answer from ``values`` by key; buttons in ``clicked`` fire."""

    def __init__(self, values=None, clicked=()) -> None:
        self.values = values or {}
        self.clicked = set(clicked)
        self.errors: list[str] = []
        self.successes: list[str] = []
        self.warnings: list[str] = []
        self.infos: list[str] = []
        self.captions: list[str] = []
        self.option_labels: list[str] = []
        self.button_keys: list[str] = []
        self.rerun_called = False
        self.cache_data = _FakeCache()

    def expander(self, _label, **_kwargs):
        return nullcontext()

    def columns(self, count):
        return [self] * count

    def date_input(self, _label, value=None, key=None, **_kwargs):
        return self.values.get(key, value)

    def text_input(self, _label, value="", key=None, **_kwargs):
        return self.values.get(key, value)

    def number_input(self, _label, value=None, key=None, **_kwargs):
        return self.values.get(key, value)

    def radio(self, _label, options, key=None, **_kwargs):
        return self.values.get(key, options[0])

    def selectbox(self, _label, options, format_func=str, key=None, **_kwargs):
        self.option_labels = [format_func(option) for option in options]
        return self.values.get(key, options[0])

    def button(self, _label, key=None, **_kwargs):
        self.button_keys.append(key)
        return key in self.clicked

    def error(self, text):
        self.errors.append(text)

    def success(self, text):
        self.successes.append(text)

    def warning(self, text):
        self.warnings.append(text)

    def info(self, text):
        self.infos.append(text)

    def caption(self, text):
        self.captions.append(text)

    def rerun(self):
        self.rerun_called = True


@pytest.fixture(autouse=True)
def quiet_loggers(monkeypatch):
    """Keep the app loggers away from the log files."""
    app_logger = MagicMock()
    monkeypatch.setattr(app, "get_app_logger", lambda: app_logger)
    monkeypatch.setattr(app, "get_usage_logger", lambda: MagicMock())
    return app_logger


def _use_stub(monkeypatch, use_case) -> None:
    monkeypatch.setattr(app, "build_record_entries_use_case", lambda: use_case)


def _entries_use_case() -> tuple[RecordEntriesUseCase, MagicMock]:
    repository = MagicMock()
    repository.update_revenue_record.side_effect = lambda record: record
    repository.update_expense_record.side_effect = lambda record: record
    return RecordEntriesUseCase(repository, logger=MagicMock()), repository


def _report(records=(), expenses=()) -> FinancialReport:
    return FinancialReport(
        report_type="laboratory",
        start_date=None,
        end_date=None,
        summary=FinancialSummary(
            total_income=Decimal("0"),
            total_expenses=Decimal("0"),
            total_records=len(records),
            total_expense_items=len(expenses),
        ),
        records=list(records),
        expenses=list(expenses),
    )


def _stored_revenue() -> RevenueRecord:
    return RevenueRecord(
        date=datetime(2024, 1, 5, 14, 30),
        amount_charged=Decimal("100.00"),
        amount_paid=Decimal("40.00"),
        category="CBC",
        customer_name="Karimi",
        invoice_number="INV-3",
        report_type="laboratory",
        record_id=3,
    )


def test_render_section_turns_database_errors_into_retry_card(
    monkeypatch,
    quiet_loggers,
) -> None:
    """A failing query should leave a retry card instead of a traceback."""
    fake_st = _FormStreamlit(clicked={"retry_salary_form"})
    monkeypatch.setattr(app, "st", fake_st)

    def failing_section(report_type):
        raise OperationalError("SELECT 1", {}, Exception("database is down"))

    app._render_section("salary form", failing_section, "laboratory")

    assert fake_st.errors == ["Failed to load salary form."]
    assert fake_st.button_keys == ["retry_salary_form"]
    assert fake_st.cache_data.cleared
    assert fake_st.rerun_called
    quiet_loggers.error.assert_called_once()


def test_render_section_passes_arguments_through(monkeypatch) -> None:
    """A healthy section should render with its arguments and no card."""
    fake_st = _FormStreamlit()
    monkeypatch.setattr(app, "st", fake_st)
    calls = []

    app._render_section(
        "export",
        lambda *args: calls.append(args),
        "glass",
        date(2024, 1, 1),
        None,
    )

    assert calls == [("glass", date(2024, 1, 1), None)]
    assert fake_st.errors == []


def test_render_section_does_not_hide_programming_errors(monkeypatch) -> None:
    """Only database and configuration failures become retry cards."""
    monkeypatch.setattr(app, "st", _FormStreamlit())

    def broken_section():
        raise KeyError("missing")

    with pytest.raises(KeyError):
        app._render_section("export", broken_section)


def test_revenue_form_is_idle_until_saved(monkeypatch) -> None:
    """No use case should be built before the save button is pressed."""
    monkeypatch.setattr(app, "st", _FormStreamlit())
    builder = MagicMock()
    monkeypatch.setattr(app, "build_record_entries_use_case", builder)

    app._render_revenue_form("laboratory")

    builder.assert_not_called()


def test_revenue_form_saves_through_use_case(monkeypatch) -> None:
    """Saving should pass the form values to the use case."""
    fake_st = _FormStreamlit(
        values={
            "revenue_date": date(2024, 1, 5),
            "revenue_invoice": "INV-1",
            "revenue_customer": "Karimi",
            "revenue_category": "CBC",
            "revenue_charged": 100.0,
            "revenue_paid": 40.0,
        },
        clicked={"revenue_save"},
    )
    monkeypatch.setattr(app, "st", fake_st)
    use_case = MagicMock()
    use_case.add_revenue.return_value = RevenueRecord(
        date=date(2024, 1, 5),
        amount_charged=Decimal("100.00"),
        amount_paid=Decimal("40.00"),
        invoice_number="INV-1",
        record_id=1,
    )
    _use_stub(monkeypatch, use_case)

    app._render_revenue_form("laboratory")

    use_case.add_revenue.assert_called_once_with(
        report_type="laboratory",
        record_date=date(2024, 1, 5),
        invoice_number="INV-1",
        customer_name="Karimi",
        category="CBC",
        amount_charged=100.0,
        amount_paid=40.0,
    )
    assert fake_st.successes == ["Saved invoice INV-1"]
    assert fake_st.cache_data.cleared


def test_revenue_form_shows_validation_errors(monkeypatch) -> None:
    """An empty amount should be reported and nothing stored."""
    fake_st = _FormStreamlit(
        values={
            "revenue_invoice": "INV-1",
            "revenue_customer": "Karimi",
            "revenue_category": "CBC",
            "revenue_charged": 100.0,
        },
        clicked={"revenue_save"},
    )
    monkeypatch.setattr(app, "st", fake_st)
    use_case, repository = _entries_use_case()
    _use_stub(monkeypatch, use_case)

    app._render_revenue_form("laboratory")

    assert fake_st.errors == ["Amount paid is required"]
    assert fake_st.successes == []
    repository.add_revenue_record.assert_not_called()


def test_revenue_form_reports_duplicate_invoice(monkeypatch) -> None:
    """A unique constraint failure should be shown as a form error."""
    fake_st = _FormStreamlit(
        values={"revenue_invoice": " INV-1 "},
        clicked={"revenue_save"},
    )
    monkeypatch.setattr(app, "st", fake_st)
    use_case = MagicMock()
    use_case.add_revenue.side_effect = IntegrityError(
        "INSERT",
        {},
        Exception("UNIQUE constraint failed"),
    )
    _use_stub(monkeypatch, use_case)

    app._render_revenue_form("laboratory")

    assert fake_st.errors == ["Invoice INV-1 already exists."]
    assert not fake_st.cache_data.cleared


def test_expense_form_requires_an_amount(monkeypatch) -> None:
    """A blank expense amount must not be saved as zero."""
    fake_st = _FormStreamlit(
        values={"expense_description": "Rent"},
        clicked={"expense_save"},
    )
    monkeypatch.setattr(app, "st", fake_st)
    use_case, repository = _entries_use_case()
    _use_stub(monkeypatch, use_case)

    app._render_expense_form("pharmacy")

    assert fake_st.errors == ["Amount is required"]
    repository.add_expense_record.assert_not_called()


def test_expense_form_saves_normal_expense(monkeypatch) -> None:
    """A complete expense should be stored under the selected department."""
    fake_st = _FormStreamlit(
        values={
            "expense_date": date(2024, 2, 1),
            "expense_amount": 250.0,
            "expense_description": "Rent",
        },
        clicked={"expense_save"},
    )
    monkeypatch.setattr(app, "st", fake_st)
    use_case, repository = _entries_use_case()
    repository.add_expense_record.side_effect = lambda expense: replace(
        expense,
        record_id=4,
    )
    _use_stub(monkeypatch, use_case)

    app._render_expense_form("pharmacy")

    stored = repository.add_expense_record.call_args.args[0]
    assert stored.report_type == "pharmacy"
    assert stored.amount == Decimal("250.00")
    assert stored.category is None
    assert fake_st.successes == ["Saved expense Rent"]


def test_record_editor_updates_revenue_and_keeps_time(monkeypatch) -> None:
    """Editing only the amount should keep the original timestamp."""
    fake_st = _FormStreamlit(
        values={"edit_revenue_3_paid": 100.0},
        clicked={"edit_revenue_3_save"},
    )
    monkeypatch.setattr(app, "st", fake_st)
    use_case, repository = _entries_use_case()
    _use_stub(monkeypatch, use_case)

    app._render_manage_records(_report(records=[_stored_revenue()]), "AFN")

    assert fake_st.option_labels == [
        "Jan 05, 2024 | INV-3 | Karimi | AFN 40.00"
    ]
    stored = repository.update_revenue_record.call_args.args[0]
    assert stored.record_id == 3
    assert stored.date == datetime(2024, 1, 5, 14, 30)
    assert stored.amount_paid == Decimal("100.00")
    assert stored.balance_due == Decimal("0")
    assert fake_st.successes == ["Updated invoice INV-3"]
    assert fake_st.cache_data.cleared


def test_record_editor_moves_revenue_to_new_date(monkeypatch) -> None:
    """A changed date should replace the stored timestamp."""
    fake_st = _FormStreamlit(
        values={"edit_revenue_3_date": date(2024, 1, 9)},
        clicked={"edit_revenue_3_save"},
    )
    monkeypatch.setattr(app, "st", fake_st)
    use_case, repository = _entries_use_case()
    _use_stub(monkeypatch, use_case)

    app._render_manage_records(_report(records=[_stored_revenue()]), "AFN")

    stored = repository.update_revenue_record.call_args.args[0]
    assert stored.date == date(2024, 1, 9)


def test_record_editor_warns_when_expense_is_gone(monkeypatch) -> None:
    """Deleting an expense removed elsewhere should show a warning."""
    expense = ExpenseRecord(
        date=date(2024, 2, 1),
        amount=Decimal("250.00"),
        description="Rent",
        report_type="laboratory",
        record_id=8,
    )
    fake_st = _FormStreamlit(
        values={"manage_kind": "Expenses"},
        clicked={"edit_expense_8_delete"},
    )
    monkeypatch.setattr(app, "st", fake_st)
    use_case, repository = _entries_use_case()
    repository.delete_expense_record.return_value = False
    _use_stub(monkeypatch, use_case)

    app._render_manage_records(_report(expenses=[expense]), "AFN")

    repository.delete_expense_record.assert_called_once_with(8)
    assert fake_st.warnings == ["The record no longer exists."]
    assert fake_st.successes == []


def test_record_editor_without_stored_records(monkeypatch) -> None:
    """Records without ids cannot be edited."""
    fake_st = _FormStreamlit()
    monkeypatch.setattr(app, "st", fake_st)
    builder = MagicMock()
    monkeypatch.setattr(app, "build_record_entries_use_case", builder)

    app._render_manage_records(
        _report(records=[replace(_stored_revenue(), record_id=None)]),
        "AFN",
    )

    assert fake_st.infos == ["No stored records in this period."]
    builder.assert_not_called()
