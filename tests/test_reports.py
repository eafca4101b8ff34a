# =============================================================================
# tests/test_reports.py - Report and CSV Export Tests
# =============================================================================
# This module contains tests for:
# - summarize_transactions: totals and calendar-month buckets
# - render_transactions_csv: quoting, ordering and formatting
# - The /api/reports endpoints
# =============================================================================

import datetime as dt
from unittest.mock import patch

import pytest

from core.models.transaction import Transaction
from core.services.report_service import (
    csv_filename,
    render_transactions_csv,
    summarize_transactions,
)
from lib.utils import format_amount, quote_csv_text


def _tx(tx_id, amount, kind, date, concept="Movimiento", owner=None):
    return Transaction.model_validate({
        "id": tx_id,
        "concept": concept,
        "amount": amount,
        "type": kind,
        "date": date,
        "user_id": "admin-1",
        "user": owner or {"id": "admin-1", "name": "Ana Admin", "email": "ana@example.com"},
    })


# =============================================================================
# Aggregation
# =============================================================================

class TestSummarizeTransactions:
    """Totals and monthly buckets."""

    def test_reference_example(self):
        report = summarize_transactions([
            _tx("1", 500, "INGRESO", "2024-01-05"),
            _tx("2", 200, "EGRESO", "2024-01-10"),
            _tx("3", 300, "INGRESO", "2024-02-01"),
        ])

        assert report.total_income == 800
        assert report.total_expense == 200
        assert report.balance == 600
        assert report.total_transactions == 3
        assert [m.model_dump() for m in report.monthly_data] == [
            {"month": "2024-01", "income": 500, "expense": 200},
            {"month": "2024-02", "income": 300, "expense": 0},
        ]

    def test_input_order_does_not_matter(self):
        transactions = [
            _tx("3", 300, "INGRESO", "2024-02-01"),
            _tx("1", 500, "INGRESO", "2024-01-05"),
            _tx("2", 200, "EGRESO", "2024-01-10"),
        ]

        forward = summarize_transactions(transactions)
        backward = summarize_transactions(list(reversed(transactions)))

        assert forward == backward
        assert [m.month for m in forward.monthly_data] == ["2024-01", "2024-02"]

    def test_empty_set(self):
        report = summarize_transactions([])

        assert report.balance == 0
        assert report.total_income == 0
        assert report.total_expense == 0
        assert report.monthly_data == []
        assert report.total_transactions == 0

    def test_expense_only_month_and_negative_balance(self):
        report = summarize_transactions([
            _tx("1", 100, "INGRESO", "2023-12-31"),
            _tx("2", 150.5, "EGRESO", "2024-01-01"),
            _tx("3", 49.5, "EGRESO", "2024-01-31"),
        ])

        assert report.balance == -100
        assert [m.model_dump() for m in report.monthly_data] == [
            {"month": "2023-12", "income": 100, "expense": 0},
            {"month": "2024-01", "income": 0, "expense": 200},
        ]

    def test_months_sort_across_years(self):
        report = summarize_transactions([
            _tx("1", 1, "INGRESO", "2024-10-01"),
            _tx("2", 1, "INGRESO", "2023-11-01"),
            _tx("3", 1, "INGRESO", "2024-02-01"),
        ])

        assert [m.month for m in report.monthly_data] == ["2023-11", "2024-02", "2024-10"]

    def test_serialized_shape(self):
        report = summarize_transactions([_tx("1", 10, "INGRESO", "2024-03-03")])

        assert set(report.model_dump(by_alias=True)) == {
            "balance", "totalIncome", "totalExpense", "monthlyData", "totalTransactions",
        }


# =============================================================================
# CSV Rendering
# =============================================================================

class TestRenderTransactionsCsv:
    """CSV text layout."""

    def test_header_only_when_empty(self):
        assert render_transactions_csv([]) == "ID,Concepto,Monto,Tipo,Fecha,Usuario,Email"

    def test_rows(self):
        csv_text = render_transactions_csv([
            _tx("txn-2", 200, "EGRESO", "2024-01-10", concept='Pago "extra"'),
            _tx("txn-1", 12.5, "INGRESO", "2024-01-05", concept="Venta, contado"),
        ])

        assert csv_text.split("\n") == [
            "ID,Concepto,Monto,Tipo,Fecha,Usuario,Email",
            'txn-2,"Pago ""extra""",200,EGRESO,2024-01-10,"Ana Admin",ana@example.com',
            'txn-1,"Venta, contado",12.5,INGRESO,2024-01-05,"Ana Admin",ana@example.com',
        ]
        assert not csv_text.endswith("\n")

    def test_user_name_is_escaped(self):
        owner = {"id": "u", "name": 'Juan "JJ" Pérez', "email": "jj@example.com"}

        csv_text = render_transactions_csv([_tx("t", 1, "INGRESO", "2024-01-01", owner=owner)])

        assert '"Juan ""JJ"" Pérez"' in csv_text.split("\n")[1]

    def test_keeps_given_order(self):
        csv_text = render_transactions_csv([
            _tx("a", 1, "INGRESO", "2024-01-01"),
            _tx("b", 1, "INGRESO", "2024-03-01"),
        ])

        assert [line.split(",")[0] for line in csv_text.split("\n")[1:]] == ["a", "b"]


class TestCsvHelpers:
    """Formatting helpers used by the export."""

    @pytest.mark.parametrize(
        "value, expected",
        [(500, "500"), (500.0, "500"), (12.5, "12.5"), (0.1, "0.1"), (1234567.25, "1234567.25")],
    )
    def test_format_amount(self, value, expected):
        assert format_amount(value) == expected

    def test_quote_csv_text(self):
        assert quote_csv_text('Pago "extra"') == '"Pago ""extra"""'
        assert quote_csv_text(None) == '""'

    def test_csv_filename(self):
        assert csv_filename("reporte_movimientos", dt.date(2024, 5, 31)) == "reporte_movimientos_2024-05-31.csv"


# =============================================================================
# Endpoints
# =============================================================================

@pytest.fixture
def db():
    """Mocked Supabase client as seen by the transaction service."""
    with patch("core.services.transaction_service.SupabaseClient") as mock:
        yield mock


class TestReportEndpoints:
    """GET /api/reports and /api/reports/csv."""

    def test_report(self, client, login, admin_user, db, transaction_rows):
        login(admin_user)
        db.fetch_transactions.return_value = list(reversed(transaction_rows))

        response = client.get("/api/reports")

        assert response.status_code == 200
        assert response.json() == {
            "balance": 600,
            "totalIncome": 800,
            "totalExpense": 200,
            "monthlyData": [
                {"month": "2024-01", "income": 500, "expense": 200},
                {"month": "2024-02", "income": 300, "expense": 0},
            ],
            "totalTransactions": 3,
        }
        db.fetch_transactions.assert_called_once_with(descending=False)

    def test_csv_download(self, client, login, admin_user, db, transaction_rows):
        login(admin_user)
        db.fetch_transactions.return_value = transaction_rows

        response = client.get("/api/reports/csv")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "charset=utf-8" in response.headers["content-type"]
        disposition = response.headers["content-disposition"]
        assert disposition.startswith("attachment; filename=reporte_movimientos_")
        assert disposition.endswith(".csv")

        lines = response.text.split("\n")
        assert lines[0] == "ID,Concepto,Monto,Tipo,Fecha,Usuario,Email"
        assert lines[2] == 'txn-2,"Pago ""extra""",200,EGRESO,2024-01-10,"Ana Admin",ana@example.com'
        assert len(lines) == 4
        db.fetch_transactions.assert_called_once_with(descending=True)

    def test_user_role_is_forbidden(self, client, login, basic_user, db):
        login(basic_user)

        assert client.get("/api/reports").status_code == 403
        assert client.get("/api/reports/csv").status_code == 403
        db.fetch_transactions.assert_not_called()
