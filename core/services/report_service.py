# =============================================================================
# core/services/report_service.py - Reports and CSV Export
# =============================================================================
# Two read-only views over the full transaction set:
# - summarize_transactions: totals plus per-calendar-month income/expense
# - render_transactions_csv: tabular export for spreadsheets
#
# Both are pure functions over Transaction models; ReportService wires
# them to the database.
# =============================================================================

import datetime as dt
import logging
from typing import Iterable

import pandas as pd

from lib.utils import format_amount, month_key, quote_csv_text
from core.models.report import FinancialReport, MonthlySummary
from core.models.transaction import Transaction, TransactionType
from core.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)

CSV_HEADER = ("ID", "Concepto", "Monto", "Tipo", "Fecha", "Usuario", "Email")

INCOME = TransactionType.INGRESO.value
EXPENSE = TransactionType.EGRESO.value


def summarize_transactions(transactions: Iterable[Transaction]) -> FinancialReport:
    """
    Aggregate transactions into totals and monthly buckets.

    Each transaction lands in the bucket of its calendar month (YYYY-MM).
    Months are sorted ascending; months without any transaction are not
    reported. The input order does not matter.

    Args:
        transactions: Any iterable of transactions

    Returns:
        FinancialReport with balance = totalIncome - totalExpense

    Example:
        report = summarize_transactions(TransactionService.list_transactions())
        report.monthly_data[0].month  # "2024-01"
    """
    records = [
        {
            "month": month_key(transaction.date),
            "type": transaction.type.value,
            "amount": float(transaction.amount),
        }
        for transaction in transactions
    ]

    if not records:
        return FinancialReport()

    df = pd.DataFrame.from_records(records)

    # One row per month, one column per type; missing combinations are 0
    monthly = (
        df.groupby(["month", "type"])["amount"]
        .sum()
        .unstack("type", fill_value=0.0)
        .reindex(columns=[INCOME, EXPENSE], fill_value=0.0)
        .sort_index()
    )

    total_income = float(df.loc[df["type"] == INCOME, "amount"].sum())
    total_expense = float(df.loc[df["type"] == EXPENSE, "amount"].sum())

    monthly_data = [
        MonthlySummary(
            month=str(month),
            income=float(row[INCOME]),
            expense=float(row[EXPENSE]),
        )
        for month, row in monthly.iterrows()
    ]

    return FinancialReport(
        balance=total_income - total_expense,
        total_income=total_income,
        total_expense=total_expense,
        monthly_data=monthly_data,
        total_transactions=len(records),
    )


def render_transactions_csv(transactions: Iterable[Transaction]) -> str:
    """
    Serialize transactions as CSV text, one row per transaction.

    Concept and user name are always quoted (embedded quotes doubled),
    dates are YYYY-MM-DD, rows are joined by a newline with no trailing
    newline. Rows keep the order they are given in.
    """
    lines = [",".join(CSV_HEADER)]

    for transaction in transactions:
        owner = transaction.user
        lines.append(",".join([
            transaction.id,
            quote_csv_text(transaction.concept),
            format_amount(transaction.amount),
            transaction.type.value,
            transaction.date.isoformat(),
            quote_csv_text(owner.name if owner else None),
            (owner.email if owner else None) or "",
        ]))

    return "\n".join(lines)


def csv_filename(prefix: str, today: dt.date | None = None) -> str:
    """Download filename for the CSV report, stamped with today's date."""
    today = today or dt.date.today()
    return f"{prefix}_{today.isoformat()}.csv"


class ReportService:
    """Service building reports from the stored transactions."""

    @staticmethod
    def build_report() -> FinancialReport:
        """Aggregate every stored transaction."""
        transactions = TransactionService.list_transactions(descending=False)
        report = summarize_transactions(transactions)
        logger.debug(
            f"Built report over {report.total_transactions} transactions "
            f"across {len(report.monthly_data)} months"
        )
        return report

    @staticmethod
    def export_csv() -> str:
        """CSV of every stored transaction, newest first."""
        transactions = TransactionService.list_transactions(descending=True)
        logger.info(f"Exporting {len(transactions)} transactions to CSV")
        return render_transactions_csv(transactions)
