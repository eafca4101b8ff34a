# =============================================================================
# core/models/report.py - Report Schemas
# =============================================================================
# Output of the financial report: overall totals plus one bucket per
# calendar month that has at least one transaction.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MonthlySummary(BaseModel):
    """Income and expense sums of one calendar month."""

    month: str = Field(..., pattern=r"^\d{4}-\d{2}$", examples=["2024-01"])
    income: float = 0.0
    expense: float = 0.0


class FinancialReport(BaseModel):
    """
    Aggregate view over every transaction.

    Example:
        {
            "balance": 600.0,
            "totalIncome": 800.0,
            "totalExpense": 200.0,
            "monthlyData": [
                {"month": "2024-01", "income": 500.0, "expense": 200.0},
                {"month": "2024-02", "income": 300.0, "expense": 0.0}
            ],
            "totalTransactions": 3
        }
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    balance: float = 0.0
    total_income: float = 0.0
    total_expense: float = 0.0
    monthly_data: list[MonthlySummary] = Field(default_factory=list)
    total_transactions: int = Field(default=0, ge=0)
