# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .transaction_service import TransactionService
from .user_service import UserService
from .report_service import (
    ReportService,
    csv_filename,
    render_transactions_csv,
    summarize_transactions,
)

__all__ = [
    "TransactionService",
    "UserService",
    "ReportService",
    "csv_filename",
    "render_transactions_csv",
    "summarize_transactions",
]
