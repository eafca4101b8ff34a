# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - transaction.py: Transaction schemas (create, partial update, response)
# - user.py: User projection, roles and admin edits
# - report.py: Financial report aggregate
#
# These models define the "contract" between API and clients.
# =============================================================================

from .transaction import (
    Transaction,
    TransactionCreate,
    TransactionOwner,
    TransactionType,
    TransactionUpdate,
)
from .user import Role, User, UserUpdate
from .report import FinancialReport, MonthlySummary

__all__ = [
    # Transaction
    "Transaction",
    "TransactionCreate",
    "TransactionOwner",
    "TransactionType",
    "TransactionUpdate",
    # User
    "Role",
    "User",
    "UserUpdate",
    # Report
    "FinancialReport",
    "MonthlySummary",
]
