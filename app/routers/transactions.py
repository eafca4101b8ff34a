# =============================================================================
# app/routers/transactions.py - Transaction CRUD Endpoints
# =============================================================================
# Reading is open to any authenticated user.
# Creating, editing and deleting require the ADMIN role.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, status
from pydantic import BaseModel, Field

from app.auth import AdminUser, CurrentUser
from core.models.transaction import Transaction, TransactionCreate, TransactionUpdate
from core.services.transaction_service import TransactionService

router = APIRouter()

TransactionId = Annotated[str, Path(min_length=1, description="Transaction ID")]


class MessageResponse(BaseModel):
    """Confirmation of an operation without a resource to return."""
    message: str = Field(..., examples=["Transaction deleted successfully."])


@router.get("", response_model=list[Transaction])
def list_transactions(user: CurrentUser):
    """
    List all transactions.

    Ordered by date, newest first. Each transaction includes the user
    who recorded it. No pagination.
    """
    return TransactionService.list_transactions()


@router.post("", response_model=Transaction, status_code=status.HTTP_201_CREATED)
def create_transaction(request: TransactionCreate, user: AdminUser):
    """
    Record a new income or expense.

    All of concept, amount, date and type are required. Amount must be a
    number greater than 0 and type one of INGRESO or EGRESO. The
    transaction is owned by the authenticated administrator.
    """
    return TransactionService.create_transaction(request, user_id=user.id)


@router.put("/{transaction_id}", response_model=Transaction)
def update_transaction(
    transaction_id: TransactionId,
    request: TransactionUpdate,
    user: AdminUser,
):
    """
    Edit a transaction.

    Send any subset of concept, amount, date and type; at least one is
    required. Supplied fields are validated like on creation.
    """
    return TransactionService.update_transaction(transaction_id, request)


@router.delete("/{transaction_id}", response_model=MessageResponse)
def delete_transaction(transaction_id: TransactionId, user: AdminUser):
    """
    Delete a transaction.
    """
    TransactionService.delete_transaction(transaction_id)
    return MessageResponse(message="Transaction deleted successfully.")
