# =============================================================================
# core/services/transaction_service.py - Transaction Business Logic
# =============================================================================
# Handles transaction CRUD operations.
# Separates HTTP concerns from database/business logic: payloads arrive
# here already validated, authorization has already been enforced.
# =============================================================================

import logging

from lib.supabase_client import SupabaseClient
from core.models.transaction import Transaction, TransactionCreate, TransactionUpdate
from app.exceptions import TransactionNotFoundError

logger = logging.getLogger(__name__)


class TransactionService:
    """
    Service for transaction management operations.

    Every transaction returned is joined with its owner (id, name, email).
    """

    @staticmethod
    def list_transactions(descending: bool = True) -> list[Transaction]:
        """
        List every transaction ordered by date.

        Args:
            descending: Newest first (default) or oldest first

        Returns:
            All transactions, no pagination
        """
        rows = SupabaseClient.fetch_transactions(descending=descending)
        return [Transaction.model_validate(row) for row in rows]

    @staticmethod
    def get_transaction(transaction_id: str) -> Transaction:
        """
        Get a transaction by ID.

        Raises:
            TransactionNotFoundError: If the transaction doesn't exist
        """
        row = SupabaseClient.fetch_transaction(transaction_id)

        if not row:
            raise TransactionNotFoundError(transaction_id)

        return Transaction.model_validate(row)

    @staticmethod
    def create_transaction(payload: TransactionCreate, user_id: str) -> Transaction:
        """
        Record a new transaction owned by user_id.

        Returns:
            The created transaction joined with its owner
        """
        row = SupabaseClient.insert_transaction(payload.to_row(user_id))
        logger.info(f"Created transaction: {row['id']} ({payload.type.value} {payload.amount}) by user: {user_id}")

        # The insert response carries no join; read it back with the owner
        joined = SupabaseClient.fetch_transaction(str(row["id"]))
        return Transaction.model_validate(joined or row)

    @staticmethod
    def update_transaction(transaction_id: str, payload: TransactionUpdate) -> Transaction:
        """
        Apply a partial update to a transaction.

        Only the fields present in the payload are written.

        Raises:
            TransactionNotFoundError: If the transaction doesn't exist
        """
        TransactionService.get_transaction(transaction_id)

        changes = payload.changes()
        updated = SupabaseClient.update_transaction(transaction_id, changes)
        if updated is None:
            # Deleted between the existence check and the update
            raise TransactionNotFoundError(transaction_id)

        logger.info(f"Updated transaction: {transaction_id} fields: {sorted(changes)}")
        return TransactionService.get_transaction(transaction_id)

    @staticmethod
    def delete_transaction(transaction_id: str) -> None:
        """
        Delete a transaction.

        Raises:
            TransactionNotFoundError: If the transaction doesn't exist
        """
        TransactionService.get_transaction(transaction_id)

        SupabaseClient.delete_transaction(transaction_id)
        logger.info(f"Deleted transaction: {transaction_id}")
