# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides specialized methods for:
# - Transactions (joined with their owner)
# - Users (profiles mirrored from Supabase Auth)
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   rows = SupabaseClient.fetch_transactions()
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST embed pulling the owner of each transaction through user_id
TRANSACTION_COLUMNS = "*, user:users(id, name, email)"

USER_COLUMNS = "id, name, email, phone, role, image, created_at"

# PostgREST code returned by .single() when no row matches
NO_ROWS_CODE = "PGRST116"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries an error code and an actionable suggestion for the logs.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        rows = SupabaseClient.fetch_transactions()
        user = SupabaseClient.fetch_user("github|12345")
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        Authorization is enforced by the API guard instead.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                ) from e
        return cls._instance

    @classmethod
    def _fetch_single(
        cls,
        table: str,
        columns: str,
        row_id: str,
        error_code: str,
    ) -> dict[str, Any] | None:
        """Fetch one row by id, returning None when it doesn't exist."""
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .select(columns)
                .eq("id", row_id)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch from {table}: {e}",
                code=error_code,
                details={"id": row_id},
            ) from e

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_transactions(cls, descending: bool = True) -> list[dict[str, Any]]:
        """
        Fetch every transaction joined with its owner.

        Args:
            descending: Order by date newest first (default) or oldest first

        Returns:
            List of transaction rows, each with a nested "user" dict
            holding id, name and email.
        """
        client = cls.get_client()

        try:
            response = (
                client.table("transactions")
                .select(TRANSACTION_COLUMNS)
                .order("date", desc=descending)
                .order("created_at", desc=descending)
                .execute()
            )
            rows = response.data or []
            logger.debug(f"Fetched {len(rows)} transactions")
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch transactions: {e}",
                code="FETCH_TRANSACTIONS_FAILED",
                suggestion="Check that the transactions table exists and is reachable",
            ) from e

    @classmethod
    def fetch_transaction(cls, transaction_id: str) -> dict[str, Any] | None:
        """Fetch one transaction joined with its owner, or None."""
        return cls._fetch_single(
            "transactions", TRANSACTION_COLUMNS, transaction_id, "FETCH_TRANSACTION_FAILED"
        )

    @classmethod
    def insert_transaction(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a transaction row.

        Returns:
            Inserted row (without the owner join)

        Raises:
            SupabaseClientError: If insert fails
        """
        client = cls.get_client()

        try:
            response = client.table("transactions").insert(data).execute()

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA"
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert transaction: {e}",
                code="INSERT_TRANSACTION_FAILED",
                details={"user_id": data.get("user_id")},
            ) from e

    @classmethod
    def update_transaction(cls, transaction_id: str, data: dict[str, Any]) -> dict[str, Any] | None:
        """Update a transaction row. Returns the updated row, or None if it vanished."""
        client = cls.get_client()

        try:
            response = (
                client.table("transactions")
                .update(data)
                .eq("id", transaction_id)
                .execute()
            )
            return response.data[0] if response.data else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update transaction: {e}",
                code="UPDATE_TRANSACTION_FAILED",
                details={"transaction_id": transaction_id, "fields": sorted(data)},
            ) from e

    @classmethod
    def delete_transaction(cls, transaction_id: str) -> None:
        """Delete a transaction row."""
        client = cls.get_client()

        try:
            client.table("transactions").delete().eq("id", transaction_id).execute()

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete transaction: {e}",
                code="DELETE_TRANSACTION_FAILED",
                details={"transaction_id": transaction_id},
            ) from e

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_users(cls) -> list[dict[str, Any]]:
        """Fetch every user profile ordered by name, then id for stable output."""
        client = cls.get_client()

        try:
            response = (
                client.table("users")
                .select(USER_COLUMNS)
                .order("name")
                .order("id")
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch users: {e}",
                code="FETCH_USERS_FAILED",
                suggestion="Check that the users table exists and is reachable",
            ) from e

    @classmethod
    def fetch_user(cls, user_id: str) -> dict[str, Any] | None:
        """Fetch one user profile, or None."""
        return cls._fetch_single("users", USER_COLUMNS, user_id, "FETCH_USER_FAILED")

    @classmethod
    def insert_user(cls, data: dict[str, Any]) -> dict[str, Any]:
        """Insert a user profile row and return it."""
        client = cls.get_client()

        try:
            response = client.table("users").insert(data).execute()

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA"
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert user: {e}",
                code="INSERT_USER_FAILED",
                details={"user_id": data.get("id")},
            ) from e

    @classmethod
    def update_user(cls, user_id: str, data: dict[str, Any]) -> dict[str, Any] | None:
        """Update a user profile row. Returns the updated row, or None."""
        client = cls.get_client()

        try:
            response = (
                client.table("users")
                .update(data)
                .eq("id", user_id)
                .execute()
            )
            return response.data[0] if response.data else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update user: {e}",
                code="UPDATE_USER_FAILED",
                details={"user_id": user_id, "fields": sorted(data)},
            ) from e

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    @classmethod
    def ping(cls) -> None:
        """Run the cheapest possible query to prove the database answers."""
        client = cls.get_client()
        client.table("transactions").select("id").limit(1).execute()
