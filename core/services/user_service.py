# =============================================================================
# core/services/user_service.py - User Business Logic
# =============================================================================
# Handles user listing, admin edits and first-sign-in provisioning.
# Users are never deleted by this system.
# =============================================================================

import logging
from typing import Any

from lib.supabase_client import SupabaseClient, SupabaseClientError
from core.models.user import Role, User, UserUpdate
from app.exceptions import UserNotFoundError

logger = logging.getLogger(__name__)


class UserService:
    """
    Service for user management operations.

    Provides a clean interface between API routes and database.
    """

    @staticmethod
    def list_users() -> list[User]:
        """List every user ordered by name ascending."""
        rows = SupabaseClient.fetch_users()
        return [User.model_validate(row) for row in rows]

    @staticmethod
    def find_user(user_id: str) -> User | None:
        """Get a user by ID, or None if it doesn't exist."""
        row = SupabaseClient.fetch_user(user_id)
        return User.model_validate(row) if row else None

    @staticmethod
    def get_user(user_id: str) -> User:
        """
        Get a user by ID.

        Raises:
            UserNotFoundError: If the user doesn't exist
        """
        user = UserService.find_user(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    @staticmethod
    def update_user(user_id: str, payload: UserUpdate) -> User:
        """
        Change a user's name and/or role.

        Raises:
            UserNotFoundError: If the user doesn't exist
        """
        UserService.get_user(user_id)

        changes = payload.changes()
        updated = SupabaseClient.update_user(user_id, changes)
        if updated is None:
            raise UserNotFoundError(user_id)

        logger.info(f"Updated user: {user_id} fields: {sorted(changes)}")
        return UserService.get_user(user_id)

    @staticmethod
    def ensure_user(
        user_id: str,
        name: str,
        email: str,
        role: Role,
        image: str | None = None,
        phone: str | None = None,
    ) -> User:
        """
        Return the user, creating it on its first sign-in.

        An existing user is returned untouched: name and role edits made
        by an administrator survive later sign-ins.

        Args:
            user_id: Identity provider subject
            name: Display name taken from the provider profile
            email: Email taken from the provider profile
            role: Role assigned if the user is created now
            image: Avatar URL (optional)
            phone: Phone number (optional)
        """
        existing = UserService.find_user(user_id)
        if existing is not None:
            return existing

        data: dict[str, Any] = {
            "id": user_id,
            "name": name,
            "email": email,
            "role": role.value,
            "image": image,
            "phone": phone,
        }

        try:
            row = SupabaseClient.insert_user(data)
        except SupabaseClientError:
            # A concurrent first sign-in may have inserted the same user
            existing = UserService.find_user(user_id)
            if existing is not None:
                return existing
            raise

        logger.info(f"Created user on first sign-in: {user_id} with role {role.value}")
        return User.model_validate(row)
