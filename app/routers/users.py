# =============================================================================
# app/routers/users.py - User Management Endpoints
# =============================================================================
# Admin-only listing and editing of users.
# Users are created on first sign-in, so there is no POST or DELETE here.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path

from app.auth import AdminUser
from core.models.user import User, UserUpdate
from core.services.user_service import UserService

router = APIRouter()


@router.get("", response_model=list[User])
def list_users(user: AdminUser):
    """
    List all users ordered by name.
    """
    return UserService.list_users()


@router.put("/{user_id}", response_model=User)
def update_user(
    user_id: Annotated[str, Path(min_length=1, description="User ID")],
    request: UserUpdate,
    user: AdminUser,
):
    """
    Change a user's name and/or role.

    At least one of name or role is required; role must be ADMIN or USER.
    """
    return UserService.update_user(user_id, request)
