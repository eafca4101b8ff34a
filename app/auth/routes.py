# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for the current session.
#
# Note: The OAuth sign-in itself is handled by Supabase Auth client-side.
# These routes only report who the session belongs to.
# =============================================================================

from fastapi import APIRouter

from app.auth.dependencies import CurrentUser
from app.auth.models import AuthUser

router = APIRouter()


@router.get("/me", response_model=AuthUser)
async def get_current_user_info(user: CurrentUser) -> AuthUser:
    """
    Get the current authenticated user.

    Returns:
        AuthUser: id, name, email and role of the session

    Raises:
        401: If not authenticated
    """
    return user
