# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides session-based authentication on top of Supabase Auth and the
# role guard shared by every route.
#
# Usage:
#   from app.auth import CurrentUser, AdminUser
#
#   @router.get("/protected")
#   async def protected(user: CurrentUser):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import (
    AdminUser,
    CurrentUser,
    get_current_user,
    get_session_resolver,
    require_admin,
    require_role,
    resolve_session,
)
from app.auth.models import AuthUser, TokenPayload

__all__ = [
    "AdminUser",
    "CurrentUser",
    "get_current_user",
    "get_session_resolver",
    "require_admin",
    "require_role",
    "resolve_session",
    "AuthUser",
    "TokenPayload",
]
