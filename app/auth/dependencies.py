# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides the auth guard used by every /api route.
#
# A session is a Supabase Auth JWT sent as a Bearer token or in the
# session cookie. Signature verification supports both:
# - ES256/RS256 (Supabase JWT signing keys) via JWKS
# - HS256 (legacy Supabase JWT secret) as fallback
#
# Usage:
#   from app.auth import CurrentUser, AdminUser
#
#   @router.get("/protected")
#   def protected(user: CurrentUser):
#       return {"user_id": user.id}
#
#   @router.post("/admin-only")
#   def admin_only(user: AdminUser):
#       ...
# =============================================================================

import logging
import time
from typing import Annotated, Awaitable, Callable, Optional

import httpx
from fastapi import Depends, Request
from fastapi.concurrency import run_in_threadpool
from jose import jwt, JWTError

from app.config import settings
from app.auth.models import AuthUser, TokenPayload
from app.exceptions import ForbiddenError, UnauthenticatedError
from core.models.user import Role
from core.services.user_service import UserService

logger = logging.getLogger(__name__)

SessionResolver = Callable[[Request], Awaitable[Optional[AuthUser]]]

# Cache for JWKS keys
_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour


def _fetch_jwks() -> dict:
    """Fetch JWKS from Supabase with caching."""
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()

    if _jwks_cache and (current_time - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        response = httpx.get(settings.jwks_url, timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = current_time
        logger.debug(f"Fetched JWKS from {settings.jwks_url}")
        return _jwks_cache
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Stale keys are better than none
        if _jwks_cache:
            return _jwks_cache
        return {"keys": []}


def _get_signing_key(token: str) -> tuple[str | dict, str]:
    """
    Get the appropriate signing key for a token.

    Returns:
        Tuple of (key, algorithm) to use for verification
    """
    try:
        unverified_header = jwt.get_unverified_header(token)
    except JWTError:
        # Unreadable header; let HS256 verification reject it
        return settings.SUPABASE_JWT_SECRET, "HS256"

    alg = unverified_header.get("alg", "HS256")
    kid = unverified_header.get("kid")

    if alg == "HS256":
        return settings.SUPABASE_JWT_SECRET, "HS256"

    if kid:
        for key in _fetch_jwks().get("keys", []):
            if key.get("kid") == kid:
                return key, alg

    logger.warning(f"Could not find key for alg={alg}, kid={kid}, falling back to HS256")
    return settings.SUPABASE_JWT_SECRET, "HS256"


def extract_token(request: Request) -> str | None:
    """
    Read the session token from the request.

    The Authorization header wins over the session cookie.
    """
    authorization = request.headers.get("Authorization")
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()

    cookie = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if cookie:
        return cookie
    return None


def decode_session_token(token: str) -> TokenPayload:
    """
    Verify a session token and return its claims.

    Raises:
        JWTError: If the signature, audience or expiry is invalid
    """
    signing_key, algorithm = _get_signing_key(token)
    payload = jwt.decode(
        token,
        signing_key,
        algorithms=[algorithm],
        audience=settings.JWT_AUDIENCE,
    )
    return TokenPayload.model_validate(payload)


def _resolve_session_blocking(request: Request) -> AuthUser | None:
    token = extract_token(request)
    if token is None:
        return None

    claims = decode_session_token(token)

    user = UserService.ensure_user(
        user_id=claims.sub,
        name=claims.display_name,
        email=claims.resolved_email,
        role=Role(settings.DEFAULT_USER_ROLE),
        image=claims.avatar_url,
        phone=claims.phone or None,
    )

    return AuthUser(id=user.id, name=user.name, email=user.email, role=user.role)


async def resolve_session(request: Request) -> AuthUser | None:
    """
    Resolve the identity behind a request.

    Returns None when the request carries no session at all. A session
    that fails verification raises; the guard turns any failure into
    401. The user row is created on the first successful sign-in.

    Token verification may fetch JWKS and provisioning hits the database,
    so both run in the threadpool rather than on the event loop.
    """
    return await run_in_threadpool(_resolve_session_blocking, request)


def get_session_resolver() -> SessionResolver:
    """
    Get the session resolver used by the guard.

    Tests override this dependency to supply a fake session store.
    """
    return resolve_session


def require_role(required_role: Role | None = None):
    """
    Build an auth guard dependency.

    Args:
        required_role: Role the session must hold, or None to accept any
            authenticated user

    Returns:
        A dependency that yields the AuthUser and also stores it on
        request.state.user

    Raises (from the dependency):
        UnauthenticatedError: 401 when there is no session or it can't be
            resolved. Resolution errors never leak; they fail closed.
        ForbiddenError: 403 when the session role differs from required_role
    """

    async def guard(
        request: Request,
        resolver: Annotated[SessionResolver, Depends(get_session_resolver)],
    ) -> AuthUser:
        try:
            user = await resolver(request)
        except Exception as e:
            logger.warning(f"Session resolution failed for {request.method} {request.url.path}: {e}")
            raise UnauthenticatedError("Authentication error.") from e

        if user is None:
            raise UnauthenticatedError()

        if required_role is not None and user.role != required_role:
            logger.warning(
                f"User {user.id} with role {user.role.value} denied "
                f"{request.method} {request.url.path} (requires {required_role.value})"
            )
            raise ForbiddenError(required_role=required_role.value)

        request.state.user = user
        return user

    return guard


get_current_user = require_role()
require_admin = require_role(Role.ADMIN)

# Type aliases for dependency injection
CurrentUser = Annotated[AuthUser, Depends(get_current_user)]
AdminUser = Annotated[AuthUser, Depends(require_admin)]
