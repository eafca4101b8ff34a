# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error leaves the API with the same body shape: {"error": "<message>"}
# =============================================================================

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class LedgerException(Exception):
    """
    Base exception for the Ledger API.

    All custom exceptions inherit from this class. The message is what
    the caller sees; code and details are kept for logs.
    """

    def __init__(
        self,
        message: str,
        code: str = "LEDGER_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {"error": self.message}


# =============================================================================
# Auth Exceptions
# =============================================================================

class UnauthenticatedError(LedgerException):
    """Raised when a request carries no valid session."""

    def __init__(self, message: str = "Not authenticated. Sign in to continue."):
        super().__init__(
            message=message,
            code="UNAUTHENTICATED",
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(LedgerException):
    """Raised when the session role is not allowed to perform an action."""

    def __init__(
        self,
        message: str = "You do not have permission to perform this action.",
        required_role: str | None = None,
    ):
        super().__init__(
            message=message,
            code="FORBIDDEN",
            status_code=status.HTTP_403_FORBIDDEN,
            details={"required_role": required_role} if required_role else None,
        )


# =============================================================================
# Request Exceptions
# =============================================================================

class InvalidRequestError(LedgerException):
    """Raised when a payload is missing fields or carries malformed values."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class TransactionNotFoundError(LedgerException):
    """Raised when a transaction ID doesn't exist."""

    def __init__(self, transaction_id: str):
        super().__init__(
            message="Transaction not found.",
            code="TRANSACTION_NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"transaction_id": transaction_id},
        )


class UserNotFoundError(LedgerException):
    """Raised when a user ID doesn't exist."""

    def __init__(self, user_id: str):
        super().__init__(
            message="User not found.",
            code="USER_NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"user_id": user_id},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

def describe_validation_errors(errors: list[dict[str, Any]]) -> str:
    """
    Turn pydantic error dicts into one human-readable sentence.

    Missing fields are reported together since they are the common case
    for incomplete forms; otherwise the first problem is reported.
    """
    missing = [
        str(err["loc"][-1])
        for err in errors
        if err.get("type") == "missing" and err.get("loc")
    ]
    if missing == ["body"]:
        return "Request body is required."
    if missing:
        return f"Missing required fields: {', '.join(missing)}"

    if not errors:
        return "Invalid request."

    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query")]
    message = first.get("msg", "invalid value")
    # pydantic prefixes messages raised from validators
    message = message.removeprefix("Value error, ")
    if loc:
        return f"{'.'.join(loc)}: {message}"
    return message


async def ledger_exception_handler(
    request: Request,
    exc: LedgerException
) -> JSONResponse:
    """Convert LedgerException to JSON response."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Malformed payloads are client errors and answered with 400.
    """
    message = describe_validation_errors(list(exc.errors()))
    logger.info(f"Validation failed on {request.method} {request.url.path}: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message},
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Handle routing errors (unknown path, unsupported method)."""
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = "Method not allowed."
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


async def unexpected_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "An unexpected error occurred"},
    )
