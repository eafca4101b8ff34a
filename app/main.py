# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Ledger API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.exceptions import (
    LedgerException,
    http_exception_handler,
    ledger_exception_handler,
    unexpected_exception_handler,
    validation_exception_handler,
)
from app.routers import health, transactions, users, reports
from app.auth import routes as auth_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs startup and shutdown; the database client is created lazily on
    first use.
    """
    logger.info(f"Starting Ledger API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down Ledger API")


# Create FastAPI application
app = FastAPI(
    title="Ledger API",
    description="""
## Income and Expense Ledger

Authenticated users read the ledger; administrators record, edit and
delete transactions, manage users and download reports.

### Authentication

Sign in through the identity provider (GitHub via Supabase Auth). Send the
session token as `Authorization: Bearer <token>` or in the session cookie.

### Roles

| Role | Rights |
|------|--------|
| **ADMIN** | Create/edit/delete transactions, manage users, reports |
| **USER** | Read transactions |

### Errors

Every error answers `{"error": "<message>"}` with status 400, 401, 403,
404 or 405.
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Current session identity",
        },
        {
            "name": "Transactions",
            "description": "Income and expense records",
        },
        {
            "name": "Users",
            "description": "User listing and role management (admin)",
        },
        {
            "name": "Reports",
            "description": "Financial summary and CSV export (admin)",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# Session cookies require credentialed CORS, which rules out a wildcard origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(LedgerException, ledger_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, unexpected_exception_handler)


# =============================================================================
# Routers
# =============================================================================

app.include_router(
    auth_routes.router,
    prefix="/api",
    tags=["Auth"]
)

app.include_router(
    transactions.router,
    prefix="/api/transactions",
    tags=["Transactions"]
)

app.include_router(
    users.router,
    prefix="/api/users",
    tags=["Users"]
)

app.include_router(
    reports.router,
    prefix="/api/reports",
    tags=["Reports"]
)

app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Ledger API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/health",
    }
