# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - transactions.py: Transaction listing and admin CRUD
# - users.py: Admin user management
# - reports.py: Financial summary and CSV export
#
# Each router is mounted in main.py with a URL prefix under /api.
# =============================================================================

from . import health
from . import transactions
from . import users
from . import reports

__all__ = [
    "health",
    "transactions",
    "users",
    "reports",
]
