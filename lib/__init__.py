# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for database operations
# - utils.py: Shared utilities (date parsing, CSV formatting)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import (
    format_amount,
    is_positive_finite,
    month_key,
    parse_calendar_date,
    quote_csv_text,
)

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Utils
    "format_amount",
    "is_positive_finite",
    "month_key",
    "parse_calendar_date",
    "quote_csv_text",
]
