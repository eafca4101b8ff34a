# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Small helpers shared by models and services:
# - calendar date parsing for values coming back from PostgREST
# - number and text formatting for the CSV export
# =============================================================================

import datetime as dt
import math


# =============================================================================
# Date Utilities
# =============================================================================

def parse_calendar_date(value: object) -> dt.date:
    """
    Coerce a database or payload value into a calendar date.

    PostgREST returns `date` columns as "YYYY-MM-DD" but older rows may
    have been stored as timestamps ("2024-01-15T00:00:00+00:00"). Only
    the calendar part is kept, no timezone shifting is applied.

    Raises:
        ValueError: If the value cannot be read as a date

    Example:
        parse_calendar_date("2024-01-15")                 # date(2024, 1, 15)
        parse_calendar_date("2024-01-15T10:30:00+00:00")  # date(2024, 1, 15)
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) > 10 and text[10] in ("T", " "):
            text = text[:10]
        return dt.date.fromisoformat(text)
    raise ValueError("dates must be ISO formatted strings (YYYY-MM-DD)")


def month_key(value: dt.date) -> str:
    """Calendar month bucket of a date, formatted YYYY-MM."""
    return f"{value.year:04d}-{value.month:02d}"


# =============================================================================
# Number Utilities
# =============================================================================

def is_positive_finite(value: float) -> bool:
    """True for finite numbers strictly greater than zero."""
    return math.isfinite(value) and value > 0


def format_amount(value: float) -> str:
    """
    Render an amount the way it appears in JSON.

    Integral values drop the decimal part so a CSV cell reads "500"
    rather than "500.0".
    """
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


# =============================================================================
# Text Utilities
# =============================================================================

def quote_csv_text(value: str | None) -> str:
    """
    Wrap free text in double quotes, doubling any embedded quote.

    Example:
        quote_csv_text('Pago "extra"') gives the field Pago ""extra""
        enclosed in one more pair of double quotes.
    """
    text = value or ""
    return '"' + text.replace('"', '""') + '"'
