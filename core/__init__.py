# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic:
# - models/: Pydantic schemas for transactions, users and reports
# - services/: Transaction, user and report operations over Supabase
#
# Routes stay thin; services raise the error types from app.exceptions
# and the pure report functions can be tested without a database.
# =============================================================================
