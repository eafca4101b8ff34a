# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Ledger API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_auth.py: Role guard behaviour (401/403, fail-closed)
# - test_session.py: Session token verification and first sign-in
# - test_transactions_api.py / test_users_api.py: Endpoint tests
# - test_reports.py: Aggregation, CSV rendering and report endpoints
# - test_exceptions.py: Error body shape and messages
#
# Run tests with: pytest
# =============================================================================
