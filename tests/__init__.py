# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the theirBio API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_passwords.py / test_tokens.py: Credential and session token helpers
# - test_user_store.py / test_supabase_store.py: Storage backends
# - test_*_service.py: Business logic for auth, profiles and seals
# - test_api.py: Integration tests for API endpoints
#
# Run tests with: pytest
# =============================================================================
