# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable building blocks:
# - passwords.py: Salted password hashing and legacy credential checks
# - tokens.py: Signed, time-limited session tokens (JWT)
# - user_store.py: UserStore contract and in-memory backend
# - supabase_client.py: Supabase-backed UserStore
# - seed_data.py: Demo profiles for development
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.passwords import check_credential, hash_password, parse_credential, verify_password
from lib.tokens import TokenClaims, TokenConfigurationError, TokenIssuer
from lib.user_store import DuplicateUsernameError, InMemoryUserStore, UserStore, UserStoreError

__all__ = [
    # Passwords
    "check_credential",
    "hash_password",
    "parse_credential",
    "verify_password",
    # Tokens
    "TokenClaims",
    "TokenConfigurationError",
    "TokenIssuer",
    # Store
    "DuplicateUsernameError",
    "InMemoryUserStore",
    "UserStore",
    "UserStoreError",
]
