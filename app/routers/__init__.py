# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - users.py: Public profile listing and lookup
# - profile.py: Update/delete own profile (bearer token)
# - seals.py: Seal issuance and confirmation
# - client_errors.py: Frontend error reporting
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import users
from . import profile
from . import seals
from . import client_errors

__all__ = [
    "health",
    "users",
    "profile",
    "seals",
    "client_errors",
]
