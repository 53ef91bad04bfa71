# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Provides stores, services and an API client wired to a fresh store
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

TEST_SECRET = "test-secret-key-0123456789abcdef"

os.environ.setdefault("JWT_SECRET", TEST_SECRET)
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("SEAL_MODE", "authorized")
os.environ.setdefault("CORS_ORIGINS", "http://localhost:3000,https://theirbio.example.com")

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_token_issuer, get_user_store
from app.main import app
from core.models import AccountType, SealMode, UserRecord
from core.services import AuthService, IssuerIdentity, ProfileService, SealService
from lib.passwords import hash_password
from lib.tokens import TokenClaims, TokenIssuer
from lib.user_store import InMemoryUserStore

TEST_PASSWORD = "Sup3rSecret!"


# =============================================================================
# Helpers
# =============================================================================

def make_user(
    store: InMemoryUserStore,
    username: str,
    account_type: AccountType = AccountType.PERSON,
    password: str | None = TEST_PASSWORD,
    **fields,
) -> UserRecord:
    """Create and store a user directly, bypassing the API."""
    user = UserRecord(
        username=username,
        password_hash=fields.pop("password_hash", hash_password(password) if password else None),
        account_type=account_type,
        display_name=fields.pop("display_name", username),
        **fields,
    )
    store.create(user)
    return user


def auth_header(tokens: TokenIssuer, user: UserRecord) -> dict[str, str]:
    token = tokens.issue(TokenClaims(sub=user.id, username=user.username))
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def store():
    """Empty in-memory user store."""
    return InMemoryUserStore()


@pytest.fixture
def tokens():
    """Token issuer with the test secret."""
    return TokenIssuer(secret=TEST_SECRET)


@pytest.fixture
def auth_service(store, tokens):
    return AuthService(store, tokens, reserved_usernames=frozenset({"admin", "root", "api"}))


@pytest.fixture
def seal_service(store):
    """Seal service in authorized (production) mode."""
    return SealService(store, mode=SealMode.AUTHORIZED)


@pytest.fixture
def open_seal_service(store):
    """Seal service in open (demo) mode."""
    return SealService(
        store,
        mode=SealMode.OPEN,
        demo_issuer=IssuerIdentity(id="demo_company", name="Demo Company"),
    )


@pytest.fixture
def profile_service(store):
    return ProfileService(store)


@pytest.fixture
def company(store):
    return make_user(store, "AcmeCo", AccountType.COMPANY, display_name="AcmeCo")


@pytest.fixture
def alice(store):
    return make_user(store, "alice", AccountType.PERSON, display_name="Alice")


@pytest.fixture
def client(store, tokens):
    """API client wired to the test store and token issuer."""
    app.dependency_overrides[get_user_store] = lambda: store
    app.dependency_overrides[get_token_issuer] = lambda: tokens
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
