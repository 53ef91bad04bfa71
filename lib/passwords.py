# =============================================================================
# lib/passwords.py - Password Credential Store
# =============================================================================
# Salts, hashes and verifies account passwords.
#
# Stored credential formats:
# - "<salt_hex>:<digest_hex>"  SHA-256 over salt_hex + password (current)
# - "hashed_<password>"        plaintext convention from the first release
#
# Both shapes are parsed into a tagged credential so the dual verification
# path stays explicit.
#
# Usage:
#   from lib.passwords import hash_password, check_credential
#   stored = hash_password("correct horse")
#   check_credential("correct horse", stored)  # True
# =============================================================================

from __future__ import annotations

import hashlib
import hmac
import secrets
from dataclasses import dataclass

SALT_BYTES = 16
SEPARATOR = ":"
LEGACY_PREFIX = "hashed_"


@dataclass(frozen=True)
class LegacyPlainCredential:
    """Credential stored as ``hashed_<password>`` by the first release."""
    secret: str

    def matches(self, password: str) -> bool:
        return hmac.compare_digest(self.secret.encode("utf-8"), password.encode("utf-8"))


@dataclass(frozen=True)
class SaltedCredential:
    """Credential stored as ``<salt_hex>:<digest_hex>``."""
    salt: str
    digest: str

    def matches(self, password: str) -> bool:
        return hmac.compare_digest(_digest(self.salt, password), self.digest)

    def encode(self) -> str:
        return f"{self.salt}{SEPARATOR}{self.digest}"


Credential = LegacyPlainCredential | SaltedCredential


def _digest(salt_hex: str, password: str) -> str:
    return hashlib.sha256((salt_hex + password).encode("utf-8")).hexdigest()


def hash_password(password: str) -> str:
    """
    Hash a password with a fresh random salt.

    Returns:
        Credential string "<salt_hex>:<digest_hex>"
    """
    salt_hex = secrets.token_bytes(SALT_BYTES).hex()
    return SaltedCredential(salt=salt_hex, digest=_digest(salt_hex, password)).encode()


def verify_password(password: str, credential: str) -> bool:
    """
    Verify a password against a salted credential string.

    Returns False for malformed credentials instead of raising.
    """
    salt_hex, sep, digest_hex = credential.partition(SEPARATOR)
    if not sep or not salt_hex or not digest_hex:
        return False
    return SaltedCredential(salt=salt_hex, digest=digest_hex).matches(password)


def parse_credential(stored: str | None) -> Credential | None:
    """
    Parse a stored credential string into its tagged shape.

    Returns None when the value is empty or matches neither format.
    """
    if not stored:
        return None

    if stored.startswith(LEGACY_PREFIX):
        return LegacyPlainCredential(secret=stored[len(LEGACY_PREFIX):])

    salt_hex, sep, digest_hex = stored.partition(SEPARATOR)
    if sep and salt_hex and digest_hex:
        return SaltedCredential(salt=salt_hex, digest=digest_hex)

    return None


def check_credential(password: str, stored: str | None) -> bool:
    """
    Check a login password against whatever credential the account holds.

    The legacy plaintext convention is tried first, then salted
    verification. Accounts without a credential never match.
    """
    credential = parse_credential(stored)
    if credential is None:
        return False

    if isinstance(credential, LegacyPlainCredential) and credential.matches(password):
        return True

    # A legacy password may itself contain the separator, so the salted
    # path runs for both shapes.
    return verify_password(password, stored)
