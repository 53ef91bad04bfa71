# =============================================================================
# lib/user_store.py - User Record Store
# =============================================================================
# Storage contract for accounts, profiles, links and seals, plus the
# in-memory backend used for development and tests.
#
# The user id is the only key records are written under. Usernames are a
# unique handle resolved to an id on lookup.
#
# Reads return copies: changing a returned record never changes the store.
# Experiences are filtered to verified seals unless include_pending=True.
#
# Usage:
#   store = InMemoryUserStore()
#   store.create(UserRecord(username="alice", display_name="alice"))
#   user = store.find_by_username("alice")
# =============================================================================

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any

from core.models.user import Experience, SealStatus, SocialLinks, UserRecord

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("display_name", "bio", "avatar_url", "links")


class UserStoreError(Exception):
    """
    Error during user store operations.
    """

    def __init__(
        self,
        message: str,
        code: str = "USER_STORE_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class DuplicateUsernameError(UserStoreError):
    """Raised when creating a user whose username already exists."""

    def __init__(self, username: str):
        super().__init__(
            message=f"Username already exists: {username}",
            code="DUPLICATE_USERNAME",
            details={"username": username},
        )
        self.username = username


class UserStore(ABC):
    """
    Capability interface for persisting users.

    Backends must make create() atomic across the user and profile parts
    and cascade delete() to links and experiences.
    """

    @abstractmethod
    def find_by_username(self, username: str, include_pending: bool = False) -> UserRecord | None:
        """Look up a user by handle."""

    @abstractmethod
    def find_by_id(self, user_id: str, include_pending: bool = False) -> UserRecord | None:
        """Look up a user by stable id."""

    @abstractmethod
    def create(self, user: UserRecord) -> None:
        """
        Persist a new user.

        Raises:
            DuplicateUsernameError: If the username is taken
        """

    @abstractmethod
    def list_all(self, limit: int = 100) -> list[UserRecord]:
        """Return up to `limit` users, oldest first."""

    @abstractmethod
    def update_profile(self, user_id: str, changes: dict[str, Any]) -> bool:
        """
        Apply profile changes (display_name, bio, avatar_url, links).

        Only keys present in `changes` are touched. `links` replaces the
        whole link set.

        Returns:
            False if the user doesn't exist
        """

    @abstractmethod
    def delete(self, user_id: str) -> bool:
        """Delete a user and everything it owns. Returns whether a row was removed."""

    @abstractmethod
    def add_experience(self, user_id: str, experience: Experience) -> None:
        """Append a seal to the target user's record."""

    @abstractmethod
    def set_experience_status(
        self,
        user_id: str,
        experience_id: str,
        status: SealStatus,
    ) -> Experience | None:
        """Change a seal's status. Returns None if the seal isn't on this user."""


def normalize_links(links: SocialLinks | dict[str, Any] | None) -> SocialLinks:
    """Coerce links input to SocialLinks with empty values dropped."""
    if links is None:
        return SocialLinks()
    if isinstance(links, dict):
        links = SocialLinks(**links)
    return links.cleaned()


def visible_experiences(experiences: list[Experience], include_pending: bool) -> list[Experience]:
    if include_pending:
        return list(experiences)
    return [exp for exp in experiences if exp.is_verified]


class InMemoryUserStore(UserStore):
    """
    Dict-backed store. Each operation holds a lock, so single operations
    are atomic; separate requests still race last-write-wins.
    """

    def __init__(self, seed: list[UserRecord] | None = None):
        self._lock = threading.Lock()
        self._users: dict[str, UserRecord] = {}
        self._ids_by_username: dict[str, str] = {}

        for user in seed or []:
            self.create(user)

    def _snapshot(self, user: UserRecord, include_pending: bool) -> UserRecord:
        copy = user.model_copy(deep=True)
        copy.experiences = visible_experiences(copy.experiences, include_pending)
        return copy

    def find_by_username(self, username: str, include_pending: bool = False) -> UserRecord | None:
        with self._lock:
            user_id = self._ids_by_username.get(username)
            if user_id is None:
                return None
            return self._snapshot(self._users[user_id], include_pending)

    def find_by_id(self, user_id: str, include_pending: bool = False) -> UserRecord | None:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            return self._snapshot(user, include_pending)

    def create(self, user: UserRecord) -> None:
        with self._lock:
            if user.username in self._ids_by_username:
                raise DuplicateUsernameError(user.username)
            if user.id in self._users:
                raise UserStoreError(
                    message=f"User id already exists: {user.id}",
                    code="DUPLICATE_ID",
                    details={"user_id": user.id},
                )

            stored = user.model_copy(deep=True)
            stored.links = normalize_links(stored.links)
            self._users[stored.id] = stored
            self._ids_by_username[stored.username] = stored.id

        logger.debug(f"Stored user {user.id} ({user.username})")

    def list_all(self, limit: int = 100) -> list[UserRecord]:
        with self._lock:
            ordered = sorted(self._users.values(), key=lambda u: (u.created_at, u.id))
            return [self._snapshot(user, include_pending=False) for user in ordered[:max(limit, 0)]]

    def update_profile(self, user_id: str, changes: dict[str, Any]) -> bool:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return False

            for field in PROFILE_FIELDS:
                if field not in changes:
                    continue
                if field == "links":
                    user.links = normalize_links(changes["links"])
                else:
                    setattr(user, field, changes[field])
            return True

    def delete(self, user_id: str) -> bool:
        with self._lock:
            user = self._users.pop(user_id, None)
            if user is None:
                return False
            self._ids_by_username.pop(user.username, None)
            return True

    def add_experience(self, user_id: str, experience: Experience) -> None:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                raise UserStoreError(
                    message=f"Cannot add experience, user not found: {user_id}",
                    code="USER_NOT_FOUND",
                    details={"user_id": user_id},
                )
            user.experiences.append(experience.model_copy(deep=True))

    def set_experience_status(
        self,
        user_id: str,
        experience_id: str,
        status: SealStatus,
    ) -> Experience | None:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            for experience in user.experiences:
                if experience.id == experience_id:
                    experience.status = status
                    return experience.model_copy(deep=True)
            return None
