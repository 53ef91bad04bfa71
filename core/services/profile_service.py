# =============================================================================
# core/services/profile_service.py - Profile Business Logic
# =============================================================================
# Read/update projection of stored users into public profiles.
# Profiles never carry the password credential and only show verified seals.
# =============================================================================

import logging

from app.exceptions import UserNotFoundError
from core.models.user import Profile, ProfileUpdate
from lib.user_store import UserStore

logger = logging.getLogger(__name__)


class ProfileService:
    """
    Service for public profile reads and owner updates.
    """

    def __init__(self, store: UserStore, list_limit: int = 100):
        self.store = store
        self.list_limit = list_limit

    def get(self, username: str) -> Profile:
        """
        Get a public profile by username.

        Raises:
            UserNotFoundError: If the username doesn't exist
        """
        user = self.store.find_by_username(username)
        if user is None:
            raise UserNotFoundError(username, message="User profile not found")
        return user.to_profile()

    def list_all(self, limit: int | None = None) -> list[Profile]:
        """List profiles, capped at the configured limit."""
        limit = self.list_limit if limit is None else min(max(limit, 0), self.list_limit)
        return [user.to_profile() for user in self.store.list_all(limit)]

    def update(self, user_id: str, update: ProfileUpdate) -> Profile:
        """
        Apply the fields present in `update` and return the fresh profile.

        Fields not sent (or sent as null) are left unchanged.

        Raises:
            UserNotFoundError: If the user no longer exists
        """
        changes = update.model_dump(exclude_unset=True, exclude_none=True)

        if changes and not self.store.update_profile(user_id, changes):
            raise UserNotFoundError()

        user = self.store.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError()

        if changes:
            logger.info(f"Updated profile {user_id}: {sorted(changes)}")
        return user.to_profile()

    def delete(self, user_id: str) -> None:
        """
        Delete an account and everything it owns.

        Raises:
            UserNotFoundError: If nothing was removed
        """
        if not self.store.delete(user_id):
            raise UserNotFoundError(message="User not found or already deleted.")
        logger.info(f"Deleted user {user_id}")
