# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper & User Store
# =============================================================================
# This module provides the Postgres-backed UserStore on top of Supabase.
# It implements the singleton pattern to reuse a single client connection.
#
# Tables (ids are UUID strings, user_id foreign keys cascade on delete):
# - users:       id, username (unique), password_hash, account_type, created_at
# - profiles:    user_id, display_name, bio, avatar_url
# - links:       id, user_id, title, url, icon, sort_order, created_at
# - experiences: id, user_id, role, period, description, sealed_by_user_id,
#                organization_name, organization_avatar_url, is_verified,
#                sealed_at
#
# Usage:
#   from lib.supabase_client import SupabaseClient, SupabaseUserStore
#   store = SupabaseUserStore(SupabaseClient.get_client())
#   user = store.find_by_username("alice")
# =============================================================================

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from supabase import create_client, Client

from app.config import settings
from core.models.user import AccountType, Experience, LINK_KEYS, SealStatus, SocialLinks, UserRecord
from lib.user_store import DuplicateUsernameError, UserStore, UserStoreError, normalize_links

# Set up logging for this module
logger = logging.getLogger(__name__)

LINK_TITLES = {
    "website": "Website",
    "github": "GitHub",
    "twitter": "Twitter",
    "linkedin": "LinkedIn",
}

# PostgREST/Postgres unique violation
UNIQUE_VIOLATION = "23505"


class SupabaseClientError(UserStoreError):
    """
    Error during Supabase operations.

    Carries a suggestion telling HOW to fix the problem, not just WHAT failed.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, details=details)
        self.suggestion = suggestion

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Singleton holder for the Supabase client.

    Uses the service_role key, which bypasses Row Level Security.
    This is appropriate for server-side operations.
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Raises:
            SupabaseClientError: If configuration is missing or creation fails
        """
        if cls._instance is None:
            if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_KEY:
                raise SupabaseClientError(
                    message="Supabase is not configured",
                    code="CLIENT_NOT_CONFIGURED",
                    suggestion="Set SUPABASE_URL and SUPABASE_SERVICE_KEY, or use STORAGE_BACKEND=memory",
                )
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance


class SupabaseUserStore(UserStore):
    """
    UserStore backed by Supabase tables.

    Every read joins users, profiles, links and experiences into a
    full UserRecord.
    """

    def __init__(self, client: Client):
        self.client = client

    # -------------------------------------------------------------------------
    # Row mapping
    # -------------------------------------------------------------------------

    @staticmethod
    def _to_timestamp(value: datetime) -> str:
        return value.astimezone(timezone.utc).isoformat()

    @staticmethod
    def _experience_from_row(row: dict[str, Any]) -> Experience:
        return Experience(
            id=row["id"],
            role=row["role"],
            period=row["period"],
            description=row.get("description") or "",
            sealed_by_org_id=row["sealed_by_user_id"],
            sealed_by_org_name=row["organization_name"],
            sealed_by_org_avatar_url=row.get("organization_avatar_url") or "",
            status=SealStatus.VERIFIED if row.get("is_verified") else SealStatus.PENDING,
            sealed_at=row["sealed_at"],
        )

    def _experience_to_row(self, user_id: str, experience: Experience) -> dict[str, Any]:
        return {
            "id": experience.id,
            "user_id": user_id,
            "role": experience.role,
            "period": experience.period,
            "description": experience.description,
            "sealed_by_user_id": experience.sealed_by_org_id,
            "organization_name": experience.sealed_by_org_name,
            "organization_avatar_url": experience.sealed_by_org_avatar_url,
            "is_verified": experience.is_verified,
            "sealed_at": self._to_timestamp(experience.sealed_at),
        }

    @staticmethod
    def _links_from_rows(rows: list[dict[str, Any]]) -> SocialLinks:
        links = {row["icon"]: row["url"] for row in rows if row.get("icon") in LINK_KEYS}
        return SocialLinks(**links)

    def _build_record(
        self,
        user_row: dict[str, Any],
        include_pending: bool,
    ) -> UserRecord:
        user_id = user_row["id"]

        try:
            profile_rows = (
                self.client.table("profiles")
                .select("*")
                .eq("user_id", user_id)
                .limit(1)
                .execute()
            ).data or []

            link_rows = (
                self.client.table("links")
                .select("*")
                .eq("user_id", user_id)
                .order("sort_order")
                .execute()
            ).data or []

            experience_query = (
                self.client.table("experiences")
                .select("*")
                .eq("user_id", user_id)
            )
            if not include_pending:
                experience_query = experience_query.eq("is_verified", True)
            experience_rows = experience_query.order("sealed_at").execute().data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to load user details: {e}",
                code="FETCH_USER_DETAILS_FAILED",
                suggestion="Check that the profiles, links and experiences tables exist",
                details={"user_id": user_id},
            )

        profile = profile_rows[0] if profile_rows else {}

        return UserRecord(
            id=user_id,
            username=user_row["username"],
            password_hash=user_row.get("password_hash"),
            account_type=AccountType(user_row.get("account_type") or AccountType.PERSON.value),
            display_name=profile.get("display_name") or user_row["username"],
            bio=profile.get("bio") or "",
            avatar_url=profile.get("avatar_url") or "",
            links=self._links_from_rows(link_rows),
            experiences=[self._experience_from_row(row) for row in experience_rows],
            created_at=user_row.get("created_at") or datetime.now(timezone.utc),
        )

    def _find_one(self, column: str, value: str, include_pending: bool) -> UserRecord | None:
        try:
            rows = (
                self.client.table("users")
                .select("*")
                .eq(column, value)
                .limit(1)
                .execute()
            ).data or []
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch user: {e}",
                code="FETCH_USER_FAILED",
                suggestion="Check that the users table exists and is accessible",
                details={column: value},
            )

        if not rows:
            return None
        return self._build_record(rows[0], include_pending)

    # -------------------------------------------------------------------------
    # UserStore contract
    # -------------------------------------------------------------------------

    def find_by_username(self, username: str, include_pending: bool = False) -> UserRecord | None:
        return self._find_one("username", username, include_pending)

    def find_by_id(self, user_id: str, include_pending: bool = False) -> UserRecord | None:
        return self._find_one("id", user_id, include_pending)

    def create(self, user: UserRecord) -> None:
        if self._find_one("username", user.username, include_pending=False) is not None:
            raise DuplicateUsernameError(user.username)

        try:
            self.client.table("users").insert({
                "id": user.id,
                "username": user.username,
                "password_hash": user.password_hash,
                "account_type": user.account_type.value,
                "created_at": self._to_timestamp(user.created_at),
            }).execute()
        except Exception as e:
            if UNIQUE_VIOLATION in str(e):
                raise DuplicateUsernameError(user.username)
            raise SupabaseClientError(
                message=f"Failed to create user: {e}",
                code="CREATE_USER_FAILED",
                details={"username": user.username},
            )

        try:
            self.client.table("profiles").insert({
                "user_id": user.id,
                "display_name": user.display_name or user.username,
                "bio": user.bio,
                "avatar_url": user.avatar_url,
            }).execute()
            self._replace_links(user.id, user.links)
        except Exception as e:
            # Keep user + profile all-or-nothing
            logger.error(f"Profile insert failed for {user.id}, removing user row: {e}")
            self.client.table("users").delete().eq("id", user.id).execute()
            raise SupabaseClientError(
                message=f"Failed to create profile: {e}",
                code="CREATE_PROFILE_FAILED",
                details={"user_id": user.id},
            )

        logger.info(f"Created user {user.id} ({user.username})")

    def list_all(self, limit: int = 100) -> list[UserRecord]:
        try:
            rows = (
                self.client.table("users")
                .select("*")
                .order("created_at")
                .order("id")
                .limit(limit)
                .execute()
            ).data or []
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to list users: {e}",
                code="LIST_USERS_FAILED",
                details={"limit": limit},
            )

        return [self._build_record(row, include_pending=False) for row in rows]

    def update_profile(self, user_id: str, changes: dict[str, Any]) -> bool:
        previous = self._find_one("id", user_id, include_pending=False)
        if previous is None:
            return False

        update_data = {
            field: changes[field]
            for field in ("display_name", "bio", "avatar_url")
            if field in changes
        }

        try:
            if update_data:
                (
                    self.client.table("profiles")
                    .update(update_data)
                    .eq("user_id", user_id)
                    .execute()
                )
            if "links" in changes:
                self._replace_links(user_id, normalize_links(changes["links"]))
        except Exception as e:
            # Keep the update all-or-nothing
            logger.error(f"Failed to update profile for {user_id}, restoring previous values: {e}")
            self._restore_profile(previous, list(update_data), restore_links="links" in changes)
            raise SupabaseClientError(
                message=f"Failed to update profile: {e}",
                code="UPDATE_PROFILE_FAILED",
                details={"user_id": user_id},
            )

        return True

    def _restore_profile(self, previous: UserRecord, fields: list[str], restore_links: bool) -> None:
        """Write back the pre-update profile fields and link set."""
        try:
            if fields:
                (
                    self.client.table("profiles")
                    .update({field: getattr(previous, field) for field in fields})
                    .eq("user_id", previous.id)
                    .execute()
                )
            if restore_links:
                self._replace_links(previous.id, previous.links)
        except Exception as e:
            logger.exception(f"Could not restore profile for {previous.id}: {e}")

    def _replace_links(self, user_id: str, links: SocialLinks) -> None:
        self.client.table("links").delete().eq("user_id", user_id).execute()

        created_at = self._to_timestamp(datetime.now(timezone.utc))
        rows = [
            {
                "id": str(uuid4()),
                "user_id": user_id,
                "title": LINK_TITLES[key],
                "url": url,
                "icon": key,
                "sort_order": index,
                "created_at": created_at,
            }
            for index, (key, url) in enumerate(links.present().items())
        ]
        if rows:
            self.client.table("links").insert(rows).execute()

    def delete(self, user_id: str) -> bool:
        try:
            response = (
                self.client.table("users")
                .delete()
                .eq("id", user_id)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete user: {e}",
                code="DELETE_USER_FAILED",
                details={"user_id": user_id},
            )

        return bool(response.data)

    def add_experience(self, user_id: str, experience: Experience) -> None:
        try:
            (
                self.client.table("experiences")
                .insert(self._experience_to_row(user_id, experience))
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to add experience: {e}",
                code="ADD_EXPERIENCE_FAILED",
                details={"user_id": user_id},
            )

    def set_experience_status(
        self,
        user_id: str,
        experience_id: str,
        status: SealStatus,
    ) -> Experience | None:
        try:
            response = (
                self.client.table("experiences")
                .update({"is_verified": status == SealStatus.VERIFIED})
                .eq("id", experience_id)
                .eq("user_id", user_id)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update experience: {e}",
                code="UPDATE_EXPERIENCE_FAILED",
                details={"user_id": user_id, "experience_id": experience_id},
            )

        if not response.data:
            return None
        return self._experience_from_row(response.data[0])
