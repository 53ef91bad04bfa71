# =============================================================================
# tests/test_supabase_store.py - Supabase User Store Tests
# =============================================================================
# Tests for the Supabase-backed store using a mocked client.
# Each table gets its own chainable mock so queries can be inspected.
#
# Run with: pytest tests/test_supabase_store.py -v
# =============================================================================

from unittest.mock import MagicMock, patch

import pytest

from core.models import AccountType, Experience, SealStatus, SocialLinks, UserRecord
from lib.supabase_client import SupabaseClient, SupabaseClientError, SupabaseUserStore
from lib.user_store import DuplicateUsernameError

USER_ROW = {
    "id": "11111111-1111-4111-8111-111111111111",
    "username": "alice",
    "password_hash": "salt:digest",
    "account_type": "person",
    "created_at": "2025-01-01T00:00:00+00:00",
}

EXPERIENCE_ROW = {
    "id": "exp-1",
    "user_id": USER_ROW["id"],
    "role": "Engineer",
    "period": "2023-2024",
    "description": None,
    "sealed_by_user_id": "org-1",
    "organization_name": "AcmeCo",
    "organization_avatar_url": None,
    "is_verified": True,
    "sealed_at": "2025-02-01T00:00:00+00:00",
}


def _table(*results):
    """Chainable table mock. Each execute() returns the next result's rows."""
    table = MagicMock()
    for method in ("select", "eq", "limit", "order", "insert", "update", "delete"):
        getattr(table, method).return_value = table

    responses = []
    for result in results or ([],):
        if isinstance(result, Exception):
            responses.append(result)
        else:
            responses.append(MagicMock(data=result))
    if len(responses) == 1 and not isinstance(responses[0], Exception):
        table.execute.return_value = responses[0]
    else:
        table.execute.side_effect = responses
    return table


def _client(**tables):
    client = MagicMock()
    client.table.side_effect = lambda name: tables.setdefault(name, _table())
    return client, tables


class TestReads:
    """Tests for find_by_username / find_by_id."""

    def test_joins_profile_links_and_experiences(self):
        client, _ = _client(
            users=_table([USER_ROW]),
            profiles=_table([{"user_id": USER_ROW["id"], "display_name": "Alice", "bio": "hi", "avatar_url": ""}]),
            links=_table([
                {"icon": "github", "url": "https://github.com/alice", "sort_order": 0},
                {"icon": "custom", "url": "https://ignored.example.com", "sort_order": 1},
            ]),
            experiences=_table([EXPERIENCE_ROW]),
        )
        store = SupabaseUserStore(client)

        user = store.find_by_username("alice")

        assert user.id == USER_ROW["id"]
        assert user.display_name == "Alice"
        assert user.account_type == AccountType.PERSON
        assert user.links.github == "https://github.com/alice"
        assert user.links.website is None
        assert len(user.experiences) == 1
        assert user.experiences[0].sealed_by_org_name == "AcmeCo"
        assert user.experiences[0].status == SealStatus.VERIFIED
        assert user.experiences[0].description == ""

    def test_public_read_filters_verified(self):
        client, tables = _client(users=_table([USER_ROW]))
        store = SupabaseUserStore(client)

        store.find_by_id(USER_ROW["id"])
        tables["experiences"].eq.assert_any_call("is_verified", True)

    def test_pending_read_unfiltered(self):
        client, tables = _client(users=_table([USER_ROW]))
        store = SupabaseUserStore(client)

        store.find_by_id(USER_ROW["id"], include_pending=True)

        calls = [c.args for c in tables["experiences"].eq.call_args_list]
        assert ("is_verified", True) not in calls

    def test_missing_profile_falls_back_to_username(self):
        client, _ = _client(users=_table([USER_ROW]))
        assert SupabaseUserStore(client).find_by_username("alice").display_name == "alice"

    def test_missing_user(self):
        client, _ = _client(users=_table([]))
        assert SupabaseUserStore(client).find_by_username("ghost") is None

    def test_query_failure_wrapped(self):
        client, _ = _client(users=_table(RuntimeError("connection refused")))

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseUserStore(client).find_by_username("alice")
        assert exc_info.value.code == "FETCH_USER_FAILED"


class TestCreate:
    """Tests for create()."""

    def _user(self) -> UserRecord:
        return UserRecord(
            username="alice",
            password_hash="salt:digest",
            display_name="Alice",
            links=SocialLinks(github="https://github.com/alice"),
        )

    def test_inserts_user_profile_and_links(self):
        client, tables = _client(users=_table([], []))
        store = SupabaseUserStore(client)
        user = self._user()

        store.create(user)

        inserted = tables["users"].insert.call_args.args[0]
        assert inserted["username"] == "alice"
        assert inserted["account_type"] == "person"
        profile = tables["profiles"].insert.call_args.args[0]
        assert profile["display_name"] == "Alice"
        link_rows = tables["links"].insert.call_args.args[0]
        assert [(r["icon"], r["title"]) for r in link_rows] == [("github", "GitHub")]

    def test_existing_username(self):
        client, tables = _client(users=_table([USER_ROW]))

        with pytest.raises(DuplicateUsernameError):
            SupabaseUserStore(client).create(self._user())
        tables["users"].insert.assert_not_called()

    def test_unique_violation_maps_to_duplicate(self):
        error = Exception("duplicate key value violates unique constraint (23505)")
        client, _ = _client(users=_table([], error))

        with pytest.raises(DuplicateUsernameError):
            SupabaseUserStore(client).create(self._user())

    def test_profile_failure_removes_user_row(self):
        client, tables = _client(
            users=_table([], [], []),
            profiles=_table(RuntimeError("profiles table missing")),
        )

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseUserStore(client).create(self._user())

        assert exc_info.value.code == "CREATE_PROFILE_FAILED"
        tables["users"].delete.assert_called_once()


class TestWrites:
    """Tests for update_profile, delete and seal writes."""

    def test_update_profile_missing_user(self):
        client, tables = _client(users=_table([]), profiles=_table())

        assert SupabaseUserStore(client).update_profile("missing", {"bio": "x"}) is False
        tables["profiles"].update.assert_not_called()

    def test_update_only_given_fields(self):
        client, tables = _client(users=_table([USER_ROW]))

        assert SupabaseUserStore(client).update_profile(USER_ROW["id"], {"bio": "new"})

        tables["profiles"].update.assert_called_once_with({"bio": "new"})
        tables["links"].delete.assert_not_called()

    def test_update_links_replaces_set(self):
        client, tables = _client(users=_table([USER_ROW]))

        SupabaseUserStore(client).update_profile(
            USER_ROW["id"], {"links": {"twitter": "https://twitter.com/alice", "github": ""}}
        )

        tables["links"].delete.assert_called_once()
        rows = tables["links"].insert.call_args.args[0]
        assert [r["icon"] for r in rows] == ["twitter"]

    def test_failed_link_write_restores_previous_profile(self):
        """A failure mid-update puts back the old bio and link set."""
        old_links = [{"icon": "github", "url": "https://github.com/alice", "sort_order": 0}]
        client, tables = _client(
            users=_table([USER_ROW]),
            profiles=_table([{"user_id": USER_ROW["id"], "display_name": "Alice", "bio": "old", "avatar_url": ""}]),
            # select, delete, failing insert, restore delete, restore insert
            links=_table(old_links, [], RuntimeError("links insert failed"), [], []),
        )

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseUserStore(client).update_profile(
                USER_ROW["id"],
                {"bio": "new", "links": SocialLinks(twitter="https://twitter.com/alice")},
            )

        assert exc_info.value.code == "UPDATE_PROFILE_FAILED"
        profile_updates = [c.args[0] for c in tables["profiles"].update.call_args_list]
        assert profile_updates == [{"bio": "new"}, {"bio": "old"}]
        restored = tables["links"].insert.call_args_list[-1].args[0]
        assert [(r["icon"], r["url"]) for r in restored] == [("github", "https://github.com/alice")]

    def test_delete(self):
        client, _ = _client(users=_table([USER_ROW]))
        assert SupabaseUserStore(client).delete(USER_ROW["id"]) is True

        client, _ = _client(users=_table([]))
        assert SupabaseUserStore(client).delete("missing") is False

    def test_add_experience_row(self):
        client, tables = _client()
        experience = Experience(
            role="Engineer",
            period="2024",
            sealed_by_org_id="org-1",
            sealed_by_org_name="AcmeCo",
        )

        SupabaseUserStore(client).add_experience(USER_ROW["id"], experience)

        row = tables["experiences"].insert.call_args.args[0]
        assert row["organization_name"] == "AcmeCo"
        assert row["sealed_by_user_id"] == "org-1"
        assert row["is_verified"] is False

    def test_set_experience_status(self):
        client, tables = _client(experiences=_table([EXPERIENCE_ROW]))

        updated = SupabaseUserStore(client).set_experience_status(
            USER_ROW["id"], "exp-1", SealStatus.VERIFIED
        )

        assert updated.id == "exp-1"
        tables["experiences"].update.assert_called_once_with({"is_verified": True})

    def test_set_experience_status_not_found(self):
        client, _ = _client(experiences=_table([]))

        result = SupabaseUserStore(client).set_experience_status(USER_ROW["id"], "nope", SealStatus.VERIFIED)
        assert result is None


class TestClientSingleton:
    """Tests for SupabaseClient.get_client."""

    def test_not_configured(self):
        with patch.object(SupabaseClient, "_instance", None), \
             patch("lib.supabase_client.settings") as mock_settings:
            mock_settings.SUPABASE_URL = None
            mock_settings.SUPABASE_SERVICE_KEY = None

            with pytest.raises(SupabaseClientError) as exc_info:
                SupabaseClient.get_client()

        assert exc_info.value.code == "CLIENT_NOT_CONFIGURED"
        assert "STORAGE_BACKEND=memory" in str(exc_info.value)

    def test_reuses_instance(self):
        with patch.object(SupabaseClient, "_instance", None), \
             patch("lib.supabase_client.settings") as mock_settings, \
             patch("lib.supabase_client.create_client") as mock_create:
            mock_settings.SUPABASE_URL = "https://example.supabase.co"
            mock_settings.SUPABASE_SERVICE_KEY = "service-key"

            first = SupabaseClient.get_client()
            second = SupabaseClient.get_client()

        assert first is second
        mock_create.assert_called_once_with("https://example.supabase.co", "service-key")
