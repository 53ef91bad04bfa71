# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the public models to ensure:
# - Wire format is camelCase and input accepts either case
# - Projections never carry the password credential
# - Default values work as expected
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

import json

import pytest
from pydantic import ValidationError

from core.models import (
    AccountType,
    ApiResponse,
    Experience,
    Profile,
    PublicUser,
    SealStatus,
    SocialLinks,
    UserRecord,
)
from core.models.user import default_avatar_url


# =============================================================================
# UserRecord projections
# =============================================================================

class TestUserRecord:
    """Tests for UserRecord and its public projections."""

    def test_defaults(self):
        user = UserRecord(username="alice", display_name="alice")

        assert user.id
        assert user.account_type == AccountType.PERSON
        assert user.password_hash is None
        assert user.experiences == []
        assert user.created_at.tzinfo is not None

    def test_ids_unique(self):
        first = UserRecord(username="a_1", display_name="a")
        second = UserRecord(username="a_2", display_name="a")
        assert first.id != second.id

    def test_to_profile_drops_id_and_credential(self):
        user = UserRecord(username="alice", display_name="Alice", password_hash="salt:digest")

        payload = json.loads(user.to_profile().model_dump_json(by_alias=True))

        assert payload["displayName"] == "Alice"
        assert "id" not in payload
        assert "salt:digest" not in json.dumps(payload)

    def test_to_public_keeps_id(self):
        user = UserRecord(username="alice", display_name="Alice", password_hash="salt:digest")

        public = user.to_public()

        assert isinstance(public, PublicUser)
        assert public.id == user.id
        assert "passwordHash" not in public.model_dump(by_alias=True)


# =============================================================================
# Experience
# =============================================================================

class TestExperience:
    """Tests for the seal entry model."""

    def test_defaults_to_pending(self):
        experience = Experience(
            role="Engineer",
            period="2024",
            sealed_by_org_id="org-1",
            sealed_by_org_name="AcmeCo",
        )

        assert experience.status == SealStatus.PENDING
        assert not experience.is_verified
        assert experience.description == ""
        assert experience.sealed_at is not None

    def test_camel_case_output(self):
        experience = Experience(
            role="Engineer",
            period="2024",
            sealed_by_org_id="org-1",
            sealed_by_org_name="AcmeCo",
            status=SealStatus.VERIFIED,
        )

        dumped = experience.model_dump(by_alias=True, mode="json")

        assert dumped["sealedByOrgName"] == "AcmeCo"
        assert dumped["sealedByOrgId"] == "org-1"
        assert dumped["status"] == "verified"
        assert "sealedAt" in dumped

    def test_camel_case_input(self):
        experience = Experience(
            role="Engineer",
            period="2024",
            sealedByOrgId="org-1",
            sealedByOrgName="AcmeCo",
        )
        assert experience.sealed_by_org_name == "AcmeCo"


# =============================================================================
# SocialLinks
# =============================================================================

class TestSocialLinks:
    """Tests for the fixed link set."""

    def test_cleaned_drops_empty(self):
        links = SocialLinks(website="", github="https://github.com/alice")

        cleaned = links.cleaned()

        assert cleaned.website is None
        assert cleaned.present() == {"github": "https://github.com/alice"}

    def test_rejects_non_url(self):
        with pytest.raises(ValidationError) as exc_info:
            SocialLinks(twitter="@alice")
        assert "Must be a valid URL" in str(exc_info.value)

    def test_unknown_keys_ignored(self):
        links = SocialLinks(mastodon="https://mastodon.social/@alice")
        assert links.present() == {}


# =============================================================================
# Avatars and enums
# =============================================================================

class TestDefaults:
    """Tests for avatar defaults and enum values."""

    def test_person_avatar(self):
        assert default_avatar_url("alice", AccountType.PERSON) == (
            "https://api.dicebear.com/8.x/lorelei/svg?seed=alice"
        )

    @pytest.mark.parametrize("account_type", [AccountType.COMPANY, AccountType.INSTITUTION])
    def test_organization_avatar(self, account_type):
        assert "/icons/" in default_avatar_url("acme", account_type)

    def test_account_type_values(self):
        assert {t.value for t in AccountType} == {"person", "company", "institution"}

    def test_profile_requires_account_type(self):
        with pytest.raises(ValidationError):
            Profile(username="alice", display_name="Alice")


# =============================================================================
# Envelope
# =============================================================================

class TestApiResponse:
    """Tests for the response envelope."""

    def test_ok(self):
        response = ApiResponse[dict].ok({"x": 1})

        assert response.model_dump(exclude_none=True) == {"success": True, "data": {"x": 1}}

    def test_fail(self):
        response = ApiResponse.fail("NOT_FOUND", "User not found")

        assert response.model_dump(exclude_none=True) == {
            "success": False,
            "error": {"code": "NOT_FOUND", "message": "User not found"},
        }
