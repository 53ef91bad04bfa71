# =============================================================================
# tests/test_seal_service.py - Seal Service Tests
# =============================================================================
# Tests for the seal workflow in both trust modes:
# - authorized: company-only issuers, seals start pending
# - open: anonymous demo issuer, seals verified immediately
#
# Run with: pytest tests/test_seal_service.py -v
# =============================================================================

import pytest
from pydantic import ValidationError

from app.exceptions import PolicyError, SealNotFoundError, UnauthorizedError, UserNotFoundError
from core.models import AccountType, SealRequest, SealStatus
from tests.conftest import make_user


def _request(target: str = "alice", **overrides) -> SealRequest:
    data = {"personHandle": target, "role": "Engineer", "period": "2023-2024"}
    data.update(overrides)
    return SealRequest(**data)


class TestAuthorizedMode:
    """Company-only, pending-by-default sealing."""

    def test_company_seals_person(self, seal_service, store, company, alice):
        experience = seal_service.request_seal(company, _request())

        assert experience.sealed_by_org_name == "AcmeCo"
        assert experience.sealed_by_org_id == company.id
        assert experience.status == SealStatus.PENDING
        assert experience.role == "Engineer"
        assert experience.period == "2023-2024"
        assert experience.description == ""

        stored = store.find_by_id(alice.id, include_pending=True)
        assert [e.id for e in stored.experiences] == [experience.id]

    def test_pending_seal_not_public(self, seal_service, profile_service, company, alice):
        seal_service.request_seal(company, _request())
        assert profile_service.get("alice").experiences == []

    def test_anonymous_rejected(self, seal_service, alice):
        with pytest.raises(UnauthorizedError):
            seal_service.request_seal(None, _request())

    def test_person_issuer_rejected(self, seal_service, store, alice):
        bob = make_user(store, "bob", AccountType.PERSON)

        with pytest.raises(PolicyError):
            seal_service.request_seal(bob, _request())

        assert store.find_by_id(alice.id, include_pending=True).experiences == []

    def test_institution_issuer_rejected(self, seal_service, store, alice):
        uni = make_user(store, "state_uni", AccountType.INSTITUTION)

        with pytest.raises(PolicyError):
            seal_service.request_seal(uni, _request())

    def test_company_target_rejected(self, seal_service, store, company):
        other = make_user(store, "OtherCo", AccountType.COMPANY)

        with pytest.raises(PolicyError):
            seal_service.request_seal(company, _request("OtherCo"))

        assert store.find_by_id(other.id, include_pending=True).experiences == []

    def test_unknown_target(self, seal_service, company):
        with pytest.raises(UserNotFoundError):
            seal_service.request_seal(company, _request("nobody"))

    def test_issuer_name_captured_at_issuance(self, seal_service, store, company, alice):
        """Renaming the issuer later doesn't rewrite existing seals."""
        experience = seal_service.request_seal(company, _request())
        store.update_profile(company.id, {"display_name": "Acme Renamed"})

        stored = store.find_by_id(alice.id, include_pending=True).experiences[0]
        assert stored.id == experience.id
        assert stored.sealed_by_org_name == "AcmeCo"

    def test_duplicates_not_deduplicated(self, seal_service, store, company, alice):
        seal_service.request_seal(company, _request())
        seal_service.request_seal(company, _request())

        assert len(store.find_by_id(alice.id, include_pending=True).experiences) == 2


class TestConfirmSeal:
    """Pending -> verified transition."""

    def test_person_confirms(self, seal_service, profile_service, company, alice):
        experience = seal_service.request_seal(company, _request())

        confirmed = seal_service.confirm_seal(alice, experience.id)

        assert confirmed.status == SealStatus.VERIFIED
        public = profile_service.get("alice").experiences
        assert [e.sealed_by_org_name for e in public] == ["AcmeCo"]

    def test_confirm_is_idempotent(self, seal_service, company, alice):
        experience = seal_service.request_seal(company, _request())
        seal_service.confirm_seal(alice, experience.id)

        again = seal_service.confirm_seal(alice, experience.id)
        assert again.status == SealStatus.VERIFIED

    def test_cannot_confirm_someone_elses_seal(self, seal_service, store, company, alice):
        bob = make_user(store, "bob")
        experience = seal_service.request_seal(company, _request())

        with pytest.raises(SealNotFoundError):
            seal_service.confirm_seal(bob, experience.id)

    def test_unknown_seal(self, seal_service, alice):
        with pytest.raises(SealNotFoundError):
            seal_service.confirm_seal(alice, "missing")

    def test_list_own_seals_includes_pending(self, seal_service, company, alice):
        seal_service.request_seal(company, _request())

        seals = seal_service.list_own_seals(alice)
        assert [s.status for s in seals] == [SealStatus.PENDING]


class TestOpenMode:
    """Public demo sealing."""

    def test_anonymous_seal_verified(self, open_seal_service, profile_service, alice):
        experience = open_seal_service.request_seal(None, _request(description="Platform team"))

        assert experience.status == SealStatus.VERIFIED
        assert experience.sealed_by_org_id == "demo_company"
        assert experience.sealed_by_org_name == "Demo Company"
        assert experience.description == "Platform team"

        public = profile_service.get("alice").experiences
        assert [e.id for e in public] == [experience.id]

    def test_demo_issuer_ignores_caller(self, open_seal_service, store, alice):
        bob = make_user(store, "bob")
        experience = open_seal_service.request_seal(bob, _request())
        assert experience.sealed_by_org_name == "Demo Company"

    def test_target_rules_still_apply(self, open_seal_service, company):
        with pytest.raises(PolicyError):
            open_seal_service.request_seal(None, _request("AcmeCo"))


class TestSealRequestValidation:
    """Schema-level seal validation."""

    def test_role_too_long(self):
        with pytest.raises(ValidationError):
            _request(role="x" * 101)

    def test_period_required(self):
        with pytest.raises(ValidationError):
            _request(period="")

    def test_description_too_long(self):
        with pytest.raises(ValidationError):
            _request(description="x" * 281)

    def test_snake_case_accepted(self):
        request = SealRequest(person_handle="alice", role="Engineer", period="2023")
        assert request.person_handle == "alice"
