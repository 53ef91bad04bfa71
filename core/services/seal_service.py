# =============================================================================
# core/services/seal_service.py - Seal (Attestation) Business Logic
# =============================================================================
# One account vouches for a person's work experience.
#
# State machine for a seal:
#   pending --(person confirms)--> verified   (terminal)
#
# Trust modes (SealMode):
#   authorized - caller must be a signed-in company; seals start pending
#   open       - anyone may seal, issuer is the configured demo identity,
#                seals are verified immediately
#
# Duplicate requests create duplicate seals; there is no dedup key.
# =============================================================================

import logging
from dataclasses import dataclass

from app.exceptions import PolicyError, SealNotFoundError, UnauthorizedError, UserNotFoundError
from core.models.seal import SealMode, SealRequest
from core.models.user import AccountType, Experience, SealStatus, UserRecord
from lib.user_store import UserStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuerIdentity:
    """Issuer details captured onto a seal at creation time."""
    id: str
    name: str
    avatar_url: str = ""

    @classmethod
    def from_user(cls, user: UserRecord) -> "IssuerIdentity":
        return cls(id=user.id, name=user.display_name, avatar_url=user.avatar_url)


class SealService:
    """
    Service for issuing and confirming seals.
    """

    def __init__(
        self,
        store: UserStore,
        mode: SealMode = SealMode.AUTHORIZED,
        demo_issuer: IssuerIdentity | None = None,
    ):
        self.store = store
        self.mode = mode
        self.demo_issuer = demo_issuer or IssuerIdentity(id="demo_company", name="Demo Company")

    def _resolve_issuer(self, caller: UserRecord | None) -> tuple[IssuerIdentity, SealStatus]:
        if self.mode == SealMode.OPEN:
            return self.demo_issuer, SealStatus.VERIFIED

        if caller is None:
            raise UnauthorizedError()

        if caller.account_type != AccountType.COMPANY:
            logger.warning(f"Seal refused: {caller.username} is a {caller.account_type.value} account")
            raise PolicyError("Only company accounts can seal bios.")

        return IssuerIdentity.from_user(caller), SealStatus.PENDING

    def request_seal(self, caller: UserRecord | None, request: SealRequest) -> Experience:
        """
        Record a seal on a person's profile.

        Args:
            caller: Authenticated caller, or None when anonymous
            request: Target handle and experience details

        Returns:
            The created Experience

        Raises:
            UnauthorizedError: Authorized mode and no caller
            PolicyError: Caller isn't a company, or target isn't a person
            UserNotFoundError: Target handle doesn't exist
        """
        issuer, status = self._resolve_issuer(caller)

        target = self.store.find_by_username(request.person_handle)
        if target is None:
            raise UserNotFoundError(request.person_handle, message="Target user profile not found.")

        if target.account_type != AccountType.PERSON:
            raise PolicyError("Bios can only be sealed for personal accounts.")

        experience = Experience(
            role=request.role,
            period=request.period,
            description=request.description or "",
            sealed_by_org_id=issuer.id,
            sealed_by_org_name=issuer.name,
            sealed_by_org_avatar_url=issuer.avatar_url,
            status=status,
        )
        self.store.add_experience(target.id, experience)

        logger.info(
            f"Seal {experience.id} ({status.value}) issued by {issuer.id} for {target.id}"
        )
        return experience

    def list_own_seals(self, user: UserRecord) -> list[Experience]:
        """All seals on the caller's profile, pending ones included."""
        record = self.store.find_by_id(user.id, include_pending=True)
        if record is None:
            raise UserNotFoundError(user.username)
        return record.experiences

    def confirm_seal(self, user: UserRecord, seal_id: str) -> Experience:
        """
        Accept a pending seal on the caller's own profile.

        Confirming an already verified seal returns it unchanged.

        Raises:
            SealNotFoundError: If the seal isn't on the caller's profile
        """
        for experience in self.list_own_seals(user):
            if experience.id != seal_id:
                continue
            if experience.is_verified:
                return experience

            confirmed = self.store.set_experience_status(user.id, seal_id, SealStatus.VERIFIED)
            if confirmed is None:
                break
            logger.info(f"Seal {seal_id} confirmed by {user.id}")
            return confirmed

        raise SealNotFoundError(seal_id)
