# =============================================================================
# core/models/user.py - User, Experience & Profile Schemas
# =============================================================================
# These models define the account data and its public projection:
# - UserRecord: Full stored account (internal only, holds the credential)
# - Experience: A seal - work experience attested by another account
# - Profile: Public view of a user (never includes the credential)
# - PublicUser: Profile plus the user id, returned to the account owner
# - ProfileUpdate: Partial update sent by the owner
#
# Public models serialize with camelCase keys (displayName, sealedAt, ...)
# and accept either camelCase or snake_case on input.
# =============================================================================

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated
from uuid import uuid4

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


LINK_KEYS = ("website", "github", "twitter", "linkedin")

_http_url = TypeAdapter(HttpUrl)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid4())


def validate_optional_url(value: str | None) -> str | None:
    """Accept None, "" or an http(s) URL. The original string is kept as-is."""
    if value is None or value == "":
        return value
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise PydanticCustomError("url_invalid", "Must be a valid URL")
    return value


OptionalUrl = Annotated[str | None, AfterValidator(validate_optional_url)]


class CamelModel(BaseModel):
    """Base for models that travel over the wire in camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AccountType(str, Enum):
    """
    Closed category of an account. Governs sealing permissions:
    only companies issue seals and only persons receive them.
    """
    PERSON = "person"
    COMPANY = "company"
    INSTITUTION = "institution"


class SealStatus(str, Enum):
    """
    Lifecycle of a seal.

    Flow: pending -> verified (terminal)
    """
    PENDING = "pending"
    VERIFIED = "verified"


DICEBEAR_URL = "https://api.dicebear.com/8.x/{style}/svg?seed={seed}"


def default_avatar_url(username: str, account_type: AccountType) -> str:
    """Deterministic avatar: icon style for organizations, portrait for people."""
    style = "lorelei" if account_type == AccountType.PERSON else "icons"
    return DICEBEAR_URL.format(style=style, seed=username)


class SocialLinks(CamelModel):
    """Fixed set of social links shown on a profile."""
    website: OptionalUrl = None
    github: OptionalUrl = None
    twitter: OptionalUrl = None
    linkedin: OptionalUrl = None

    def cleaned(self) -> "SocialLinks":
        """Drop empty entries so "" clears a link."""
        return SocialLinks(**{key: getattr(self, key) or None for key in LINK_KEYS})

    def present(self) -> dict[str, str]:
        return {key: url for key in LINK_KEYS if (url := getattr(self, key))}


class Experience(CamelModel):
    """
    A work experience entry recorded on a person's profile and
    authored by the issuing account.

    The issuer name and avatar are captured at issuance and are not
    updated if the issuer later changes them.
    """

    id: str = Field(default_factory=_new_id)

    role: str
    period: str
    description: str = ""

    # Issuer identity (captured by value)
    sealed_by_org_id: str
    sealed_by_org_name: str
    sealed_by_org_avatar_url: str = ""

    status: SealStatus = SealStatus.PENDING
    sealed_at: datetime = Field(default_factory=_utcnow)

    @property
    def is_verified(self) -> bool:
        return self.status == SealStatus.VERIFIED


class Profile(CamelModel):
    """
    Public projection of a user.

    Example:
        {
            "username": "alice",
            "displayName": "Alice",
            "avatarUrl": "https://api.dicebear.com/8.x/lorelei/svg?seed=alice",
            "bio": "Welcome to my theirBio profile!",
            "links": {"github": "https://github.com/alice"},
            "accountType": "person",
            "experiences": []
        }
    """
    username: str
    display_name: str
    avatar_url: str = ""
    bio: str = ""
    links: SocialLinks = Field(default_factory=SocialLinks)
    account_type: AccountType
    experiences: list[Experience] = Field(default_factory=list)


class PublicUser(Profile):
    """Profile plus the stable id. Returned to the account owner."""
    id: str


class UserRecord(BaseModel):
    """
    Stored account. Internal only - never serialize this to clients,
    project it with to_profile() or to_public() instead.
    """
    id: str = Field(default_factory=_new_id)
    username: str
    password_hash: str | None = None
    account_type: AccountType = AccountType.PERSON

    display_name: str
    bio: str = ""
    avatar_url: str = ""
    links: SocialLinks = Field(default_factory=SocialLinks)
    experiences: list[Experience] = Field(default_factory=list)

    created_at: datetime = Field(default_factory=_utcnow)

    def to_profile(self) -> Profile:
        return Profile(
            username=self.username,
            display_name=self.display_name,
            avatar_url=self.avatar_url,
            bio=self.bio,
            links=self.links,
            account_type=self.account_type,
            experiences=self.experiences,
        )

    def to_public(self) -> PublicUser:
        return PublicUser(
            id=self.id,
            username=self.username,
            display_name=self.display_name,
            avatar_url=self.avatar_url,
            bio=self.bio,
            links=self.links,
            account_type=self.account_type,
            experiences=self.experiences,
        )


class ProfileUpdate(CamelModel):
    """
    Partial profile update. Only fields present in the request are applied;
    `links` replaces the whole link set.

    Example:
        {"bio": "Building things", "links": {"github": "https://github.com/alice"}}
    """
    display_name: str | None = Field(default=None, min_length=1, max_length=50)
    bio: str | None = Field(default=None, max_length=160)
    avatar_url: OptionalUrl = None
    links: SocialLinks | None = None
