# =============================================================================
# lib/seed_data.py - Demo Profiles
# =============================================================================
# A handful of profiles so a fresh development server has something to
# browse. Seeded accounts have no password and cannot log in.
# =============================================================================

from datetime import datetime, timezone

from core.models.user import AccountType, Experience, SealStatus, SocialLinks, UserRecord, default_avatar_url


def demo_users() -> list[UserRecord]:
    """Build fresh demo records (new objects on every call)."""
    acme = UserRecord(
        id="00000000-0000-4000-8000-000000000001",
        username="acme_corp",
        account_type=AccountType.COMPANY,
        display_name="Acme Corp",
        bio="We build everything. Sealing the work of great people since 1949.",
        avatar_url=default_avatar_url("acme_corp", AccountType.COMPANY),
        links=SocialLinks(website="https://acme.example.com/about"),
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )

    ada = UserRecord(
        id="00000000-0000-4000-8000-000000000002",
        username="ada",
        account_type=AccountType.PERSON,
        display_name="Ada Lovelace",
        bio="Analytical engines and poetical science.",
        avatar_url=default_avatar_url("ada", AccountType.PERSON),
        links=SocialLinks(github="https://github.com/ada-demo"),
        experiences=[
            Experience(
                id="00000000-0000-4000-9000-000000000001",
                role="Lead Engineer",
                period="2021-2024",
                description="Designed the first program for the engine.",
                sealed_by_org_id=acme.id,
                sealed_by_org_name=acme.display_name,
                sealed_by_org_avatar_url=acme.avatar_url,
                status=SealStatus.VERIFIED,
                sealed_at=datetime(2024, 6, 1, tzinfo=timezone.utc),
            ),
        ],
        created_at=datetime(2024, 1, 2, tzinfo=timezone.utc),
    )

    grace = UserRecord(
        id="00000000-0000-4000-8000-000000000003",
        username="grace",
        account_type=AccountType.PERSON,
        display_name="Grace Hopper",
        bio="It's easier to ask forgiveness than it is to get permission.",
        avatar_url=default_avatar_url("grace", AccountType.PERSON),
        created_at=datetime(2024, 1, 3, tzinfo=timezone.utc),
    )

    return [acme, ada, grace]
