"""Passport -> NormalizedBuilder mapping."""

from findabuilder.models.passport import NormalizedBuilder, Passport

DEFAULT_LOCATION = "Remote"


def normalize(passport: Passport) -> NormalizedBuilder:
    """Flatten a passport into the display record. Total: absent fields get defaults."""
    profile = passport.passport_profile
    return NormalizedBuilder(
        id=passport.main_wallet,
        name=profile.display_name or profile.name or "",
        description=profile.bio or "",
        activity_score=passport.activity_score,
        identity_score=passport.identity_score,
        skills_score=passport.skills_score,
        score=passport.score,
        human_checkmark=passport.human_checkmark,
        location=profile.location or DEFAULT_LOCATION,
        tags=list(profile.tags),
        image_url=profile.image_url or "",
        socials=list(passport.passport_socials),
        verified_wallets=list(passport.verified_wallets),
        verified=passport.verified,
        credentials=list(passport.credentials),
    )
