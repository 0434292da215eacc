"""Talent Protocol passport models and the flattened builder record."""

import logging
import math
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field, ValidationError, model_validator

logger = logging.getLogger(__name__)


def _none_to_zero(value: Any) -> Any:
    return 0.0 if value is None else value


def _none_to_false(value: Any) -> Any:
    return False if value is None else value


def _text_or_none(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return None


def _text_or_empty(value: Any) -> str:
    return _text_or_none(value) or ""


def _number_or_none(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return None
    if isinstance(value, int | float) and math.isfinite(value):
        return float(value)
    return None


def _count_or_none(value: Any) -> int | None:
    number = _number_or_none(value)
    return None if number is None else int(number)


def _value_or_none(value: Any) -> str | float | None:
    if isinstance(value, str):
        return value
    return _number_or_none(value)


def _text_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [text for text in map(_text_or_none, value) if text is not None]


def _record(value: Any) -> Any:
    return value if isinstance(value, dict | BaseModel) else {}


def _records(value: Any) -> list[Any]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict | BaseModel)]


# Core scores and flags: explicit nulls become defaults, anything else must parse
Score = Annotated[float, BeforeValidator(_none_to_zero)]
Flag = Annotated[bool, BeforeValidator(_none_to_false)]

# Descriptive fields: values of the wrong type are dropped rather than rejected
Text = Annotated[str | None, BeforeValidator(_text_or_none)]
Number = Annotated[float | None, BeforeValidator(_number_or_none)]
Count = Annotated[int | None, BeforeValidator(_count_or_none)]
TextList = Annotated[list[str], BeforeValidator(_text_list)]


class PassportProfile(BaseModel):
    """Public profile attached to a passport."""

    display_name: Text = None
    name: Text = None
    bio: Text = None
    image_url: Text = None
    location: Text = None
    tags: TextList = Field(default_factory=list)


class PassportSocial(BaseModel):
    """A linked social profile (Farcaster, GitHub, Lens, ...)."""

    profile_name: Text = None
    source: Text = None
    profile_url: Text = None
    follower_count: Count = None
    following_count: Count = None


class PassportCredential(BaseModel):
    """An earned, scored attestation on a passport."""

    id: Text = None
    category: Text = None
    name: Text = None
    type: Text = None
    value: Annotated[str | float | None, BeforeValidator(_value_or_none)] = None
    score: Number = None
    max_score: Number = None
    earned_at: Text = None
    last_calculated_at: Text = None


class Passport(BaseModel):
    """A builder passport as returned by the identity source."""

    passport_id: Count = None
    main_wallet: Annotated[str, BeforeValidator(_text_or_empty)] = ""
    score: Score = 0.0
    activity_score: Score = 0.0
    identity_score: Score = 0.0
    skills_score: Score = 0.0
    human_checkmark: Flag = False
    verified: Flag = False
    verified_wallets: TextList = Field(default_factory=list)
    passport_profile: Annotated[PassportProfile, BeforeValidator(_record)] = Field(
        default_factory=PassportProfile
    )
    passport_socials: Annotated[list[PassportSocial], BeforeValidator(_records)] = Field(
        default_factory=list
    )
    credentials: Annotated[list[PassportCredential], BeforeValidator(_records)] = Field(
        default_factory=list
    )

    @property
    def lookup_id(self) -> str:
        """Identifier accepted by the per-passport endpoints."""
        if self.passport_id is not None:
            return str(self.passport_id)
        return self.main_wallet


class Pagination(BaseModel):
    """Pagination metadata of a listing page."""

    current_page: Count = None
    last_page: Count = None
    total: Count = None


class PassportPage(BaseModel):
    """One page of the passport listing.

    Records are validated one at a time: a record that still cannot be read
    after coercion is skipped with a warning, and ``received_count`` keeps the
    number of records the page actually carried.
    """

    passports: list[Passport] = Field(default_factory=list)
    pagination: Annotated[Pagination, BeforeValidator(_record)] = Field(
        default_factory=Pagination
    )
    received_count: int = 0

    @model_validator(mode="before")
    @classmethod
    def skip_unreadable_records(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        raw = data.get("passports")
        if not isinstance(raw, list):
            raw = []
        kept: list[Passport] = []
        for index, item in enumerate(raw):
            try:
                kept.append(Passport.model_validate(item))
            except ValidationError as e:
                logger.warning(
                    "Skipping unreadable passport record %d (%d errors)", index, e.error_count()
                )
        return {**data, "passports": kept, "received_count": len(raw)}

    @property
    def is_last(self) -> bool:
        """True when the metadata says no later page exists."""
        current = self.pagination.current_page
        last = self.pagination.last_page
        return current is not None and last is not None and current >= last


class NormalizedBuilder(BaseModel):
    """Flat, display-ready builder record returned to callers."""

    id: str
    name: str
    description: str
    activity_score: float
    identity_score: float
    skills_score: float
    score: float
    human_checkmark: bool
    location: str
    tags: list[str]
    image_url: str
    socials: list[PassportSocial]
    verified_wallets: list[str]
    verified: bool
    credentials: list[PassportCredential]
