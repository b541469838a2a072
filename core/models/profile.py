# =============================================================================
# core/models/profile.py - Profile Schemas
# =============================================================================
# The profile is a singleton: the hero name and intro, plus the display
# order of tool names, industry names and education categories used to
# group experience and education on the public page.
# =============================================================================

from datetime import datetime

from pydantic import Field, field_validator

from lib.utils import unique_in_order

from .base import ApiModel


def _clean_names(values: list[str]) -> list[str]:
    """Strip blanks and drop repeats, keeping first occurrence order."""
    return unique_in_order(name for name in (value.strip() for value in values) if name)


class ProfileResponse(ApiModel):
    name: str
    brief_intro: str
    tools_order: list[str] = Field(default_factory=list)
    industries_order: list[str] = Field(default_factory=list)
    education_categories: list[str] = Field(default_factory=list)
    updated_at: datetime | None = None


class ProfileUpdate(ApiModel):
    """
    Partial update. Only fields present in the request body are written.

    Example:
        {"briefIntro": "Product manager turned ML engineer"}
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    brief_intro: str | None = Field(default=None, max_length=5000)
    tools_order: list[str] | None = None
    industries_order: list[str] | None = None
    education_categories: list[str] | None = None

    @field_validator("tools_order", "industries_order", "education_categories")
    @classmethod
    def clean_order(cls, value: list[str] | None) -> list[str] | None:
        return _clean_names(value) if value is not None else None
