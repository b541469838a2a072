# =============================================================================
# core/models/case_study.py - Case Study Schemas
# =============================================================================
# Case studies carry a block document in `content`. On the way in, content
# may be a JSON string (what the editor's save() gives after stringify) or
# the document object itself; services normalize it before storage.
# On the way out, admin reads get the stored string, public detail reads
# also get `contentHtml`, the rendered read-only body.
# =============================================================================

import re
from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from lib.utils import unique_in_order

from .base import ApiModel
from .education import validate_http_url

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
_SLUG_RE = re.compile(SLUG_PATTERN)


def _clean_tags(value: Any) -> Any:
    """Tags are a set: trim, drop blanks and repeats, keep first-seen order."""
    if not isinstance(value, list):
        return value
    return unique_in_order(tag.strip() for tag in value if isinstance(tag, str) and tag.strip())


def _check_slug(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        if value and not _SLUG_RE.match(value):
            raise ValueError("Slug may only contain lowercase letters, digits and single hyphens")
        return value or None
    return value


class CaseStudyCreate(ApiModel):
    title: str = Field(..., min_length=1, max_length=255)
    # Derived from the title when omitted
    slug: str | None = Field(default=None, max_length=255)
    description: str = Field(default="", max_length=5000)
    content: Any = None
    featured_image: str | None = Field(default=None, max_length=2048)
    tags: list[str] = Field(default_factory=list)
    is_published: bool = False
    is_featured: bool = False

    @field_validator("slug", mode="before")
    @classmethod
    def check_slug(cls, value: Any) -> Any:
        return _check_slug(value)

    @field_validator("featured_image", mode="before")
    @classmethod
    def check_featured_image(cls, value: Any) -> Any:
        return validate_http_url(value)

    @field_validator("tags", mode="before")
    @classmethod
    def clean_tags(cls, value: Any) -> Any:
        return _clean_tags(value)


class CaseStudyUpdate(ApiModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    content: Any = None
    featured_image: str | None = Field(default=None, max_length=2048)
    tags: list[str] | None = None
    is_published: bool | None = None
    is_featured: bool | None = None

    @field_validator("slug", mode="before")
    @classmethod
    def check_slug(cls, value: Any) -> Any:
        return _check_slug(value)

    @field_validator("featured_image", mode="before")
    @classmethod
    def check_featured_image(cls, value: Any) -> Any:
        return validate_http_url(value)

    @field_validator("tags", mode="before")
    @classmethod
    def clean_tags(cls, value: Any) -> Any:
        return _clean_tags(value)


class CaseStudySummary(ApiModel):
    """List view: everything except the body."""

    id: int
    title: str
    slug: str
    description: str
    featured_image: str | None = None
    tags: list[str] = Field(default_factory=list)
    is_published: bool
    is_featured: bool
    created_at: datetime
    updated_at: datetime


class CaseStudyResponse(CaseStudySummary):
    content: str


class CaseStudyDetail(CaseStudyResponse):
    content_html: str = ""
