# =============================================================================
# core/models/education.py - Education Schemas
# =============================================================================
# Courses, certificates and degrees. `date` is free text ("2023",
# "Spring 2021"); `link` must be an http(s) URL when given.
# =============================================================================

from datetime import datetime
from typing import Any
from urllib.parse import urlparse

from pydantic import Field, field_validator

from .base import ApiModel


def validate_http_url(value: Any) -> Any:
    """Blank -> None; otherwise require an absolute http(s) URL."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("Must be an http or https URL")
    return value


class EducationCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=255)
    link: str | None = Field(default=None, max_length=2048)
    date: str | None = Field(default=None, max_length=64)
    sort_order: int | None = Field(default=None, ge=0)

    @field_validator("link", mode="before")
    @classmethod
    def check_link(cls, value: Any) -> Any:
        return validate_http_url(value)


class EducationUpdate(ApiModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    category: str | None = Field(default=None, min_length=1, max_length=255)
    link: str | None = Field(default=None, max_length=2048)
    date: str | None = Field(default=None, max_length=64)
    sort_order: int | None = Field(default=None, ge=0)

    @field_validator("link", mode="before")
    @classmethod
    def check_link(cls, value: Any) -> Any:
        return validate_http_url(value)


class EducationResponse(ApiModel):
    id: int
    name: str
    category: str
    link: str | None = None
    date: str | None = None
    sort_order: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
