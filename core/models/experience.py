# =============================================================================
# core/models/experience.py - Experience Schemas
# =============================================================================
# Work experience entries. `tools` is an ordered list of {name, usage}
# pairs. A current job never carries an end date.
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator, model_validator

from .base import ApiModel


class ToolUsage(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    usage: str = Field(default="", max_length=1000)


def _coerce_tools(value: Any) -> Any:
    # Older entries stored tools as plain names
    if isinstance(value, list):
        return [{"name": item, "usage": ""} if isinstance(item, str) else item for item in value]
    return value


class ExperienceBase(ApiModel):
    job_title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    industry: str = Field(..., min_length=1, max_length=255)
    start_date: str = Field(..., min_length=1, max_length=32)
    end_date: str | None = Field(default=None, max_length=32)
    is_current_job: bool = False
    description: str = Field(..., min_length=1)
    accomplishments: str = Field(..., min_length=1)
    tools: list[ToolUsage] = Field(default_factory=list)

    @field_validator("tools", mode="before")
    @classmethod
    def coerce_tools(cls, value: Any) -> Any:
        return _coerce_tools(value)

    @field_validator("end_date", mode="before")
    @classmethod
    def blank_end_date(cls, value: Any) -> Any:
        return None if isinstance(value, str) and not value.strip() else value


class ExperienceCreate(ExperienceBase):
    """New entry; appended to the end of the list when sortOrder is omitted."""

    sort_order: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def clear_end_date_for_current_job(self) -> "ExperienceCreate":
        if self.is_current_job:
            self.end_date = None
        return self


class ExperienceUpdate(ApiModel):
    """Partial update; unset fields keep their stored value."""

    job_title: str | None = Field(default=None, min_length=1, max_length=255)
    company: str | None = Field(default=None, min_length=1, max_length=255)
    industry: str | None = Field(default=None, min_length=1, max_length=255)
    start_date: str | None = Field(default=None, min_length=1, max_length=32)
    end_date: str | None = Field(default=None, max_length=32)
    is_current_job: bool | None = None
    description: str | None = Field(default=None, min_length=1)
    accomplishments: str | None = Field(default=None, min_length=1)
    tools: list[ToolUsage] | None = None
    sort_order: int | None = Field(default=None, ge=0)

    @field_validator("tools", mode="before")
    @classmethod
    def coerce_tools(cls, value: Any) -> Any:
        return _coerce_tools(value)

    @field_validator("end_date", mode="before")
    @classmethod
    def blank_end_date(cls, value: Any) -> Any:
        return None if isinstance(value, str) and not value.strip() else value


class ExperienceResponse(ExperienceBase):
    id: int
    sort_order: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
