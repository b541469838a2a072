# =============================================================================
# core/models/base.py - Shared Schema Configuration
# =============================================================================
# Python code uses snake_case; the JSON wire format uses camelCase
# (jobTitle, isPublished, sortOrder, ...). Every API schema inherits the
# alias configuration from ApiModel, and accepts either spelling on input.
# =============================================================================

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base class for request/response schemas."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
