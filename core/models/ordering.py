# =============================================================================
# core/models/ordering.py - Reorder Schemas
# =============================================================================

from enum import Enum

from pydantic import Field

from .base import ApiModel


class CollectionKind(str, Enum):
    """Collections whose display order is stored as sort_order."""
    EXPERIENCES = "experiences"
    EDUCATION = "education"


class ReorderRequest(ApiModel):
    """
    Complete ordering of a collection, first id displayed first.

    Example:
        {"ids": [4, 1, 7]}
    """

    ids: list[int] = Field(..., description="Every id of the collection, each exactly once")
