# =============================================================================
# core/models/document.py - Block Document Schemas
# =============================================================================
# Case-study bodies are stored as a serialized block document produced by
# the block editor:
#
#   {"time": 1700000000000, "version": "2.28.2",
#    "blocks": [{"id": "a1", "type": "paragraph", "data": {"text": "Hi"}}]}
#
# The backend treats `data` as opaque; only lib/renderer.py looks inside it.
# =============================================================================

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

EDITOR_VERSION = "2.28.2"


class BlockType(str, Enum):
    """
    Block types the renderer knows how to display.

    Blocks with any other type survive parsing and serialization unchanged
    but render as nothing.
    """
    PARAGRAPH = "paragraph"
    HEADER = "header"
    LIST = "list"
    QUOTE = "quote"
    CODE = "code"
    DELIMITER = "delimiter"
    IMAGE = "image"
    LINK = "link"
    # The editor's link tool saves its blocks under this name
    LINK_TOOL = "linkTool"


class Block(BaseModel):
    """One typed content unit."""

    # Keep editor extras such as "tunes" so a round-trip is lossless
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    type: str = Field(..., min_length=1)
    data: dict[str, Any] = Field(default_factory=dict)


class BlockDocument(BaseModel):
    """An ordered sequence of blocks plus editor metadata."""

    model_config = ConfigDict(extra="allow")

    time: int | None = None
    version: str | None = EDITOR_VERSION
    blocks: list[Block] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.blocks
