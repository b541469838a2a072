# =============================================================================
# lib/blocks.py - Block Document Parsing and Serialization
# =============================================================================
# Two edges touch the stored document:
# - Write path: normalize_content() turns whatever the editor sent into a
#   valid serialized document. Missing or garbled input becomes an explicit
#   empty document, never "undefined" or a half-parsed string.
# - Read path: parse_document() never raises. Malformed storage degrades
#   to an empty document so a broken body can't take down the page.
#
# Usage:
#   from lib.blocks import parse_document, serialize_document
#   doc = parse_document(case_study.content)
#   stored = serialize_document(doc)
# =============================================================================

from __future__ import annotations

import json
import logging
import time
from typing import Any

from pydantic import ValidationError

from core.models.document import EDITOR_VERSION, Block, BlockDocument

logger = logging.getLogger(__name__)

# What a browser editor sends when its save() never resolved
_UNSET_MARKERS = {"", "undefined", "null"}


def empty_document() -> BlockDocument:
    """An explicit document with no blocks."""
    return BlockDocument(time=int(time.time() * 1000), version=EDITOR_VERSION, blocks=[])


def serialize_document(document: BlockDocument) -> str:
    return document.model_dump_json()


def _load_raw(raw: Any) -> dict[str, Any] | None:
    """Decode raw storage/request content into a dict, or None if unusable."""
    if raw is None:
        return None

    if isinstance(raw, BlockDocument):
        return raw.model_dump()

    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(raw, str):
        if raw.strip() in _UNSET_MARKERS:
            return None
        try:
            raw = json.loads(raw)
        except ValueError:
            return None

    if not isinstance(raw, dict):
        return None

    return raw


def parse_document(raw: Any) -> BlockDocument:
    """
    Parse stored or submitted content into a BlockDocument.

    Accepts a JSON string, bytes, a dict or a BlockDocument. Anything that
    isn't a JSON object with a `blocks` list yields an empty document.
    Individual blocks that fail validation (e.g. no `type`) are dropped.
    """
    payload = _load_raw(raw)
    if payload is None or not isinstance(payload.get("blocks"), list):
        return empty_document()

    blocks: list[Block] = []
    for index, item in enumerate(payload["blocks"]):
        try:
            blocks.append(Block.model_validate(item))
        except ValidationError:
            logger.warning(f"Dropping malformed block at index {index}")

    meta = {k: v for k, v in payload.items() if k != "blocks"}
    try:
        return BlockDocument.model_validate({**meta, "blocks": blocks})
    except ValidationError:
        # Bad metadata (e.g. non-numeric time) shouldn't cost us the blocks
        return BlockDocument(blocks=blocks)


def normalize_content(raw: Any) -> str:
    """
    Normalize editor output for storage.

    Returns the serialized document; falls back to a serialized empty
    document when the input is missing or not a block document.
    """
    if _load_raw(raw) is None and raw not in (None, ""):
        logger.warning("Editor content was not a block document; storing an empty document")
    return serialize_document(parse_document(raw))
