# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Small helpers used by more than one service.
# =============================================================================

import re
import unicodedata
from typing import Iterable

_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(value: str, max_length: int = 255) -> str:
    """
    Turn a title into a URL-safe slug.

    Accents are folded to ASCII; every run of other characters becomes a
    single hyphen.

    Example:
        slugify("Café Redesign: Phase 2")  # "cafe-redesign-phase-2"
    """
    folded = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    slug = _NON_SLUG_RE.sub("-", folded.lower()).strip("-")
    return slug[:max_length].rstrip("-")


def unique_in_order(values: Iterable[str]) -> list[str]:
    """Drop repeats, keeping the first occurrence of each value."""
    return list(dict.fromkeys(values))
