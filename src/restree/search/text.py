"""Text normalization utilities for resource search."""

from __future__ import annotations

import re

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F]")
_WHITESPACE = re.compile(r"\s+")


def normalize_search_text(text: str, *, limit: int = 256) -> str:
    """Return sanitized, case-folded text suitable for substring matching.

    Args:
        text: Raw query or resource name.
        limit: Maximum number of characters retained in the normalized output.

    Returns:
        str: Normalized text with control characters removed, whitespace collapsed,
        case folded, and length capped to ``limit`` characters when ``limit`` is positive.
    """

    sanitized = _CONTROL_CHARS.sub(" ", text)
    sanitized = _WHITESPACE.sub(" ", sanitized).strip().casefold()
    if limit > 0:
        return sanitized[:limit]
    return sanitized


__all__ = ["normalize_search_text"]
