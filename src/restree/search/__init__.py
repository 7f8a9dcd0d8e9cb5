"""Search helpers for resource collections."""

from .query import filter_resources_by_query
from .text import normalize_search_text

__all__ = ["filter_resources_by_query", "normalize_search_text"]
