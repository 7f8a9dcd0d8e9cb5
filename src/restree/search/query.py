"""Free-text filtering of resource collections."""

from __future__ import annotations

from typing import Iterable

from restree.tree.models import Resource, ResourceLike, as_resources

from .text import normalize_search_text


def filter_resources_by_query(resources: Iterable[ResourceLike], query: str) -> list[Resource]:
    """Return resources whose name contains ``query``, ignoring case.

    A blank query keeps every resource.
    """

    items = as_resources(resources)
    needle = normalize_search_text(query)
    if not needle:
        return items
    return [item for item in items if needle in normalize_search_text(item.name, limit=0)]


__all__ = ["filter_resources_by_query"]
