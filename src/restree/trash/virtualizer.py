"""Map trashed resources onto a synthetic ``trash/`` namespace.

Each trashed folder becomes an anchor: its real path is re-rooted as
``trash/<folder name>`` and every trashed item beneath it follows. Anchors are
ordered shallowest-first and matched in that order, so a folder trashed
together with its parent never claims items the parent already owns.
"""

from __future__ import annotations

import logging
from typing import Iterable
from urllib.parse import unquote

from restree.tree.models import Resource, ResourceLike, as_resources
from restree.tree.paths import (
    is_same_or_descendant,
    join_path,
    last_segment,
    parent_path,
    path_depth,
    replace_prefix,
)

from .models import DEFAULT_TRASH_ROOT, TrashListing, TrashMapping, TrashVirtualResource

LOGGER = logging.getLogger(__name__)

PrefixMapping = list[tuple[str, str]]


def map_trash_items_to_virtual_paths(
    items: Iterable[ResourceLike],
    *,
    root: str = DEFAULT_TRASH_ROOT,
) -> TrashMapping:
    """Assign a virtual path to every trashed item.

    Args:
        items: Trashed resources with their original paths.
        root: Name of the synthetic trash root.

    Returns:
        TrashMapping: Items with ``virtual_path`` set, and the virtual root, which is
        the virtual path of the shallowest trashed folder or ``root`` when no
        folder was trashed.
    """

    resources = as_resources(items)
    if not resources:
        return TrashMapping(items=[], virtual_root=root)

    mapping = _build_prefix_mapping(resources, root)
    mapped = [
        TrashVirtualResource.model_validate(
            {**resource.model_dump(), "virtual_path": _virtual_path(resource, mapping, root)}
        )
        for resource in resources
    ]
    virtual_root = mapping[0][1] if mapping else root

    LOGGER.debug("Mapped %d trash items across %d anchors", len(mapped), len(mapping))
    return TrashMapping(items=mapped, virtual_root=virtual_root)


def get_trash_resources_at_virtual_path(
    items: Iterable[ResourceLike],
    virtual_path: str = DEFAULT_TRASH_ROOT,
    original_path: str = "",
    *,
    root: str = DEFAULT_TRASH_ROOT,
) -> TrashListing:
    """List the trashed items that sit directly inside ``virtual_path``.

    Args:
        items: Trashed resources with their original paths.
        virtual_path: Virtual folder to list; percent-encoding is decoded first.
        original_path: When non-empty, keep only items whose real path contains it.
        root: Name of the synthetic trash root.

    Returns:
        TrashListing: Direct children of the virtual folder and the virtual root.
    """

    target = unquote(virtual_path)
    mapping = map_trash_items_to_virtual_paths(items, root=root)

    children = [item for item in mapping.items if parent_path(item.virtual_path) == target]
    if original_path:
        # Substring match on the real path, not a segment-aware prefix test.
        children = [item for item in children if original_path in item.path]

    return TrashListing(resources=children, virtual_root=mapping.virtual_root)


def _build_prefix_mapping(resources: list[Resource], root: str) -> PrefixMapping:
    anchors = sorted(
        (resource for resource in resources if resource.is_folder),
        key=lambda resource: path_depth(resource.path),
    )
    return [(anchor.path, join_path(root, last_segment(anchor.path))) for anchor in anchors]


def _virtual_path(resource: Resource, mapping: PrefixMapping, root: str) -> str:
    for original_prefix, virtual_prefix in mapping:
        if is_same_or_descendant(resource.path, original_prefix):
            return replace_prefix(resource.path, original_prefix, virtual_prefix)
    return join_path(root, resource.name)


__all__ = ["get_trash_resources_at_virtual_path", "map_trash_items_to_virtual_paths"]
