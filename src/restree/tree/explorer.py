"""Explorer helpers: nested tree views and folder visibility."""

from __future__ import annotations

from typing import Iterable, Sequence

from .models import ExplorerNode, Resource, ResourceLike, as_resources
from .paths import parent_path

LOST_AND_FOUND_NAME = "lost+found"


def is_lost_and_found_visible(
    resource: ResourceLike,
    *,
    name: str = LOST_AND_FOUND_NAME,
) -> bool:
    """Return False only for an empty ``lost+found`` folder."""
    (item,) = as_resources([resource])
    return not (item.is_folder and item.name == name and item.empty is True)


def build_explorer_tree(resources: Iterable[ResourceLike]) -> list[ExplorerNode]:
    """Nest a flat collection into explorer nodes.

    Entries whose parent folder is absent from the collection become roots.
    Sibling order follows the input order.

    Args:
        resources: Flat resource collection.

    Returns:
        list[ExplorerNode]: Root nodes with their children attached.
    """

    items: list[Resource] = as_resources(resources)
    nodes = {
        item.path: ExplorerNode(name=item.name, path=item.path, is_directory=item.is_folder)
        for item in items
    }

    roots: list[ExplorerNode] = []
    for item in items:
        node = nodes[item.path]
        parent = nodes.get(parent_path(item.path))
        if parent is not None and parent.is_directory:
            parent.children.append(node)
        else:
            roots.append(node)
    return roots


def flatten_paths(nodes: Sequence[ExplorerNode]) -> list[str]:
    """Return node paths in depth-first order, parents before children."""
    result: list[str] = []

    def _walk(level: Sequence[ExplorerNode]) -> None:
        for node in level:
            result.append(node.path)
            if node.children:
                _walk(node.children)

    _walk(nodes)
    return result


__all__ = [
    "LOST_AND_FOUND_NAME",
    "build_explorer_tree",
    "flatten_paths",
    "is_lost_and_found_visible",
]
