"""Rename, move, and copy edits over flat resource collections."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .errors import (
    DestinationNotFoundError,
    InvalidMoveError,
    InvalidNameError,
    PathCollisionError,
    ResourceNotFoundError,
)
from .models import Resource, ResourceLike, as_resources
from .paths import is_same_or_descendant, is_valid_segment, join_path, parent_path, replace_prefix

LOGGER = logging.getLogger(__name__)

DEFAULT_COPY_SUFFIX = "copy"


def rename_resource_in_tree(
    resources: Iterable[ResourceLike],
    target_path: str,
    new_name: str,
) -> list[Resource]:
    """Rename the resource at ``target_path`` and rebase its descendants.

    Args:
        resources: Flat resource collection.
        target_path: Path of the resource to rename.
        new_name: New final segment for the resource.

    Returns:
        list[Resource]: New collection with the target and its descendants relabelled.

    Raises:
        ResourceNotFoundError: If ``target_path`` does not resolve.
        InvalidNameError: If ``new_name`` is not a usable path segment.
        PathCollisionError: If a sibling already uses ``new_name``.
    """

    items = as_resources(resources)
    _find_resource(items, target_path)
    _validate_name(new_name)

    new_base_path = join_path(parent_path(target_path), new_name)
    if new_base_path == target_path:
        return list(items)

    _ensure_free(items, new_base_path)

    result = _rebase(items, target_path, new_base_path, new_name=new_name)
    LOGGER.debug("Renamed %s to %s", target_path, new_base_path)
    return result


def move_resource_in_tree(
    resources: Iterable[ResourceLike],
    target_path: str,
    destination_folder_path: str,
) -> list[Resource]:
    """Move the resource at ``target_path`` into ``destination_folder_path``.

    Only paths change; every ``name`` field stays as it was.

    Args:
        resources: Flat resource collection.
        target_path: Path of the resource to move.
        destination_folder_path: Path of an existing folder to move into.

    Returns:
        list[Resource]: New collection with the target and its descendants rebased.

    Raises:
        ResourceNotFoundError: If ``target_path`` does not resolve.
        DestinationNotFoundError: If the destination is missing or not a folder.
        InvalidMoveError: If a folder would be moved into itself or a descendant.
        PathCollisionError: If the destination already holds an entry with the same name.
    """

    items = as_resources(resources)
    target = _find_resource(items, target_path)
    _find_destination(items, destination_folder_path)
    _ensure_not_nested(target, destination_folder_path)

    new_base_path = join_path(destination_folder_path, target.name)
    if new_base_path == target_path:
        return list(items)

    _ensure_free(items, new_base_path)

    result = _rebase(items, target_path, new_base_path)
    LOGGER.debug("Moved %s to %s", target_path, new_base_path)
    return result


def copy_resource_in_tree(
    resources: Iterable[ResourceLike],
    target_path: str,
    destination_folder_path: str,
    *,
    new_name: Optional[str] = None,
    copy_suffix: str = DEFAULT_COPY_SUFFIX,
) -> list[Resource]:
    """Duplicate the resource at ``target_path`` and its descendants.

    The copies are appended after every original entry. Name collisions in the
    destination are resolved by probing ``"<name> 2"``, ``"<name> 3"``, and so on.

    Args:
        resources: Flat resource collection.
        target_path: Path of the resource to copy.
        destination_folder_path: Path of an existing folder to copy into.
        new_name: Preferred name for the copied root; defaults to
            ``"<original name> <copy_suffix>"``.
        copy_suffix: Suffix appended to the original name when ``new_name`` is absent.

    Returns:
        list[Resource]: Originals in their original order followed by the copies.

    Raises:
        ResourceNotFoundError: If ``target_path`` does not resolve.
        DestinationNotFoundError: If the destination is missing or not a folder.
        InvalidMoveError: If a folder would be copied into itself or a descendant.
        InvalidNameError: If ``new_name`` is not a usable path segment.
    """

    items = as_resources(resources)
    target = _find_resource(items, target_path)
    _find_destination(items, destination_folder_path)
    _ensure_not_nested(target, destination_folder_path)

    if new_name is not None:
        _validate_name(new_name)
        preferred = new_name
    else:
        preferred = f"{target.name} {copy_suffix}"

    occupied = {item.path for item in items}
    resolved_name = _resolve_copy_name(destination_folder_path, preferred, occupied)
    new_base_path = join_path(destination_folder_path, resolved_name)

    copies: list[Resource] = []
    for item in items:
        if not is_same_or_descendant(item.path, target_path):
            continue
        update = {"path": replace_prefix(item.path, target_path, new_base_path)}
        if item.path == target_path:
            update["name"] = resolved_name
        copies.append(item.model_copy(update=update, deep=True))

    LOGGER.debug("Copied %s to %s (%d entries)", target_path, new_base_path, len(copies))
    return [*items, *copies]


# ------------------------------------------------------------------ #
# Helpers                                                            #
# ------------------------------------------------------------------ #


def _find_resource(items: list[Resource], path: str) -> Resource:
    for item in items:
        if item.path == path:
            return item
    raise ResourceNotFoundError(f"Resource not found: {path}")


def _find_destination(items: list[Resource], path: str) -> Resource:
    for item in items:
        if item.path == path and item.is_folder:
            return item
    raise DestinationNotFoundError(f"Destination folder not found: {path}")


def _ensure_not_nested(target: Resource, destination_folder_path: str) -> None:
    if target.is_folder and is_same_or_descendant(destination_folder_path, target.path):
        raise InvalidMoveError(
            f"Cannot place folder {target.path} inside itself ({destination_folder_path})"
        )


def _ensure_free(items: list[Resource], path: str) -> None:
    if any(item.path == path for item in items):
        raise PathCollisionError(f"A resource already exists at {path}")


def _validate_name(name: str) -> None:
    if not is_valid_segment(name):
        raise InvalidNameError(f"Invalid resource name: {name!r}")


def _resolve_copy_name(destination: str, preferred: str, occupied: set[str]) -> str:
    candidate = preferred
    counter = 2
    while join_path(destination, candidate) in occupied:
        candidate = f"{preferred} {counter}"
        counter += 1
    return candidate


def _rebase(
    items: list[Resource],
    old_base: str,
    new_base: str,
    *,
    new_name: Optional[str] = None,
) -> list[Resource]:
    result: list[Resource] = []
    for item in items:
        if not is_same_or_descendant(item.path, old_base):
            result.append(item)
            continue
        update = {"path": replace_prefix(item.path, old_base, new_base)}
        if new_name is not None and item.path == old_base:
            update["name"] = new_name
        result.append(item.model_copy(update=update))
    return result


__all__ = [
    "DEFAULT_COPY_SUFFIX",
    "copy_resource_in_tree",
    "move_resource_in_tree",
    "rename_resource_in_tree",
]
