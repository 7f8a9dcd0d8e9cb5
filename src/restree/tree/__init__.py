"""Flat resource tree models, path helpers, and edit operations."""

from .editor import (
    DEFAULT_COPY_SUFFIX,
    copy_resource_in_tree,
    move_resource_in_tree,
    rename_resource_in_tree,
)
from .errors import (
    DestinationNotFoundError,
    InvalidMoveError,
    InvalidNameError,
    PathCollisionError,
    ResourceNotFoundError,
    TreeEditError,
)
from .explorer import (
    LOST_AND_FOUND_NAME,
    build_explorer_tree,
    flatten_paths,
    is_lost_and_found_visible,
)
from .models import ExplorerNode, Resource, ResourceType, as_resources
from .paths import build_child_folder_path

__all__ = [
    "DEFAULT_COPY_SUFFIX",
    "DestinationNotFoundError",
    "ExplorerNode",
    "InvalidMoveError",
    "InvalidNameError",
    "LOST_AND_FOUND_NAME",
    "PathCollisionError",
    "Resource",
    "ResourceNotFoundError",
    "ResourceType",
    "TreeEditError",
    "as_resources",
    "build_child_folder_path",
    "build_explorer_tree",
    "copy_resource_in_tree",
    "flatten_paths",
    "is_lost_and_found_visible",
    "move_resource_in_tree",
    "rename_resource_in_tree",
]
