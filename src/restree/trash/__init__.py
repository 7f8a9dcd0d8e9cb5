"""Virtual trash view over trashed resources."""

from .models import DEFAULT_TRASH_ROOT, TrashListing, TrashMapping, TrashVirtualResource
from .virtualizer import get_trash_resources_at_virtual_path, map_trash_items_to_virtual_paths

__all__ = [
    "DEFAULT_TRASH_ROOT",
    "TrashListing",
    "TrashMapping",
    "TrashVirtualResource",
    "get_trash_resources_at_virtual_path",
    "map_trash_items_to_virtual_paths",
]
