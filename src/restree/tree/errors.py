"""Errors raised by tree editing operations."""


class TreeEditError(Exception):
    """Base exception for rename, move, and copy failures."""

    code = "tree_edit_error"


class ResourceNotFoundError(TreeEditError):
    """Raised when a path does not resolve to any resource."""

    code = "resource_not_found"


class DestinationNotFoundError(TreeEditError):
    """Raised when a destination path is missing or is not a folder."""

    code = "destination_not_found"


class InvalidMoveError(TreeEditError):
    """Raised when a folder would be placed inside itself."""

    code = "invalid_move"


class PathCollisionError(TreeEditError):
    """Raised when the computed destination path is already occupied."""

    code = "path_collision"


class InvalidNameError(TreeEditError):
    """Raised when a new name cannot be used as a single path segment."""

    code = "invalid_name"
