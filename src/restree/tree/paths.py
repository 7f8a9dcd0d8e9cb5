"""Segment-aware helpers for slash-delimited resource paths."""

from __future__ import annotations

from urllib.parse import quote

SEPARATOR = "/"

# Characters left untouched by JavaScript's encodeURIComponent besides [A-Za-z0-9_.-].
_URI_COMPONENT_SAFE = "!~*'()"


def split_path(path: str) -> list[str]:
    """Return the non-empty segments of ``path``."""
    return [segment for segment in path.split(SEPARATOR) if segment]


def parent_path(path: str) -> str:
    """Return everything before the last separator, or ``""`` for top-level paths."""
    if SEPARATOR not in path:
        return ""
    return path.rsplit(SEPARATOR, 1)[0]


def last_segment(path: str) -> str:
    """Return the final segment of ``path``."""
    return path.rsplit(SEPARATOR, 1)[-1]


def join_path(parent: str, name: str) -> str:
    """Join a parent path and a child name."""
    if not parent:
        return name
    return f"{parent}{SEPARATOR}{name}"


def path_depth(path: str) -> int:
    """Return the number of segments in ``path``."""
    return len(split_path(path))


def is_same_or_descendant(path: str, base: str) -> bool:
    """Return whether ``path`` equals ``base`` or lies beneath it.

    The test is segment-exact: ``docs`` matches ``docs/readme.md`` but never
    ``docs-old`` or ``docs2``.

    Args:
        path: Candidate path.
        base: Prefix path.

    Returns:
        bool: True when ``path`` is ``base`` or one of its descendants.
    """

    return path == base or path.startswith(base + SEPARATOR)


def replace_prefix(path: str, old_base: str, new_base: str) -> str:
    """Swap ``old_base`` for ``new_base`` at the start of ``path``.

    Callers must check :func:`is_same_or_descendant` first.
    """

    return new_base + path[len(old_base) :]


def is_valid_segment(name: str) -> bool:
    """Return whether ``name`` can be used as a single path segment."""
    return bool(name) and SEPARATOR not in name and name not in {".", ".."}


def encode_uri_component(value: str) -> str:
    """Percent-encode ``value`` the way ``encodeURIComponent`` does."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_child_folder_path(parent_path: str, child_name: str) -> str:
    """Return the path of ``child_name`` inside ``parent_path``.

    The child segment is URI-component encoded so it can be embedded in a route.

    Args:
        parent_path: Path of the containing folder (may be empty).
        child_name: Raw name of the child folder.

    Returns:
        str: Joined path with the encoded child segment.
    """

    return join_path(parent_path, encode_uri_component(child_name))


__all__ = [
    "SEPARATOR",
    "build_child_folder_path",
    "encode_uri_component",
    "is_same_or_descendant",
    "is_valid_segment",
    "join_path",
    "last_segment",
    "parent_path",
    "path_depth",
    "replace_prefix",
    "split_path",
]
