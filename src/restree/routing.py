"""Conversion between route pathnames and folder locations."""

from __future__ import annotations

from urllib.parse import unquote

from pydantic import BaseModel

from restree.tree.paths import SEPARATOR, encode_uri_component, split_path


class RouteLocation(BaseModel):
    """Folder location addressed by a route pathname.

    Attributes:
        section: First pathname segment naming the application view (e.g. ``reading``).
        folder_path: Decoded resource path of the folder, empty for the section root.
    """

    section: str = ""
    folder_path: str = ""


def get_folder_path_from_pathname(pathname: str) -> RouteLocation:
    """Parse ``/section/<encoded folder segments>`` into a route location."""
    segments = split_path(pathname)
    if not segments:
        return RouteLocation()
    section, *rest = segments
    return RouteLocation(
        section=unquote(section),
        folder_path=SEPARATOR.join(unquote(segment) for segment in rest),
    )


def build_pathname(location: RouteLocation) -> str:
    """Render a route location back into a pathname."""
    segments = [location.section, *split_path(location.folder_path)]
    return SEPARATOR + SEPARATOR.join(
        encode_uri_component(segment) for segment in segments if segment
    )


__all__ = ["RouteLocation", "build_pathname", "get_folder_path_from_pathname"]
