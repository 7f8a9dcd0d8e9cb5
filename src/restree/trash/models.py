"""Models describing the virtual trash view."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from restree.tree.models import Resource

DEFAULT_TRASH_ROOT = "trash"


class TrashVirtualResource(Resource):
    """A trashed resource paired with its location in the virtual trash namespace.

    Attributes:
        virtual_path: Path under the synthetic trash root; recomputed on every query.
    """

    virtual_path: str


class TrashMapping(BaseModel):
    """Every trashed item with its virtual path, plus the selected virtual root."""

    items: List[TrashVirtualResource] = Field(default_factory=list)
    virtual_root: str = DEFAULT_TRASH_ROOT


class TrashListing(BaseModel):
    """Direct children of one virtual trash folder."""

    resources: List[TrashVirtualResource] = Field(default_factory=list)
    virtual_root: str = DEFAULT_TRASH_ROOT


__all__ = ["DEFAULT_TRASH_ROOT", "TrashListing", "TrashMapping", "TrashVirtualResource"]
