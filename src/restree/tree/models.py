"""Resource data models shared by the tree editor and trash views."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, List, Literal, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    SerializerFunctionWrapHandler,
    ValidatorFunctionWrapHandler,
    model_serializer,
    model_validator,
)

ResourceType = Literal["file", "folder"]


class RestreeBaseModel(BaseModel):
    """Shared configuration for immutable resource records."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)


class Resource(RestreeBaseModel):
    """A single file or folder entry in a flat resource collection.

    Attributes:
        id: Optional identifier assigned by the backing store (``_id`` accepted).
        name: Display name; always the last segment of ``path``.
        path: Slash-delimited key that is unique within a collection.
        type: Either ``"file"`` or ``"folder"``.
        empty: Optional hint that a folder currently has no children.
    """

    id: Optional[str] = Field(default=None, validation_alias=AliasChoices("id", "_id"))
    name: str
    path: str
    type: ResourceType
    empty: Optional[bool] = None

    _id_key: str = PrivateAttr(default="id")

    @model_validator(mode="wrap")
    @classmethod
    def _remember_id_key(cls, data: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        resource = handler(data)
        if isinstance(data, Mapping) and "_id" in data and "id" not in data:
            resource._id_key = "_id"
        return resource

    @model_serializer(mode="wrap")
    def _restore_id_key(self, handler: SerializerFunctionWrapHandler) -> Any:
        data = handler(self)
        if self._id_key == "id" or not isinstance(data, dict):
            return data
        return {(self._id_key if key == "id" else key): value for key, value in data.items()}

    @property
    def is_folder(self) -> bool:
        """Return whether the resource is a folder."""
        return self.type == "folder"


class ExplorerNode(BaseModel):
    """Nested node used when rendering a collection as a tree."""

    name: str
    path: str
    is_directory: bool
    children: List["ExplorerNode"] = Field(default_factory=list)


ResourceLike = Union[Resource, Mapping[str, Any]]


def as_resources(records: Iterable[ResourceLike]) -> list[Resource]:
    """Return ``records`` as a list of validated resources.

    Resource instances are passed through untouched; mappings are validated.

    Args:
        records: Resource models or plain mappings describing resources.

    Returns:
        list[Resource]: Resources in their original order.
    """

    return [
        record if isinstance(record, Resource) else Resource.model_validate(record)
        for record in records
    ]


__all__ = [
    "ExplorerNode",
    "Resource",
    "ResourceLike",
    "ResourceType",
    "RestreeBaseModel",
    "as_resources",
]
