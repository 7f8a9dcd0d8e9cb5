"""Load and save resource documents for the restree CLI.

A resource document is a JSON or YAML file holding either a list of resource
records or a mapping with a ``resources`` list. The format is chosen from the
file suffix.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

import yaml
from pydantic import ValidationError

from restree.tree.models import Resource, as_resources

from .errors import DocumentError, MissingDocumentError

YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def load_resources(path: Path) -> list[Resource]:
    """Read the resources stored in ``path``.

    Args:
        path: JSON or YAML resource document.

    Returns:
        list[Resource]: Validated resources in document order.

    Raises:
        MissingDocumentError: If the document does not exist.
        DocumentError: If the document cannot be parsed or holds invalid records.
    """

    if not path.exists():
        raise MissingDocumentError(f"No resource document found at {path}")

    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            raw = yaml.safe_load(text)
        else:
            raw = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise DocumentError(f"Invalid resource document {path}: {exc}") from exc

    records = _extract_records(raw)
    try:
        return as_resources(records)
    except ValidationError as exc:
        raise DocumentError(f"Invalid resource record in {path}: {exc}") from exc


def dump_resources(
    resources: Iterable[Resource],
    *,
    yaml_output: bool = False,
    indent: int = 2,
) -> str:
    """Serialize ``resources`` as a JSON (default) or YAML list."""
    payload = resources_payload(resources)
    if yaml_output:
        return yaml.safe_dump(payload, sort_keys=False)
    return json.dumps(payload, indent=indent or None) + "\n"


def save_resources(path: Path, resources: Iterable[Resource], *, indent: int = 2) -> None:
    """Write ``resources`` to ``path`` in the format implied by its suffix."""
    text = dump_resources(
        resources,
        yaml_output=path.suffix.lower() in YAML_SUFFIXES,
        indent=indent,
    )
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def resources_payload(resources: Iterable[Resource]) -> list[dict[str, Any]]:
    """Return plain dictionaries for ``resources``, omitting unset optional fields."""
    return [resource.model_dump(mode="json", exclude_none=True) for resource in resources]


def _extract_records(raw: Any) -> list[Any]:
    if raw is None:
        return []
    if isinstance(raw, dict):
        raw = raw.get("resources")
    if not isinstance(raw, list):
        raise DocumentError("Resource document must contain a list of resources.")
    return raw


__all__ = [
    "DocumentError",
    "MissingDocumentError",
    "dump_resources",
    "load_resources",
    "resources_payload",
    "save_resources",
]
