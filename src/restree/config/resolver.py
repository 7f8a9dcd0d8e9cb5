"""Configuration resolution helpers."""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from copy import deepcopy
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import RestreeConfig

ENV_PREFIX = "RESTREE__"


def resolve_with_precedence(
    *,
    defaults: RestreeConfig,
    file_overrides: Mapping[str, Any] | None = None,
    env_overrides: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> RestreeConfig:
    """Layer override sources over ``defaults`` and validate the result.

    Later sources win: file, then environment, then CLI. Keys may be nested
    mappings or dotted paths such as ``trash.root_name``.

    Args:
        defaults: Baseline configuration.
        file_overrides: Values read from the configuration file.
        env_overrides: Values extracted from ``RESTREE__`` environment variables.
        cli_overrides: Values supplied on the command line.

    Returns:
        RestreeConfig: Validated configuration.

    Raises:
        ConfigError: If an override is malformed or a value fails validation.
    """

    merged = defaults.model_dump(mode="python")
    layers = (("file", file_overrides), ("environment", env_overrides), ("cli", cli_overrides))
    for source_name, layer in layers:
        if layer is None:
            continue
        merged = merge_mappings(merged, expand_dotted(layer, source_name=source_name))

    try:
        return RestreeConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


def env_overrides_from(env: Mapping[str, str]) -> dict[str, Any]:
    """Collect ``RESTREE__SECTION__KEY`` variables into a nested mapping.

    Values are parsed as YAML literals so ``true`` and ``2`` arrive typed.
    """

    overrides: dict[str, Any] = {}
    for key, raw_value in env.items():
        if not key.startswith(ENV_PREFIX):
            continue
        segments = [segment.lower() for segment in key[len(ENV_PREFIX) :].split("__") if segment]
        if not segments:
            continue
        try:
            value = yaml.safe_load(raw_value)
        except yaml.YAMLError:
            value = raw_value
        assign_path(overrides, segments, value)
    return overrides


def flatten_for_env(config: RestreeConfig) -> dict[str, str]:
    """Render ``config`` as ``RESTREE__SECTION__KEY`` environment variables."""
    flat: dict[str, str] = {}
    for section, values in config.model_dump(mode="python").items():
        for key, value in values.items():
            env_key = f"{ENV_PREFIX}{section.upper()}__{key.upper()}"
            if value is None:
                flat[env_key] = "null"
            elif isinstance(value, bool):
                flat[env_key] = str(value).lower()
            else:
                flat[env_key] = str(value)
    return flat


def expand_dotted(source: Mapping[str, Any], *, source_name: str) -> dict[str, Any]:
    """Return ``source`` with dotted keys expanded into nested mappings.

    Raises:
        ConfigError: If ``source`` is not a mapping, has non-string keys, or a
            dotted key collides with a scalar value.
    """

    if not isinstance(source, MappingABC):
        raise ConfigError(f"{source_name.capitalize()} overrides must be a mapping.")

    expanded: dict[str, Any] = {}
    for key, value in source.items():
        if not isinstance(key, str):
            raise ConfigError(f"{source_name.capitalize()} override keys must be strings.")
        if isinstance(value, MappingABC):
            value = expand_dotted(value, source_name=source_name)
        assign_path(expanded, key.split("."), value)
    return expanded


def assign_path(target: dict[str, Any], path: list[str], value: Any) -> None:
    """Set ``value`` at ``path`` inside ``target``, creating mappings along the way.

    Raises:
        ConfigError: If an intermediate segment already holds a non-mapping value.
    """

    node = target
    for segment in path[:-1]:
        child = node.setdefault(segment, {})
        if not isinstance(child, dict):
            raise ConfigError(f"Override for {'.'.join(path)} conflicts with an existing value.")
        node = child

    leaf = path[-1]
    existing = node.get(leaf)
    if isinstance(value, MappingABC) and isinstance(existing, MappingABC):
        node[leaf] = merge_mappings(existing, value)
    else:
        node[leaf] = value


def merge_mappings(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge ``overrides`` into a copy of ``base``."""
    merged = {key: deepcopy(value) for key, value in base.items()}
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(value, MappingABC) and isinstance(current, MappingABC):
            merged[key] = merge_mappings(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


__all__ = [
    "ENV_PREFIX",
    "assign_path",
    "env_overrides_from",
    "expand_dotted",
    "flatten_for_env",
    "merge_mappings",
    "resolve_with_precedence",
]
