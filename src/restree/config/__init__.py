"""Configuration management for restree."""

from __future__ import annotations

import os
import textwrap
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

import yaml

from .exceptions import ConfigError
from .models import (
    CLIOptions,
    EditorSettings,
    ExplorerSettings,
    LoggingSettings,
    RestreeConfig,
    TrashSettings,
)
from .resolver import (
    assign_path,
    env_overrides_from,
    flatten_for_env,
    resolve_with_precedence,
)

DEFAULT_CONFIG_PATH = Path("~/.restree/config.yaml")
_CONFIG_HEADER = textwrap.dedent(
    """\
    # restree configuration file
    # Manage with `restree config set KEY --value VALUE` or edit by hand.
    """
)


class ConfigManager:
    """Read, validate, and persist the restree configuration file."""

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._config_path = (config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._env = env if env is not None else os.environ

    @property
    def config_path(self) -> Path:
        """Return the resolved configuration path."""
        return self._config_path

    def load(
        self,
        *,
        cli_overrides: Mapping[str, Any] | None = None,
        include_env: bool = True,
        ensure_file: bool = True,
    ) -> RestreeConfig:
        """Return the effective configuration.

        Args:
            cli_overrides: Dotted-key overrides supplied on the command line.
            include_env: Whether ``RESTREE__`` environment variables are applied.
            ensure_file: Whether to create a default file when none exists.

        Returns:
            RestreeConfig: Configuration after applying every override layer.

        Raises:
            ConfigError: If the file or an override is invalid.
        """

        if ensure_file:
            self.ensure_exists()

        return resolve_with_precedence(
            defaults=RestreeConfig(),
            file_overrides=self.read_overrides(),
            env_overrides=env_overrides_from(self._env) if include_env else None,
            cli_overrides=cli_overrides,
        )

    def ensure_exists(self) -> Path:
        """Write a default configuration file if none exists yet."""
        if not self._config_path.exists():
            self.save(RestreeConfig())
        return self._config_path

    def read_text(self) -> str:
        """Return the raw configuration file contents, or ``""`` when absent."""
        if not self._config_path.exists():
            return ""
        return self._config_path.read_text(encoding="utf-8")

    def read_overrides(self) -> dict[str, Any]:
        """Return the mapping stored in the configuration file.

        Raises:
            ConfigError: If the file is not valid YAML or not a mapping.
        """

        text = self.read_text()
        if not text:
            return {}

        try:
            raw = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse configuration file: {exc}") from exc

        if not isinstance(raw, dict):
            raise ConfigError("Configuration file must contain a mapping at the top level.")
        return raw

    def set_value(self, key: str, value: Any) -> RestreeConfig:
        """Persist ``value`` under the dotted ``key`` after validating the result.

        Raises:
            ConfigError: If the key is empty or the resulting file would be invalid.
        """

        segments = [segment.strip() for segment in key.split(".") if segment.strip()]
        if not segments:
            raise ConfigError("Key must be a dotted path such as 'trash.root_name'.")

        data = self.read_overrides()
        assign_path(data, segments, value)
        config = resolve_with_precedence(defaults=RestreeConfig(), file_overrides=data)
        self.save(data)
        return config

    def save(self, config: RestreeConfig | Mapping[str, Any]) -> None:
        """Write ``config`` to disk with a generated header."""
        if isinstance(config, RestreeConfig):
            data = config.model_dump(mode="python")
        else:
            data = dict(config)

        stamp = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        body = yaml.safe_dump(data, sort_keys=False)
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        self._config_path.write_text(
            f"{_CONFIG_HEADER}# Last updated: {stamp}\n{body}", encoding="utf-8"
        )


__all__ = [
    "CLIOptions",
    "ConfigError",
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "EditorSettings",
    "ExplorerSettings",
    "LoggingSettings",
    "RestreeConfig",
    "TrashSettings",
    "flatten_for_env",
    "resolve_with_precedence",
]
