"""Configuration models describing restree settings."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class RestreeConfigModel(BaseModel):
    """Shared configuration for restree settings models."""

    model_config = ConfigDict(extra="forbid")


class EditorSettings(RestreeConfigModel):
    """Options applied to tree edits.

    Attributes:
        copy_suffix: Word appended to a copied resource's name when no name is given.
    """

    copy_suffix: str = "copy"


class TrashSettings(RestreeConfigModel):
    """Options for the virtual trash view.

    Attributes:
        root_name: Name of the synthetic folder that trashed items are re-rooted under.
    """

    root_name: str = "trash"


class ExplorerSettings(RestreeConfigModel):
    """Options controlling explorer listings.

    Attributes:
        lost_and_found_name: Folder name treated as the lost+found folder.
        hide_empty_lost_and_found: Whether an empty lost+found folder is hidden.
    """

    lost_and_found_name: str = "lost+found"
    hide_empty_lost_and_found: bool = True


class LoggingSettings(RestreeConfigModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"


class CLIOptions(RestreeConfigModel):
    """CLI behavior defaults and presentation preferences.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
        json_indent: Indentation used when writing JSON documents.
    """

    quiet_default: bool = False
    json_indent: int = Field(default=2, ge=0)


class RestreeConfig(RestreeConfigModel):
    """Top-level configuration struct for restree.

    Attributes:
        editor: Tree edit settings.
        trash: Virtual trash settings.
        explorer: Explorer listing settings.
        logging: Logging configuration.
        cli: CLI presentation defaults.
    """

    editor: EditorSettings = Field(default_factory=EditorSettings)
    trash: TrashSettings = Field(default_factory=TrashSettings)
    explorer: ExplorerSettings = Field(default_factory=ExplorerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "CLIOptions",
    "EditorSettings",
    "ExplorerSettings",
    "LoggingSettings",
    "RestreeConfig",
    "RestreeConfigModel",
    "TrashSettings",
]
