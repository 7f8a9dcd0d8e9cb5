"""Command line interface for restree."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, NoReturn, Optional, Sequence

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from restree.config import ConfigError, ConfigManager, RestreeConfig
from restree.document import (
    DocumentError,
    MissingDocumentError,
    load_resources,
    resources_payload,
    save_resources,
)
from restree.routing import get_folder_path_from_pathname
from restree.search import filter_resources_by_query
from restree.trash import get_trash_resources_at_virtual_path
from restree.tree import (
    Resource,
    TreeEditError,
    build_child_folder_path,
    build_explorer_tree,
    copy_resource_in_tree,
    flatten_paths,
    is_lost_and_found_visible,
    move_resource_in_tree,
    rename_resource_in_tree,
)

console = Console()
LOGGER = logging.getLogger(__name__)

DOCUMENT_ARGUMENT = click.argument(
    "document",
    type=click.Path(dir_okay=False, path_type=Path),
)


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool,
    original: Exception | None = None,
) -> NoReturn:
    """Emit a standardized error and terminate the command.

    Args:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        json_output: Indicates whether JSON mode is active.
        original: Original exception for chaining when not using JSON.

    Raises:
        SystemExit: When emitting JSON output to terminate the command.
        click.ClickException: For non-JSON flows to surface the error.
    """

    if json_output:
        console.print_json(data={"error": {"code": code, "message": message}})
        raise SystemExit(1)

    raise click.ClickException(message) from original


def _emit_message(message: Any, *, quiet: bool) -> None:
    if not quiet:
        console.print(message)


def _configure_logging(level: str) -> None:
    """Route restree package log records to stderr through rich.

    Only the ``restree`` logger is configured; the root logger is left alone.
    """
    package_logger = logging.getLogger("restree")
    if not any(isinstance(handler, RichHandler) for handler in package_logger.handlers):
        package_logger.addHandler(
            RichHandler(console=Console(stderr=True), show_path=False, markup=False)
        )
    package_logger.setLevel(level)


def _config(ctx: click.Context) -> RestreeConfig:
    return ctx.find_object(RestreeConfig) or RestreeConfig()


def _load_document(document: Path, *, json_output: bool) -> list[Resource]:
    try:
        return load_resources(document)
    except MissingDocumentError as exc:
        _handle_cli_error(str(exc), code="document_missing", json_output=json_output, original=exc)
    except DocumentError as exc:
        _handle_cli_error(str(exc), code="document_invalid", json_output=json_output, original=exc)


def _resource_table(
    resources: Sequence[Resource], *, title: str, extra: str | None = None
) -> Table:
    table = Table(title=title)
    table.add_column("Type")
    table.add_column("Name")
    table.add_column("Path")
    if extra:
        table.add_column(extra.replace("_", " ").title())
    for resource in resources:
        row = [resource.type, resource.name, resource.path]
        if extra:
            row.append(str(getattr(resource, extra)))
        table.add_row(*(escape(cell) for cell in row))
    return table


def _run_edit(
    ctx: click.Context,
    command: str,
    document: Path,
    edit: Callable[[list[Resource]], list[Resource]],
    *,
    output: Optional[Path],
    in_place: bool,
    json_output: bool,
    quiet: bool,
) -> None:
    """Apply ``edit`` to the document and emit or persist the result."""

    if in_place and output is not None:
        raise click.UsageError("--output and --in-place cannot be combined.")

    config = _config(ctx)
    quiet = quiet or config.cli.quiet_default
    resources = _load_document(document, json_output=json_output)

    try:
        updated = edit(resources)
    except TreeEditError as exc:
        _handle_cli_error(str(exc), code=exc.code, json_output=json_output, original=exc)

    LOGGER.debug("%s produced %d resources from %d", command, len(updated), len(resources))

    destination = document if in_place else output
    if destination is not None:
        save_resources(destination, updated, indent=config.cli.json_indent)
        if json_output:
            console.print_json(
                data={"command": command, "written": str(destination), "count": len(updated)}
            )
        else:
            _emit_message(
                f"[green]{command}: wrote {len(updated)} resources to "
                f"{escape(str(destination))}.[/green]",
                quiet=quiet,
            )
        return

    if json_output:
        console.print_json(data={"resources": resources_payload(updated)})
    else:
        _emit_message(_resource_table(updated, title=f"{command} result"), quiet=quiet)


def _edit_options(func: Callable[..., Any]) -> Callable[..., Any]:
    options = [
        click.option(
            "--output",
            "-o",
            type=click.Path(dir_okay=False, path_type=Path),
            help="Write the edited document to this path.",
        ),
        click.option("--in-place", is_flag=True, help="Overwrite DOCUMENT with the result."),
        click.option("--json", "json_output", is_flag=True, help="Emit JSON output."),
        click.option("--quiet", is_flag=True, help="Suppress non-error output."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="restree")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """restree edits flat file/folder listings and browses their virtual trash."""

    overrides = {"logging.level": "DEBUG"} if verbose else None
    try:
        config = ConfigManager().load(cli_overrides=overrides)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    _configure_logging(config.logging.level)
    ctx.obj = config


@cli.command()
@DOCUMENT_ARGUMENT
@click.argument("target")
@click.argument("new_name")
@_edit_options
@click.pass_context
def rename(
    ctx: click.Context,
    document: Path,
    target: str,
    new_name: str,
    output: Optional[Path],
    in_place: bool,
    json_output: bool,
    quiet: bool,
) -> None:
    """Rename TARGET to NEW_NAME, rebasing everything beneath it."""

    _run_edit(
        ctx,
        "rename",
        document,
        lambda resources: rename_resource_in_tree(resources, target, new_name),
        output=output,
        in_place=in_place,
        json_output=json_output,
        quiet=quiet,
    )


@cli.command()
@DOCUMENT_ARGUMENT
@click.argument("target")
@click.argument("destination")
@_edit_options
@click.pass_context
def mv(
    ctx: click.Context,
    document: Path,
    target: str,
    destination: str,
    output: Optional[Path],
    in_place: bool,
    json_output: bool,
    quiet: bool,
) -> None:
    """Move TARGET into the DESTINATION folder."""

    _run_edit(
        ctx,
        "mv",
        document,
        lambda resources: move_resource_in_tree(resources, target, destination),
        output=output,
        in_place=in_place,
        json_output=json_output,
        quiet=quiet,
    )


@cli.command()
@DOCUMENT_ARGUMENT
@click.argument("target")
@click.argument("destination")
@click.option("--name", "new_name", type=str, help="Name for the copy.")
@_edit_options
@click.pass_context
def cp(
    ctx: click.Context,
    document: Path,
    target: str,
    destination: str,
    new_name: Optional[str],
    output: Optional[Path],
    in_place: bool,
    json_output: bool,
    quiet: bool,
) -> None:
    """Copy TARGET and its contents into the DESTINATION folder."""

    suffix = _config(ctx).editor.copy_suffix
    _run_edit(
        ctx,
        "cp",
        document,
        lambda resources: copy_resource_in_tree(
            resources, target, destination, new_name=new_name, copy_suffix=suffix
        ),
        output=output,
        in_place=in_place,
        json_output=json_output,
        quiet=quiet,
    )


@cli.command()
@DOCUMENT_ARGUMENT
@click.argument("query")
@click.option("--json", "json_output", is_flag=True, help="Emit JSON output.")
def search(document: Path, query: str, json_output: bool) -> None:
    """List resources whose name contains QUERY."""

    resources = _load_document(document, json_output=json_output)
    matches = filter_resources_by_query(resources, query)

    if json_output:
        console.print_json(data={"query": query, "resources": resources_payload(matches)})
        return
    title = escape(f"{len(matches)} match(es) for {query!r}")
    console.print(_resource_table(matches, title=title))


@cli.command()
@DOCUMENT_ARGUMENT
@click.argument("virtual_path", required=False)
@click.option(
    "--original",
    "original_path",
    default="",
    help="Keep items whose real path contains this text.",
)
@click.option("--json", "json_output", is_flag=True, help="Emit JSON output.")
@click.pass_context
def trash(
    ctx: click.Context,
    document: Path,
    virtual_path: Optional[str],
    original_path: str,
    json_output: bool,
) -> None:
    """List trashed items directly inside VIRTUAL_PATH (defaults to the trash root)."""

    root = _config(ctx).trash.root_name
    items = _load_document(document, json_output=json_output)
    listing = get_trash_resources_at_virtual_path(
        items, virtual_path or root, original_path, root=root
    )

    if json_output:
        console.print_json(data=listing.model_dump(mode="json", exclude_none=True))
        return

    table = _resource_table(
        listing.resources,
        title=escape(f"{virtual_path or root} (virtual root: {listing.virtual_root})"),
        extra="virtual_path",
    )
    console.print(table)


@cli.command()
@click.argument("pathname")
@click.option("--child", "child_name", type=str, help="Also build the path of a child folder.")
@click.option("--json", "json_output", is_flag=True, help="Emit JSON output.")
def route(pathname: str, child_name: Optional[str], json_output: bool) -> None:
    """Parse a route PATHNAME into its section and folder path."""

    location = get_folder_path_from_pathname(pathname)
    payload: dict[str, Any] = location.model_dump()
    if child_name is not None:
        payload["child_path"] = build_child_folder_path(location.folder_path, child_name)

    if json_output:
        console.print_json(data=payload)
        return
    for key, value in payload.items():
        console.print(f"{key}: {value}", markup=False, highlight=False)


@cli.command()
@DOCUMENT_ARGUMENT
@click.option("--json", "json_output", is_flag=True, help="Emit JSON output.")
@click.pass_context
def paths(ctx: click.Context, document: Path, json_output: bool) -> None:
    """Print every path in DOCUMENT, depth-first."""

    explorer = _config(ctx).explorer
    resources = _load_document(document, json_output=json_output)
    if explorer.hide_empty_lost_and_found:
        resources = [
            resource
            for resource in resources
            if is_lost_and_found_visible(resource, name=explorer.lost_and_found_name)
        ]

    flattened = flatten_paths(build_explorer_tree(resources))
    if json_output:
        console.print_json(data={"paths": flattened})
        return
    for path in flattened:
        console.print(path, markup=False, highlight=False)


@cli.group()
def config() -> None:
    """Manage restree configuration."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
def config_view(no_env: bool) -> None:
    """Display the effective configuration."""

    manager = ConfigManager()
    try:
        effective = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(effective.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="YAML literal to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value under a dotted KEY."""

    try:
        parsed_value = yaml.safe_load(value)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Unable to parse value: {exc}") from exc

    try:
        ConfigManager().set_value(key, parsed_value)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    console.print(f"[green]Updated {escape(key)}.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()
