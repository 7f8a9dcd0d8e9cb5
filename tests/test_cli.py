"""CLI tests for restree edit, search, trash, route, and paths commands."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from click.testing import CliRunner
from rich.logging import RichHandler

from restree.cli import _configure_logging, cli
from restree.document import load_resources

RESOURCES = [
    {"name": "my-files", "path": "my-files", "type": "folder"},
    {"name": "docs", "path": "my-files/docs", "type": "folder"},
    {"name": "plan.md", "path": "my-files/docs/plan.md", "type": "file"},
    {"name": "docs-old", "path": "my-files/docs-old", "type": "folder"},
    {"name": "archive", "path": "my-files/archive", "type": "folder"},
    {"name": "lost+found", "path": "my-files/lost+found", "type": "folder", "empty": True},
]

TRASH = [
    {"_id": "1", "name": "project-a", "path": "my-files/projects/project-a", "type": "folder"},
    {
        "_id": "2",
        "name": "readme.md",
        "path": "my-files/projects/project-a/readme.md",
        "type": "file",
    },
    {"_id": "3", "name": "orphan.txt", "path": "my-files/random/orphan.txt", "type": "file"},
]


def _env_with_home(tmp_path: Path) -> dict[str, str]:
    """Return environment variables pointing HOME to a temp directory."""

    env = {key: value for key, value in os.environ.items() if not key.startswith("RESTREE__")}
    env["HOME"] = str(tmp_path / "home")
    return env


def _document(tmp_path: Path, records: list[dict], name: str = "resources.json") -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


def test_cli_help_displays_commands() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "restree edits flat" in result.output
    for command in ("rename", "mv", "cp", "search", "trash", "route", "paths", "config"):
        assert command in result.output


def test_rename_json_output(tmp_path: Path) -> None:
    document = _document(tmp_path, RESOURCES)
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["rename", str(document), "my-files/docs", "notes", "--json"],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    paths = [entry["path"] for entry in payload["resources"]]
    assert "my-files/notes/plan.md" in paths
    assert "my-files/docs-old" in paths
    # The input document is left as it was.
    assert [r.path for r in load_resources(document)] == [r["path"] for r in RESOURCES]


def test_rename_collision_reports_json_error(tmp_path: Path) -> None:
    document = _document(tmp_path, RESOURCES)
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["rename", str(document), "my-files/docs", "docs-old", "--json"],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["error"]["code"] == "path_collision"


def test_move_error_without_json(tmp_path: Path) -> None:
    document = _document(tmp_path, RESOURCES)
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["mv", str(document), "my-files/docs", "my-files/docs/plan.md"],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 1
    assert "Destination folder not found" in result.output


def test_move_in_place_rewrites_document(tmp_path: Path) -> None:
    document = _document(tmp_path, RESOURCES)
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["mv", str(document), "my-files/docs", "my-files/archive", "--in-place"],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 0
    assert "wrote 6 resources" in result.output
    paths = [resource.path for resource in load_resources(document)]
    assert "my-files/archive/docs/plan.md" in paths


def test_copy_to_output_uses_configured_suffix(tmp_path: Path) -> None:
    document = _document(tmp_path, RESOURCES)
    output = tmp_path / "out.yaml"
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    env["RESTREE__EDITOR__COPY_SUFFIX"] = "backup"

    result = runner.invoke(
        cli,
        ["cp", str(document), "my-files/docs", "my-files/archive", "-o", str(output), "--quiet"],
        env=env,
    )

    assert result.exit_code == 0
    copied = load_resources(output)[len(RESOURCES) :]
    assert [resource.path for resource in copied] == [
        "my-files/archive/docs backup",
        "my-files/archive/docs backup/plan.md",
    ]


def test_copy_with_explicit_name(tmp_path: Path) -> None:
    document = _document(tmp_path, RESOURCES)
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["cp", str(document), "my-files/docs", "my-files", "--name", "docs-old", "--json"],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["resources"][-1]["path"] == "my-files/docs-old 2/plan.md"


def test_search_json(tmp_path: Path) -> None:
    document = _document(tmp_path, RESOURCES)
    runner = CliRunner()

    result = runner.invoke(
        cli, ["search", str(document), "docs", "--json"], env=_env_with_home(tmp_path)
    )

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert [entry["name"] for entry in payload["resources"]] == ["docs", "docs-old"]


def test_invalid_document_reports_error(tmp_path: Path) -> None:
    document = tmp_path / "broken.json"
    document.write_text("{", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(
        cli, ["search", str(document), "docs", "--json"], env=_env_with_home(tmp_path)
    )

    assert result.exit_code == 1
    assert json.loads(result.stdout)["error"]["code"] == "document_invalid"


def test_trash_lists_direct_children(tmp_path: Path) -> None:
    document = _document(tmp_path, TRASH, name="trash.json")
    runner = CliRunner()

    result = runner.invoke(
        cli, ["trash", str(document), "trash/project-a", "--json"], env=_env_with_home(tmp_path)
    )

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["virtual_root"] == "trash/project-a"
    assert [entry["name"] for entry in payload["resources"]] == ["readme.md"]
    assert payload["resources"][0]["virtual_path"] == "trash/project-a/readme.md"


def test_trash_defaults_to_configured_root(tmp_path: Path) -> None:
    document = _document(tmp_path, TRASH, name="trash.json")
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    env["RESTREE__TRASH__ROOT_NAME"] = "bin"

    result = runner.invoke(cli, ["trash", str(document), "--json"], env=env)

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert [entry["virtual_path"] for entry in payload["resources"]] == [
        "bin/project-a",
        "bin/orphan.txt",
    ]


def test_route_json_with_child(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["route", "/reading/my-files/docs", "--child", "Q3 reports", "--json"],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {
        "section": "reading",
        "folder_path": "my-files/docs",
        "child_path": "my-files/docs/Q3%20reports",
    }


def test_paths_hides_empty_lost_and_found(tmp_path: Path) -> None:
    document = _document(tmp_path, RESOURCES)
    runner = CliRunner()

    result = runner.invoke(cli, ["paths", str(document), "--json"], env=_env_with_home(tmp_path))

    assert result.exit_code == 0
    assert json.loads(result.stdout)["paths"] == [
        "my-files",
        "my-files/docs",
        "my-files/docs/plan.md",
        "my-files/docs-old",
        "my-files/archive",
    ]


def test_paths_shows_lost_and_found_when_configured(tmp_path: Path) -> None:
    document = _document(tmp_path, RESOURCES)
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    env["RESTREE__EXPLORER__HIDE_EMPTY_LOST_AND_FOUND"] = "false"

    result = runner.invoke(cli, ["paths", str(document)], env=env)

    assert result.exit_code == 0
    assert "my-files/lost+found" in result.output.splitlines()


def test_edit_rejects_output_with_in_place(tmp_path: Path) -> None:
    document = _document(tmp_path, RESOURCES)
    output = tmp_path / "out.json"
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["mv", str(document), "my-files/docs", "my-files/archive", "--in-place", "-o", str(output)],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 2
    assert "cannot be combined" in result.output
    assert not output.exists()
    assert [r.path for r in load_resources(document)] == [r["path"] for r in RESOURCES]


def test_missing_document_reports_json_error(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["search", str(tmp_path / "absent.json"), "docs", "--json"],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["error"]["code"] == "document_missing"


def test_configure_logging_targets_package_logger_once() -> None:
    package_logger = logging.getLogger("restree")
    saved_handlers, saved_level = list(package_logger.handlers), package_logger.level
    root_handlers = list(logging.getLogger().handlers)
    try:
        _configure_logging("DEBUG")
        _configure_logging("INFO")

        rich_handlers = [h for h in package_logger.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
        assert package_logger.level == logging.INFO
        assert logging.getLogger().handlers == root_handlers
    finally:
        package_logger.handlers = saved_handlers
        package_logger.setLevel(saved_level)
