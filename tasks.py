"""Invoke tasks for syncing, testing, linting, and building restree.

Every task shells out to the `uv` CLI so local runs match CI.
"""

from __future__ import annotations

import shlex
import shutil
from collections.abc import Sequence
from pathlib import Path

from invoke import Collection, Context, task

PROJECT_ROOT = Path(__file__).parent
DIST_DIR = PROJECT_ROOT / "dist"
SAMPLES_DIR = PROJECT_ROOT / "examples"


def _uv(ctx: Context, args: Sequence[str], *, dry_run: bool = False) -> None:
    """Run `uv` with ``args``, or only print the command when ``dry_run`` is set.

    Args:
        ctx: Invoke execution context.
        args: Arguments appended after the `uv` executable.
        dry_run: Print the command instead of running it.
    """
    command = shlex.join(("uv", *args))
    if dry_run:
        print(f"[dry-run] {command}")
        return
    ctx.run(command, echo=True, pty=True)


@task
def sync(ctx: Context) -> None:
    """Install the project and its dev extra into the uv environment."""
    _uv(ctx, ["sync", "--extra", "dev"])


@task(help={"k": "pytest -k expression.", "options": "Extra flags passed to pytest."})
def tests(ctx: Context, k: str = "", options: str = "") -> None:
    """Run the pytest suite.

    Args:
        ctx: Invoke execution context.
        k: Expression selecting a subset of tests.
        options: Additional pytest arguments.
    """
    args = ["run", "pytest"]
    if k:
        args.extend(["-k", k])
    if options:
        args.extend(shlex.split(options))
    _uv(ctx, args)


@task(help={"fix": "Let ruff apply fixes."})
def lint(ctx: Context, fix: bool = False) -> None:
    """Check formatting and lint rules with ruff."""
    _uv(ctx, ["run", "ruff", "format", "--check", "src", "tests"])
    _uv(ctx, ["run", "ruff", "check", "src", "tests", *(["--fix"] if fix else [])])


@task
def typecheck(ctx: Context) -> None:
    """Type-check the package with mypy."""
    _uv(ctx, ["run", "mypy"])


@task(help={"clean": "Empty dist/ before building."})
def build(ctx: Context, clean: bool = False) -> None:
    """Build sdist and wheel into dist/."""
    if clean and DIST_DIR.exists():
        shutil.rmtree(DIST_DIR)
    _uv(ctx, ["build"])


@task(help={"dry_run": "Print the commands without running them."})
def demo(ctx: Context, dry_run: bool = False) -> None:
    """Exercise the CLI against the sample documents in examples/."""
    resources = str(SAMPLES_DIR / "resources.json")
    trash_items = str(SAMPLES_DIR / "trash.json")
    for args in (
        ["search", resources, "docs"],
        ["cp", resources, "my-files/docs", "my-files/archive"],
        ["trash", trash_items, "trash/project-a"],
        ["route", "/reading/my-files/docs"],
    ):
        _uv(ctx, ["run", "restree", *args], dry_run=dry_run)


@task
def ci(ctx: Context) -> None:
    """Run lint, type checks, and tests in CI order."""
    ctx.invoke(lint)
    ctx.invoke(typecheck)
    ctx.invoke(tests)


namespace = Collection(sync, tests, lint, typecheck, build, demo, ci)
