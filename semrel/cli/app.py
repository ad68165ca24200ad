from __future__ import annotations

import os
from pathlib import Path
from typing import NoReturn, cast

import typer

from semrel import __version__
from semrel.core.config import (
    CONFIG_FILENAME,
    Config,
    load_config,
    load_config_or_default,
    resolve_editor,
)
from semrel.core.errors import ErrorCode
from semrel.core.result import Err
from semrel.output.console import ConsoleProtocol, RichConsole, Style
from semrel.release.git import GitRepository
from semrel.release.model import BUMP_KINDS, BumpKind, ReleaseRequest
from semrel.release.notes import NotesEditor
from semrel.release.pipeline import ReleasePipeline

PROG = "semrel"
USAGE = f"usage: {PROG} [--info] <major|minor|patch> [pre-release]"


app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
    help="Bump the version, tag it with release notes and archive the tag.",
)


def _fail(message: str) -> NoReturn:
    typer.echo(f"{PROG}: {message}", err=True)
    raise typer.Exit(code=int(ErrorCode.FAILURE))


def _load_config(root: Path, config_path: Path | None) -> Config:
    if config_path is not None:
        result = load_config(config_path)
    else:
        result = load_config_or_default(root / CONFIG_FILENAME)

    if isinstance(result, Err):
        _fail(result.error.message)
    return result.value


def build_pipeline(
    *,
    root: Path,
    config: Config,
    editor: str | None,
    console: ConsoleProtocol,
) -> ReleasePipeline:
    return ReleasePipeline(
        repo=GitRepository(root, git=config.git.executable),
        notes=NotesEditor(editor, cwd=root),
        console=console,
    )


@app.command()
def release(
    bump: str | None = typer.Argument(None, help="Version field to advance: major, minor or patch."),
    prerelease: str = typer.Argument("", help="Pre-release label, e.g. rc1."),
    info: bool = typer.Option(
        False, "--info", "-i", help="Append the short commit hash as build metadata."
    ),
    repo: Path | None = typer.Option(
        None, "--repo", "-C", help="Repository root (default: current directory)."
    ),
    config_path: Path | None = typer.Option(
        None, "--config", help=f"Config file (default: <repo>/{CONFIG_FILENAME})."
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print the final tag."),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))

    if bump is None:
        typer.echo(USAGE)
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    if bump not in BUMP_KINDS:
        _fail(f'unknown release version "{bump}"')

    try:
        root = (repo or Path.cwd()).expanduser().resolve()
    except OSError as e:
        _fail(f"invalid --repo: {e}")

    config = _load_config(root, config_path)
    console = RichConsole(stderr=True, quiet=quiet)

    pipeline = build_pipeline(
        root=root,
        config=config,
        editor=resolve_editor(config, os.environ),
        console=console,
    )
    request = ReleaseRequest(
        bump=cast(BumpKind, bump),
        include_build_metadata=info,
        prerelease=prerelease,
    )

    result = pipeline.run(request)
    if isinstance(result, Err):
        if result.error.hint:
            console.print(f"hint: {result.error.hint}", Style.DIM)
        _fail(result.error.message)

    typer.echo(result.value.tag)


def main() -> None:
    app(prog_name=PROG)
