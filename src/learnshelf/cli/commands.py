"""CLI commands for learnshelf.

This module implements all user-facing CLI commands for learnshelf: the flat
and tree scans, the grouped listing of one set, thumbnail lookup and the
management of stored library folders.
- Uses Typer for declarative CLI structure and option parsing.
- All human-readable output is routed through a Rich Console from
  ConsoleManager; ``--json`` output is written raw to stdout so it can be
  consumed by another process.

Design:
- Scan settings resolve CLI > env > config file > default through
  utils.config.resolve_setting.
- Filesystem problems never abort a command; they are collected as issues and
  printed as warnings after the result.
- Exit codes are defined as an Enum for clarity and maintainability.
"""

import contextlib
import sys
from enum import Enum
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.markup import escape

from learnshelf.cli import app
from learnshelf.cli.console import ConsoleManager
from learnshelf.cli.renderer import (
    render_grouped,
    render_issues,
    render_sets,
    render_tree,
)
from learnshelf.core.scanner import (
    list_grouped,
    resolve_thumbnail,
    scan_flat,
    scan_tree,
)
from learnshelf.core.thumbnail import with_thumbnail
from learnshelf.models.core import ScanIssue
from learnshelf.models.scan import (
    DEFAULT_FLAT_MAX_DEPTH,
    DEFAULT_TREE_MAX_DEPTH,
    ScanOptions,
)
from learnshelf.utils.config import (
    add_scan_folder,
    get_scan_folders,
    remove_scan_folder,
    resolve_setting,
)
from learnshelf.utils.json import dumps


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1


folders_app = typer.Typer(help="Manage the library folders scanned by default.")
app.add_typer(folders_app, name="folders")


ROOTS = Annotated[
    Optional[List[Path]],
    typer.Argument(
        help="Folders to scan. Defaults to the stored library folders.",
        show_default=False,
    ),
]

SET_PATH = Annotated[
    Path,
    typer.Argument(
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        help="Folder of the learning set",
    ),
]

JSON_OUTPUT = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Output results in JSON format",
    ),
]

MAX_DEPTH = Annotated[
    Optional[int],
    typer.Option(
        "--max-depth",
        min=0,
        help="Deepest folder level to visit below each root",
        show_default=False,
    ),
]

WORKERS = Annotated[
    Optional[int],
    typer.Option(
        "--workers",
        "-w",
        min=1,
        help="Number of roots scanned in parallel",
        show_default=False,
    ),
]

THUMBNAILS = Annotated[
    bool,
    typer.Option(
        "--thumbnails",
        help="Resolve a cover image for every folder in the tree",
    ),
]

HIDE_EMPTY = Annotated[
    bool,
    typer.Option(
        "--hide-empty",
        help="Leave out roots that hold no documents or audio",
    ),
]

OUTPUT = Annotated[
    Optional[Path],
    typer.Option(
        "--output",
        "-o",
        dir_okay=False,
        help="Write the image to this file instead of printing a data URI",
    ),
]


def _build_options(
    *,
    tree_max_depth: Optional[int] = None,
    flat_max_depth: Optional[int] = None,
    workers: Optional[int] = None,
) -> ScanOptions:
    """Resolve scan options from CLI values, env vars and the config file.

    Raises:
        ValidationError: If a resolved value is out of range.
    """
    return ScanOptions(
        tree_max_depth=resolve_setting(
            "scan.tree_max_depth",
            default=DEFAULT_TREE_MAX_DEPTH,
            cli_value=tree_max_depth,
        ),
        flat_max_depth=resolve_setting(
            "scan.flat_max_depth",
            default=DEFAULT_FLAT_MAX_DEPTH,
            cli_value=flat_max_depth,
        ),
        workers=resolve_setting("scan.workers", default=1, cli_value=workers),
    )


def _options_or_exit(console: Console, **overrides: Optional[int]) -> ScanOptions:
    try:
        return _build_options(**overrides)
    except ValidationError as e:
        console.print(f"[red]Error: Invalid scan settings: {escape(str(e))}[/red]")
        raise typer.Exit(ExitCode.ERROR)


def _roots_or_exit(console: Console, roots: Optional[List[Path]]) -> List[Path]:
    """Return explicit roots, else the stored folders; exit when both are empty."""
    if roots:
        return list(roots)
    stored = get_scan_folders()
    if not stored:
        console.print(
            "[red]Error: No folders to scan.[/red] "
            "Pass folders or store one with 'learnshelf folders add PATH'."
        )
        raise typer.Exit(ExitCode.ERROR)
    return stored


def _write_json(data: object) -> None:
    if isinstance(data, BaseModel):
        data = data.model_dump()
    elif isinstance(data, list):
        data = [
            item.model_dump() if isinstance(item, BaseModel) else item for item in data
        ]
    sys.stdout.write(dumps(data) + "\n")


def _spinner(console: Console, message: str, quiet: bool):
    if quiet:
        return contextlib.nullcontext()
    return console.status(f"[cyan]{message}", spinner="dots")


@app.command()
def sets(
    roots: ROOTS = None,
    json_output: JSON_OUTPUT = False,
    max_depth: MAX_DEPTH = None,
    workers: WORKERS = None,
) -> None:
    """Scan folders and list every folder that directly holds documents."""
    with ConsoleManager() as console:
        options = _options_or_exit(console, flat_max_depth=max_depth, workers=workers)
        scan_roots = _roots_or_exit(console, roots)
        issues: List[ScanIssue] = []
        with _spinner(console, "Scanning library...", json_output):
            found = scan_flat(scan_roots, options=options, issues=issues)

        if json_output:
            _write_json(found)
            return
        if not found:
            console.print("[yellow]No learning sets found.[/yellow]")
        else:
            render_sets(found, console=console)
        render_issues(issues, console=console)


@app.command()
def tree(
    roots: ROOTS = None,
    json_output: JSON_OUTPUT = False,
    max_depth: MAX_DEPTH = None,
    workers: WORKERS = None,
    thumbnails: THUMBNAILS = False,
    hide_empty: HIDE_EMPTY = False,
) -> None:
    """Scan folders and show the library as a tree of folders."""
    with ConsoleManager() as console:
        options = _options_or_exit(console, tree_max_depth=max_depth, workers=workers)
        scan_roots = _roots_or_exit(console, roots)
        issues: List[ScanIssue] = []
        with _spinner(console, "Scanning library...", json_output):
            nodes = scan_tree(scan_roots, options=options, issues=issues)
            if hide_empty:
                nodes = [node for node in nodes if not node.is_empty]
            if thumbnails:
                nodes = [with_thumbnail(n, issues, recursive=True) for n in nodes]

        if json_output:
            _write_json(nodes)
            return
        if not nodes:
            console.print("[yellow]No folders to show.[/yellow]")
        else:
            render_tree(nodes, console=console)
        render_issues(issues, console=console)


@app.command()
def files(
    set_path: SET_PATH,
    json_output: JSON_OUTPUT = False,
    max_depth: MAX_DEPTH = None,
) -> None:
    """List the documents and audio of one set, grouped by folder."""
    with ConsoleManager() as console:
        options = _options_or_exit(console, tree_max_depth=max_depth)
        issues: List[ScanIssue] = []
        listing = list_grouped(set_path, options=options, issues=issues)

        if json_output:
            _write_json(listing)
            return
        if not listing.structure:
            console.print("[yellow]No documents or audio found.[/yellow]")
        else:
            render_grouped(listing, console=console)
        render_issues(issues, console=console)


@app.command()
def thumbnail(set_path: SET_PATH, output: OUTPUT = None) -> None:
    """Find the cover image of a set."""
    with ConsoleManager() as console:
        issues: List[ScanIssue] = []
        found = resolve_thumbnail(set_path, issues)
        render_issues(issues, console=console)
        if found is None:
            console.print("[yellow]No thumbnail found.[/yellow]")
            raise typer.Exit(ExitCode.ERROR)
        if output is None:
            sys.stdout.write(found.data_uri + "\n")
            return
        try:
            output.write_bytes(found.content)
        except OSError as e:
            console.print(
                f"[red]Error: Could not write {escape(str(output))}: "
                f"{escape(str(e))}[/red]"
            )
            raise typer.Exit(ExitCode.ERROR)
        console.print(
            f"Wrote [bold]{escape(str(found.source))}[/bold] "
            f"to [green]{escape(str(output))}[/green]"
        )


@folders_app.command("list")
def folders_list() -> None:
    """Show the stored library folders."""
    with ConsoleManager() as console:
        folders = get_scan_folders()
        if not folders:
            console.print("[yellow]No library folders stored.[/yellow]")
            return
        for folder in folders:
            marker = "" if folder.exists() else " [red](missing)[/red]"
            console.print(f"{escape(str(folder))}{marker}")


@folders_app.command("add")
def folders_add(
    folder: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
            help="Folder to add to the library",
        ),
    ],
) -> None:
    """Store a folder to be scanned by default."""
    with ConsoleManager() as console:
        folders = add_scan_folder(folder)
        console.print(f"Library folders: [bold]{len(folders)}[/bold]")


@folders_app.command("remove")
def folders_remove(
    folder: Annotated[Path, typer.Argument(help="Folder to remove from the library")],
) -> None:
    """Stop scanning a stored folder by default."""
    with ConsoleManager() as console:
        if not remove_scan_folder(folder):
            console.print(
                f"[yellow]Not a library folder: {escape(str(folder))}[/yellow]"
            )
            raise typer.Exit(ExitCode.ERROR)
        console.print(f"Removed [bold]{escape(str(folder))}[/bold]")


def main() -> None:
    """Main entry point for the CLI."""
    app()
