"""Command-line interface for learnshelf.

This package provides the Typer app and global console for all CLI commands and
user-facing output.

- app: The Typer application object; commands are registered in commands.py.
- rich_console: Rich Console instance for consistent, styled output.
- The CLI is the process boundary of the indexer: it resolves settings, runs a
  scan and renders the result as Rich output or JSON.
"""

import os

import typer
from rich.console import Console
from rich.traceback import install

from learnshelf.utils.debug import DEBUG_ON, setup_logger

# Install rich traceback handler for all CLI commands
install(show_locals=False)

rich_console = Console()

app = typer.Typer(
    name="learnshelf",
    help="Index folders of documents and audio into learning sets.",
    add_completion=True,
)


@app.callback()
def callback(
    ctx: typer.Context,  # noqa: D401 – Typer requires ctx param first
    no_rich: bool = typer.Option(
        False,
        "--no-rich",
        help=(
            "Disable Rich coloured output and spinners. "
            "Can also be set with the LEARNSHELF_NO_RICH environment variable."
        ),
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log scan progress and unreadable paths to stderr.",
    ),
) -> None:
    """Top-level CLI callback adding global options.

    The *--no-rich* flag sets the ``LEARNSHELF_NO_RICH`` environment variable
    so that :class:`~learnshelf.cli.console.ConsoleManager` responds the same
    way whether the flag is passed or the variable is set externally.
    """

    if no_rich:
        os.environ["LEARNSHELF_NO_RICH"] = "1"
    if verbose or DEBUG_ON:
        setup_logger(verbose=True)


@app.command()
def version() -> None:
    """Show the version of learnshelf."""
    from learnshelf.__about__ import __version__

    rich_console.print(f"Learnshelf version: [bold]{__version__}[/bold]")
