"""Renderer for CLI output.

This module renders scan projections with Rich: sets as a table, the library
as a tree, an opened set as one table per folder, and recovered issues as a
warning list.
"""

from typing import List, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from learnshelf.models.core import (
    GroupedListing,
    ScanIssue,
    SetSummary,
    SetType,
    TreeNode,
)

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_size(size: int) -> str:
    """Render a byte count with a binary unit, e.g. ``1.5 MB``."""
    value = float(size)
    for unit in _SIZE_UNITS:
        if value < 1024 or unit == _SIZE_UNITS[-1]:
            return f"{int(value)} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{size} B"


def render_sets(sets: Sequence[SetSummary], console: Console | None = None) -> None:
    """Render learning sets as a table.

    Args:
        sets: Sets from a flat scan.
        console: Optional Console instance to use for rendering.
    """
    console = console or Console()

    table = Table(title="Learning Sets")
    table.add_column("Name", style="bold")
    table.add_column("Type")
    table.add_column("Docs", justify="right")
    table.add_column("Audio", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("Updated")
    table.add_column("Path", style="cyan")

    type_styles = {SetType.DOC_ONLY: "yellow", SetType.DOC_AUDIO: "green"}

    for summary in sets:
        table.add_row(
            escape(summary.name),
            summary.type.value,
            str(summary.docs),
            str(summary.audio),
            format_size(summary.size),
            summary.updated_at.strftime("%Y-%m-%d") if summary.updated_at else "",
            escape(str(summary.path)),
            style=type_styles.get(summary.type),
        )

    console.print(table)
    total_docs = sum(s.docs for s in sets)
    total_audio = sum(s.audio for s in sets)
    console.print(f"Sets: {len(sets)} | Docs: {total_docs} | Audio: {total_audio}")


def _node_label(node: TreeNode) -> str:
    label = (
        f"[bold]{escape(node.name)}[/bold] "
        f"[dim]({node.docs} docs, {node.audio} audio, {format_size(node.size)})[/dim]"
    )
    if node.thumbnail is not None and node.thumbnail.source is not None:
        label += f" [magenta]▣ {escape(node.thumbnail.source.name)}[/magenta]"
    return label


def _add_children(branch: Tree, node: TreeNode) -> None:
    for child in node.children:
        _add_children(branch.add(_node_label(child)), child)


def render_tree(nodes: Sequence[TreeNode], console: Console | None = None) -> None:
    """Render each root node as a Rich tree.

    Args:
        nodes: Root nodes from a tree scan.
        console: Optional Console instance to use for rendering.
    """
    console = console or Console()
    for node in nodes:
        tree = Tree(_node_label(node), guide_style="cyan")
        _add_children(tree, node)
        console.print(tree)


def render_grouped(listing: GroupedListing, console: Console | None = None) -> None:
    """Render an opened set as one table per folder.

    Args:
        listing: Grouped listing of a set.
        console: Optional Console instance to use for rendering.
    """
    console = console or Console()
    for group in listing.structure:
        table = Table(title=escape(group.folder), title_justify="left")
        table.add_column("Kind", style="bold")
        table.add_column("Name")
        table.add_column("Type", style="cyan")
        for doc in group.docs:
            table.add_row("doc", escape(doc.name), doc.type, style="yellow")
        for track in group.audio:
            table.add_row("audio", escape(track.name), track.type, style="green")
        console.print(table)
    console.print(f"Docs: {len(listing.docs)} | Audio: {len(listing.audio)}")


def render_issues(issues: List[ScanIssue], console: Console | None = None) -> None:
    """Print recovered scan issues as warnings."""
    if not issues:
        return
    console = console or Console()
    console.print(
        f"[bold yellow]Warning:[/bold yellow] {len(issues)} issue(s) during the scan."
    )
    for issue in issues:
        console.print(
            f"  [yellow]{escape(str(issue.path))}[/yellow]: {escape(issue.message)}"
        )
