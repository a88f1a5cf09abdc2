"""Renderers for CLI output.

Turns metadata, type summaries and backend listings into Rich tables.
JSON output bypasses these and is written straight to stdout by the commands.
"""

from typing import Iterable, Sequence

from rich.console import Console
from rich.filesize import decimal
from rich.table import Table

from mediainfoutils.models.core import MediaMetadata, TypeSummaryRow


def render_info(metadata: MediaMetadata, console: Console | None = None) -> None:
    """Render the metadata of one media item as a field/value table.

    Args:
        metadata: Merged metadata of one item (includes ``media``).
        console: Optional Console instance to use for rendering.
    """
    console = console or Console()

    table = Table(title=str(metadata.get("media", "")), title_justify="left")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    for key, value in metadata.items():
        if key == "media":
            continue
        table.add_row(key, "" if value is None else str(value))

    console.print(table)


def render_info_list(items: Sequence[MediaMetadata], console: Console | None = None) -> None:
    """Render one table per media item."""
    console = console or Console()
    if not items:
        console.print("[yellow]No media info retrieved.[/yellow]")
        return
    for metadata in items:
        render_info(metadata, console=console)


def render_summary(rows: Iterable[TypeSummaryRow], console: Console | None = None) -> None:
    """Render type summary rows with human-readable total sizes.

    Args:
        rows: Summary rows, already sorted.
        console: Optional Console instance to use for rendering.
    """
    console = console or Console()

    table = Table()
    table.add_column("type", style="bold")
    table.add_column("count", justify="right")
    table.add_column("total_size", justify="right")

    for row in rows:
        # Group rows are dimmed.
        style = "dim" if "+" in row.type or row.type == "ALL" else None
        table.add_row(row.type, str(row.count), decimal(row.total_size), style=style)

    console.print(table)


def render_backends(
    statuses: Iterable[tuple[str, bool]],
    default: str | None = None,
    console: Console | None = None,
) -> None:
    """Render registered backends and whether each can be used on this host."""
    console = console or Console()

    table = Table(title="Media info backends")
    table.add_column("Backend", style="cyan")
    table.add_column("Available")
    table.add_column("Default")

    for name, available in statuses:
        table.add_row(
            name,
            "[green]yes[/green]" if available else "[red]no[/red]",
            "*" if name == default else "",
        )

    console.print(table)
