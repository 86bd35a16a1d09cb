# ABOUTME: The `quire chapters` command for listing chapters in reading order.
# ABOUTME: Shows each chapter's title, resource path, and content size.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from quire.cli.options import staging_dir_option
from quire.errors import EpubError
from quire.model import Book

console = Console()


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@staging_dir_option
def chapters(path: Path, staging_root: Path | None) -> None:
    """List the chapters of an EPUB file in spine order."""
    try:
        book = Book.load(path, staging_root=staging_root)
    except EpubError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    if not book.chapters:
        console.print("[yellow]No chapters found.[/yellow]")
        return

    table = Table(title=f"{book.metadata.title} ({len(book)} chapters)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Resource")
    table.add_column("Chars", justify="right")

    for index, chapter in enumerate(book, start=1):
        table.add_row(
            str(index),
            chapter.title,
            chapter.resource_path or "N/A",
            str(len(chapter.content)),
        )

    console.print(table)
