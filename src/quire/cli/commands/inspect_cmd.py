# ABOUTME: The `quire inspect` command for viewing EPUB metadata.
# ABOUTME: Shows the metadata fields of one EPUB file and any validation warnings.

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
def inspect(path: Path, staging_root: Path | None) -> None:
    """Show metadata read from an EPUB file."""
    try:
        book = Book.load(path, staging_root=staging_root)
    except EpubError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    meta = book.metadata
    table = Table(title=str(path.name), show_header=False, pad_edge=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Title", meta.title)
    table.add_row("Author", meta.author)
    table.add_row("Publisher", meta.publisher or "[dim]none[/dim]")
    pub_date = meta.publication_date.isoformat() if meta.publication_date else None
    table.add_row("Published", pub_date or "[dim]N/A[/dim]")
    table.add_row("Language", meta.language or "[dim]unknown[/dim]")
    table.add_row("Identifier", meta.identifier or "[dim]none[/dim]")
    table.add_row("Description", meta.description or "[dim]none[/dim]")
    table.add_row("Chapters", str(len(book)))

    console.print(table)

    ok, errors = meta.validate()
    if not ok:
        for message in errors:
            console.print(f"[yellow]Warning:[/yellow] {message}")
