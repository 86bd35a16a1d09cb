# ABOUTME: The `quire remove` command for deleting a chapter from an EPUB.
# ABOUTME: Loads the book, removes the chapter by title, and saves the result.

from pathlib import Path

import click
from rich.console import Console

from quire.cli.options import staging_dir_option
from quire.errors import EpubError
from quire.model import Book

console = Console()


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("title")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Where to write the edited EPUB (default: overwrite PATH).",
)
@staging_dir_option
def remove(
    path: Path, title: str, output: Path | None, staging_root: Path | None
) -> None:
    """Remove the chapter titled TITLE (case-insensitive) from an EPUB."""
    dest = output or path
    try:
        book = Book.load(path, staging_root=staging_root)
        if not book.remove_chapter_by_title(title):
            console.print(f"[red]No chapter titled {title!r} in {path.name}.[/red]")
            raise SystemExit(1)
        book.save(dest, staging_root=staging_root)
    except EpubError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    console.print(
        f"[green]Removed[/green] {title!r}; {len(book)} chapters written to {dest}"
    )
