# ABOUTME: Shared pytest fixtures for quire tests.
# ABOUTME: Provides in-memory books, hand-built EPUB archives, and ebooklib-made EPUBs.

import zipfile
from collections.abc import Callable
from datetime import date
from pathlib import Path

import pytest
from ebooklib import epub

from quire.model import Book, Chapter, EpubMetadata
from tests.fixtures.epub_documents import chapter_xhtml


@pytest.fixture
def make_archive(tmp_path: Path) -> Callable[..., Path]:
    """Factory that zips a {member name: text} mapping into an .epub file."""

    def _make(files: dict[str, str], name: str = "book.epub") -> Path:
        path = tmp_path / name
        with zipfile.ZipFile(path, "w") as zf:
            for member, text in files.items():
                zf.writestr(member, text)
        return path

    return _make


@pytest.fixture
def staging_root(tmp_path: Path) -> Path:
    """An empty directory to hold staging directories, for leak checks."""
    root = tmp_path / "staging"
    root.mkdir()
    return root


@pytest.fixture
def sample_metadata() -> EpubMetadata:
    """Fully populated metadata."""
    return EpubMetadata(
        title="The Name of the Rose",
        author="Umberto Eco",
        publisher="Harcourt",
        publication_date=date(1983, 6, 1),
        language="en",
        identifier="978-0-15-144647-6",
        description="A mystery set in a medieval monastery.",
    )


@pytest.fixture
def sample_book(sample_metadata: EpubMetadata) -> Book:
    """A book with full metadata and three chapters without resource paths."""
    book = Book(metadata=sample_metadata)
    book.add_chapter(Chapter(title="Prologue", content=chapter_xhtml("Prologue")))
    book.add_chapter(Chapter(title="First Day", content=chapter_xhtml("First Day")))
    book.add_chapter(Chapter(title="Last Page", content=chapter_xhtml("Last Page")))
    return book


@pytest.fixture
def ebooklib_epub(tmp_path: Path) -> Path:
    """An EPUB written by ebooklib: a nav page and two chapters, one nested."""
    book = epub.EpubBook()
    book.set_identifier("test-isbn-978-0-123456-47-2")
    book.set_title("The Name of the Rose")
    book.set_language("en")
    book.add_author("Umberto Eco")
    book.add_metadata("DC", "publisher", "Harcourt")
    book.add_metadata("DC", "description", "A mystery set in a medieval monastery.")

    chapters = []
    for uid, file_name, heading in [
        ("chap01", "chap01.xhtml", "First Day"),
        ("chap02", "text/chap02.xhtml", "Second Day"),
    ]:
        chapter = epub.EpubHtml(uid=uid, title=heading, file_name=file_name, lang="en")
        chapter.content = f"<html><body><h1>{heading}</h1><p>Content.</p></body></html>".encode()
        book.add_item(chapter)
        chapters.append(chapter)

    book.toc = [epub.Link(ch.file_name, ch.title, ch.id) for ch in chapters]
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav", *chapters]

    filepath = tmp_path / "name_of_the_rose.epub"
    epub.write_epub(str(filepath), book)
    return filepath


@pytest.fixture
def corrupt_epub(tmp_path: Path) -> Path:
    """Create a corrupt file that is not a valid EPUB."""
    filepath = tmp_path / "corrupt.epub"
    filepath.write_text("this is not a valid epub file")
    return filepath
