# ABOUTME: Integration tests for saving a Book as an EPUB archive.
# ABOUTME: Tests archive layout, validation gates, error wrapping, and staging cleanup.

import logging
import zipfile
from pathlib import Path

import pytest
from lxml import etree

from quire.errors import EpubSaveError, EpubValidationError
from quire.formats.epub import write_epub
from quire.model import Book, Chapter, EpubMetadata

OPF_NS = "http://www.idpf.org/2007/opf"


class TestSaveLayout:
    """Tests for the archive written by save."""

    def test_archive_members(self, sample_book: Book, tmp_path: Path) -> None:
        """The archive holds mimetype, container, OPF, and every chapter."""
        path = tmp_path / "out.epub"
        sample_book.save(path)
        with zipfile.ZipFile(path) as zf:
            names = zf.namelist()
        assert names[0] == "mimetype"
        assert set(names) == {
            "mimetype",
            "META-INF/container.xml",
            "OEBPS/content.opf",
            "OEBPS/Prologue.xhtml",
            "OEBPS/First Day.xhtml",
            "OEBPS/Last Page.xhtml",
        }

    def test_spine_matches_chapter_order(self, sample_book: Book, tmp_path: Path) -> None:
        """Spine idrefs follow the chapter list order."""
        path = tmp_path / "out.epub"
        sample_book.save(path)
        with zipfile.ZipFile(path) as zf:
            root = etree.fromstring(zf.read("OEBPS/content.opf"))
        refs = [r.get("idref") for r in root.iter(f"{{{OPF_NS}}}itemref")]
        assert refs == ["Prologue", "First Day", "Last Page"]

    def test_fallback_paths_assigned_to_chapters(self, sample_book: Book, tmp_path: Path) -> None:
        """Saving stores the derived resource paths on the chapters."""
        sample_book.save(tmp_path / "out.epub")
        assert [c.resource_path for c in sample_book] == [
            "Prologue.xhtml",
            "First Day.xhtml",
            "Last Page.xhtml",
        ]

    def test_overwrites_existing_file(self, sample_book: Book, tmp_path: Path) -> None:
        """Saving twice to the same path leaves the last book."""
        path = tmp_path / "out.epub"
        sample_book.save(path)
        sample_book.remove_chapter_by_title("Prologue")
        sample_book.save(path)
        assert len(Book.load(path)) == 2

    def test_staging_removed_after_success(
        self, sample_book: Book, tmp_path: Path, staging_root: Path
    ) -> None:
        """No staging directory is left after a successful save."""
        sample_book.save(tmp_path / "out.epub", staging_root=staging_root)
        assert list(staging_root.iterdir()) == []

    def test_shared_file_stems_get_distinct_ids(self, tmp_path: Path) -> None:
        """Chapters in different directories with one file stem get suffixed ids."""
        book = Book(metadata=EpubMetadata(title="Dune", author="Frank Herbert"))
        book.add_chapter(Chapter(title="A", content="a", resource_path="one/ch.xhtml"))
        book.add_chapter(Chapter(title="B", content="b", resource_path="two/ch.xhtml"))
        path = tmp_path / "out.epub"
        book.save(path)

        with zipfile.ZipFile(path) as zf:
            root = etree.fromstring(zf.read("OEBPS/content.opf"))
            names = set(zf.namelist())
        ids = [i.get("id") for i in root.iter(f"{{{OPF_NS}}}item")]
        refs = [r.get("idref") for r in root.iter(f"{{{OPF_NS}}}itemref")]
        assert ids == refs == ["ch", "ch_1"]
        assert {"OEBPS/one/ch.xhtml", "OEBPS/two/ch.xhtml"} <= names
        assert [c.content for c in Book.load(path)] == ["a", "b"]


class TestSaveValidation:
    """Tests for the checks that run before anything is written."""

    def test_missing_author_rejected(self, tmp_path: Path, staging_root: Path) -> None:
        """A book without an author is not saved."""
        book = Book(metadata=EpubMetadata(title="Dune"))
        path = tmp_path / "out.epub"
        with pytest.raises(EpubValidationError, match="Author is missing."):
            write_epub(book, path, staging_root=staging_root)
        assert not path.exists()
        assert list(staging_root.iterdir()) == []

    def test_missing_identifier_only_warns(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """An absent identifier is logged but does not block the save."""
        book = Book(metadata=EpubMetadata(title="Dune", author="Frank Herbert"))
        with caplog.at_level(logging.WARNING, logger="quire"):
            book.save(tmp_path / "out.epub")
        assert (tmp_path / "out.epub").exists()
        assert "Identifier (e.g., ISBN) is recommended." in caplog.text

    def test_invalid_chapter_is_written_with_warning(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A chapter without content is still saved, with a warning."""
        book = Book(metadata=EpubMetadata(title="Dune", author="Frank Herbert"))
        book.add_chapter(Chapter(title="Empty"))
        with caplog.at_level(logging.WARNING, logger="quire"):
            book.save(tmp_path / "out.epub")
        assert "Chapter content is missing." in caplog.text
        assert [c.title for c in Book.load(tmp_path / "out.epub")] == ["Empty"]

    def test_duplicate_resource_paths_rejected(self, tmp_path: Path) -> None:
        """Two chapters cannot be written to the same file."""
        book = Book(metadata=EpubMetadata(title="Dune", author="Frank Herbert"))
        book.add_chapter(Chapter(title="A", content="a", resource_path="text/ch.xhtml"))
        book.add_chapter(Chapter(title="B", content="b", resource_path="text/ch.xhtml"))
        with pytest.raises(EpubValidationError, match="share the resource path"):
            book.save(tmp_path / "out.epub")


class TestSaveFailures:
    """Tests for failures while writing."""

    def test_missing_destination_directory(
        self, sample_book: Book, tmp_path: Path, staging_root: Path
    ) -> None:
        """An unwritable destination raises EpubSaveError chained to the OSError."""
        path = tmp_path / "no" / "such" / "dir" / "out.epub"
        with pytest.raises(EpubSaveError) as excinfo:
            sample_book.save(path, staging_root=staging_root)
        assert isinstance(excinfo.value.__cause__, OSError)
        assert list(staging_root.iterdir()) == []

    def test_unsafe_resource_path(self, tmp_path: Path, staging_root: Path) -> None:
        """A resource path escaping the archive fails the save."""
        book = Book(metadata=EpubMetadata(title="Dune", author="Frank Herbert"))
        book.add_chapter(Chapter(title="Bad", content="x", resource_path="../../bad.xhtml"))
        path = tmp_path / "out.epub"
        with pytest.raises(EpubSaveError, match="unsafe resource path"):
            book.save(path, staging_root=staging_root)
        assert not path.exists()
        assert list(staging_root.iterdir()) == []

    @pytest.mark.parametrize(
        "resource_path",
        ["content.opf", "../META-INF/container.xml", "../mimetype", "/etc/ch.xhtml"],
    )
    def test_package_files_cannot_be_replaced(
        self, tmp_path: Path, resource_path: str
    ) -> None:
        """A chapter may not overwrite package files or use an absolute path."""
        book = Book(metadata=EpubMetadata(title="Dune", author="Frank Herbert"))
        book.add_chapter(Chapter(title="Bad", content="x", resource_path=resource_path))
        with pytest.raises(EpubSaveError, match="unsafe resource path"):
            book.save(tmp_path / "out.epub")

    def test_exhausted_fallback_names_are_wrapped(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Running out of fallback names is reported as a save failure."""
        monkeypatch.setattr("quire.formats.resources._MAX_COLLISION_ATTEMPTS", 0)
        book = Book(metadata=EpubMetadata(title="Dune", author="Frank Herbert"))
        book.add_chapter(Chapter(title="Same", content="a"))
        book.add_chapter(Chapter(title="Same", content="b"))
        with pytest.raises(EpubSaveError) as excinfo:
            book.save(tmp_path / "out.epub")
        assert isinstance(excinfo.value.__cause__, ValueError)
