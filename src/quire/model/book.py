# ABOUTME: The Book model: one metadata record plus chapters in reading order.
# ABOUTME: Offers title-based lookup and removal, and load/save through the EPUB codec.

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from quire.model.chapter import Chapter
from quire.model.metadata import EpubMetadata


@dataclass
class Book:
    """An EPUB book held in memory.

    The chapter list order is the reading order and becomes the spine order
    when the book is saved. The book owns its metadata and chapters; nothing
    else is expected to hold references to them.
    """

    metadata: EpubMetadata = field(default_factory=EpubMetadata)
    chapters: list[Chapter] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.metadata is None:
            self.metadata = EpubMetadata()

    def __len__(self) -> int:
        return len(self.chapters)

    def __iter__(self) -> Iterator[Chapter]:
        return iter(self.chapters)

    def add_chapter(self, chapter: Chapter) -> None:
        """Append a chapter to the end of the reading order.

        Raises:
            ValueError: If chapter is None.
        """
        if chapter is None:
            raise ValueError("chapter must not be None")
        self.chapters.append(chapter)

    def find_chapter_by_title(self, title: str) -> Chapter | None:
        """Return the first chapter whose title matches, ignoring case."""
        wanted = title.casefold()
        for chapter in self.chapters:
            if chapter.title.casefold() == wanted:
                return chapter
        return None

    def remove_chapter_by_title(self, title: str) -> bool:
        """Remove the first chapter matching title, ignoring case.

        Returns:
            True if a chapter was removed, False if none matched.
        """
        chapter = self.find_chapter_by_title(title)
        if chapter is None:
            return False
        # Remove by identity; dataclass equality could match an earlier twin.
        for index, candidate in enumerate(self.chapters):
            if candidate is chapter:
                del self.chapters[index]
                break
        return True

    def validate_metadata(self) -> tuple[bool, str]:
        """Check that the book has the metadata required to be saved.

        Returns:
            (ok, message). On failure the message lists every missing
            field, one per line.
        """
        errors = []
        if not self.metadata.title.strip():
            errors.append("Title is missing.")
        if not self.metadata.author.strip():
            errors.append("Author is missing.")
        if errors:
            return False, "\n".join(errors)
        return True, "Metadata is valid."

    @classmethod
    def load(cls, path: Path | str, *, staging_root: Path | None = None) -> "Book":
        """Load a book from an EPUB file.

        See quire.formats.epub.read_epub for the errors raised.
        """
        from quire.formats.epub import read_epub

        return read_epub(Path(path), staging_root=staging_root)

    def save(self, path: Path | str, *, staging_root: Path | None = None) -> None:
        """Write this book to an EPUB file, replacing any existing file.

        See quire.formats.epub.write_epub for the errors raised.
        """
        from quire.formats.epub import write_epub

        write_epub(self, Path(path), staging_root=staging_root)
