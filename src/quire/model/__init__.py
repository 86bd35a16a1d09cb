# ABOUTME: In-memory book model: metadata, chapters, and the book that owns them.
# ABOUTME: Exports the dataclasses that the archive codec reads into and writes from.

from quire.model.book import Book
from quire.model.chapter import Chapter
from quire.model.metadata import EpubMetadata

__all__ = [
    "Book",
    "Chapter",
    "EpubMetadata",
]
