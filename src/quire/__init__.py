# ABOUTME: quire reads and writes EPUB archives through a small in-memory book model.
# ABOUTME: Exports the model classes, the codec entry points, and the error types.

from quire.errors import (
    EpubError,
    EpubLoadError,
    EpubNotFoundError,
    EpubOperationError,
    EpubSaveError,
    EpubValidationError,
    InvalidEpubError,
)
from quire.formats.epub import read_epub, write_epub
from quire.model import Book, Chapter, EpubMetadata

__all__ = [
    "Book",
    "Chapter",
    "EpubError",
    "EpubLoadError",
    "EpubMetadata",
    "EpubNotFoundError",
    "EpubOperationError",
    "EpubSaveError",
    "EpubValidationError",
    "InvalidEpubError",
    "read_epub",
    "write_epub",
]
