# ABOUTME: Loads a Book from an EPUB archive and saves a Book as one.
# ABOUTME: Each call works in its own staging directory that is always cleaned up.

import logging
from pathlib import Path, PurePosixPath

from quire.errors import (
    EpubLoadError,
    EpubNotFoundError,
    EpubSaveError,
    EpubValidationError,
    InvalidEpubError,
)
from quire.formats.constants import CONTAINER_PATH, CONTENT_DIR, MIMETYPE_NAME, OPF_PATH
from quire.formats.container import find_opf_path, write_container
from quire.formats.opf import read_opf, resolve_spine_entry, write_opf
from quire.formats.resources import assign_resource_paths, resolve_inside
from quire.formats.staging import create_archive, extract_archive, staging_directory
from quire.model.book import Book
from quire.model.chapter import Chapter

logger = logging.getLogger(__name__)


def read_epub(path: Path, *, staging_root: Path | None = None) -> Book:
    """Load an EPUB file into a Book.

    The archive is extracted into a private staging directory, the OPF is
    located through META-INF/container.xml, and chapters are built from the
    spine in order. Spine entries that cannot be resolved (unknown idref,
    missing file) are skipped without error.

    Args:
        path: Path to the EPUB file.
        staging_root: Where to create the staging directory. Defaults to
            the system temporary directory.

    Returns:
        The loaded Book.

    Raises:
        EpubNotFoundError: If path is not an existing file.
        InvalidEpubError: If the archive lacks container.xml, a usable
            rootfile, or the OPF file it points at.
        EpubLoadError: For any other failure (not a ZIP, malformed OPF,
            unreadable chapter, I/O error), chained to the cause.
    """
    if not path.is_file():
        raise EpubNotFoundError(f"File not found: {path}")

    try:
        with staging_directory(staging_root) as staging:
            extract_archive(path, staging)
            opf_path = find_opf_path(staging)
            package = read_opf(opf_path)

            resolved = (
                resolve_spine_entry(idref, package.manifest, opf_path.parent, staging)
                for idref in package.spine
            )
            book = Book(
                metadata=package.metadata,
                chapters=[chapter for chapter in resolved if chapter is not None],
            )
    except InvalidEpubError:
        raise
    except Exception as exc:
        raise EpubLoadError(f"Failed to load EPUB: {path}: {exc}") from exc

    skipped = len(package.spine) - len(book.chapters)
    if skipped:
        logger.debug("Skipped %d unresolved spine entries in %s", skipped, path)
    logger.info("Loaded %s (%d chapters)", path, len(book.chapters))
    return book


def _check_resource_paths(chapters: list[Chapter]) -> None:
    seen: dict[str, str] = {}
    for chapter in chapters:
        if chapter.resource_path is None:
            continue
        key = PurePosixPath(chapter.resource_path).as_posix().casefold()
        if key in seen:
            raise EpubValidationError(
                f"EPUB file validation failed: chapters {seen[key]!r} and "
                f"{chapter.title!r} share the resource path {chapter.resource_path!r}"
            )
        seen[key] = chapter.title


def _write_chapters(staging: Path, chapters: list[Chapter]) -> None:
    # Paths are relative to OEBPS but may climb to siblings of it.
    reserved = {
        (staging / name).resolve()
        for name in (MIMETYPE_NAME, CONTAINER_PATH, OPF_PATH, CONTENT_DIR)
    }
    for chapter in chapters:
        target = None
        if not PurePosixPath(chapter.resource_path).is_absolute():
            target = resolve_inside(staging, f"{CONTENT_DIR}/{chapter.resource_path}")
        if target is None or target in reserved:
            raise ValueError(
                f"Chapter {chapter.title!r} has an unsafe resource path: "
                f"{chapter.resource_path!r}"
            )
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(chapter.content.encode("utf-8"))


def _log_warnings(book: Book, path: Path) -> None:
    _ok, errors = book.metadata.validate()
    for message in errors:
        logger.warning("%s: %s", path, message)
    for chapter in book.chapters:
        valid, message = chapter.is_valid()
        if not valid:
            logger.warning("%s: %s (%s)", path, message, chapter.describe())


def write_epub(book: Book, path: Path, *, staging_root: Path | None = None) -> None:
    """Save a Book as an EPUB file at path.

    Chapters without a resource path are given a title-derived one first;
    the assignment is kept on the chapter. The OPF, container.xml and
    chapter files are assembled in a staging directory, zipped to path,
    and the staging directory is removed.

    Args:
        book: The book to save.
        path: Destination file. An existing file is replaced.
        staging_root: Where to create the staging directory. Defaults to
            the system temporary directory.

    Raises:
        EpubValidationError: If the metadata lacks a title or author, or two
            chapters share the same resource path.
        EpubSaveError: If any step of writing fails, chained to the cause.
    """
    ok, message = book.validate_metadata()
    if not ok:
        raise EpubValidationError(f"EPUB file validation failed: {message}")

    _check_resource_paths(book.chapters)
    _log_warnings(book, path)

    try:
        assign_resource_paths(book.chapters)
        with staging_directory(staging_root) as staging:
            write_opf(staging / OPF_PATH, book.metadata, book.chapters)
            write_container(staging)
            _write_chapters(staging, book.chapters)
            create_archive(staging, path)
    except Exception as exc:
        raise EpubSaveError(f"Failed to save EPUB: {path}: {exc}") from exc

    logger.info("Saved %s (%d chapters)", path, len(book.chapters))
