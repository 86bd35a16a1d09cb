# ABOUTME: Scoped staging directories and ZIP packing/unpacking for EPUB archives.
# ABOUTME: Extraction rejects members that would land outside the staging directory.

import logging
import tempfile
import zipfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from quire.errors import InvalidEpubError
from quire.formats.constants import EPUB_MEDIA_TYPE, MIMETYPE_NAME, STAGING_PREFIX
from quire.formats.resources import resolve_inside

logger = logging.getLogger(__name__)


@contextmanager
def staging_directory(root: Path | None = None) -> Iterator[Path]:
    """Yield a fresh, uniquely named directory that is removed on exit.

    The directory is deleted with everything in it whether the block
    finishes normally or raises.

    Args:
        root: Parent directory for the staging directory. Defaults to the
            system temporary directory.
    """
    with tempfile.TemporaryDirectory(prefix=STAGING_PREFIX, dir=root) as tmp:
        staging = Path(tmp)
        logger.debug("Created staging directory %s", staging)
        try:
            yield staging
        finally:
            logger.debug("Removing staging directory %s", staging)


def extract_archive(archive: Path, dest: Path) -> None:
    """Extract every member of a ZIP archive into dest.

    Raises:
        InvalidEpubError: If a member name is absolute or climbs out of dest.
        zipfile.BadZipFile: If archive is not a ZIP file.
    """
    with zipfile.ZipFile(archive) as zf:
        for info in zf.infolist():
            if resolve_inside(dest, info.filename) is None:
                raise InvalidEpubError(
                    f"Invalid EPUB file structure: unsafe archive member {info.filename!r}"
                )
        zf.extractall(dest)
    logger.debug("Extracted %s into %s", archive, dest)


def _iter_files(src_dir: Path) -> Iterator[Path]:
    for path in sorted(src_dir.rglob("*")):
        if path.is_file():
            yield path


def create_archive(src_dir: Path, archive: Path) -> None:
    """Zip the tree under src_dir into an EPUB archive.

    The mimetype entry goes first and uncompressed, as EPUB readers expect;
    every other file is deflated under its POSIX path relative to src_dir.
    An existing file at archive is replaced.
    """
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr(MIMETYPE_NAME, EPUB_MEDIA_TYPE, compress_type=zipfile.ZIP_STORED)
        for path in _iter_files(src_dir):
            arcname = path.relative_to(src_dir).as_posix()
            if arcname == MIMETYPE_NAME:
                continue
            zf.write(path, arcname=arcname, compress_type=zipfile.ZIP_DEFLATED)
    logger.debug("Packed %s into %s", src_dir, archive)
