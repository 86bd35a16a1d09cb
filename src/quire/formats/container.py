# ABOUTME: Reads and writes META-INF/container.xml, the pointer to the OPF package.
# ABOUTME: Structural problems are reported as InvalidEpubError.

import logging
from pathlib import Path

from lxml import etree

from quire.errors import InvalidEpubError
from quire.formats.constants import (
    CONTAINER_NAMESPACE,
    CONTAINER_PATH,
    CONTAINER_VERSION,
    OPF_MEDIA_TYPE,
    OPF_PATH,
)
from quire.formats.resources import resolve_inside
from quire.formats.xml import iter_by_local_name, parse_xml, write_xml

logger = logging.getLogger(__name__)


def _container_tag(name: str) -> str:
    return f"{{{CONTAINER_NAMESPACE}}}{name}"


def write_container(staging_dir: Path, opf_path: str = OPF_PATH) -> Path:
    """Write META-INF/container.xml pointing at opf_path.

    Returns:
        Path of the written file.
    """
    root = etree.Element(
        _container_tag("container"),
        nsmap={None: CONTAINER_NAMESPACE},
        version=CONTAINER_VERSION,
    )
    rootfiles = etree.SubElement(root, _container_tag("rootfiles"))
    etree.SubElement(
        rootfiles,
        _container_tag("rootfile"),
        {"full-path": opf_path, "media-type": OPF_MEDIA_TYPE},
    )

    path = staging_dir / CONTAINER_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    write_xml(root, path)
    return path


def find_opf_path(staging_dir: Path) -> Path:
    """Locate the OPF package document of an extracted EPUB.

    Args:
        staging_dir: Directory the archive was extracted into.

    Returns:
        Absolute path of the OPF file inside staging_dir.

    Raises:
        InvalidEpubError: If container.xml is missing or malformed, has no
            usable rootfile, or points at a file that does not exist.
    """
    container_path = staging_dir / CONTAINER_PATH
    if not container_path.is_file():
        raise InvalidEpubError("Invalid EPUB file structure: missing container.xml")

    try:
        root = parse_xml(container_path)
    except etree.XMLSyntaxError as exc:
        raise InvalidEpubError(
            f"Invalid EPUB file structure: malformed container.xml: {exc}"
        ) from exc

    rootfile = next(
        (
            node
            for node in iter_by_local_name(root, "rootfile")
            if node.get("media-type") == OPF_MEDIA_TYPE
        ),
        None,
    )
    if rootfile is None:
        raise InvalidEpubError("Unable to locate the main content file")

    full_path = rootfile.get("full-path")
    if not full_path:
        raise InvalidEpubError(
            "Unable to locate the main content file: rootfile has no full-path"
        )

    opf_path = resolve_inside(staging_dir, full_path)
    if opf_path is None or not opf_path.is_file():
        raise InvalidEpubError(
            f"The content.opf file is missing or inaccessible: {full_path}"
        )

    logger.debug("Found OPF package at %s", full_path)
    return opf_path
