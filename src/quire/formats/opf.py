# ABOUTME: Reads and writes the OPF package document (content.opf).
# ABOUTME: Maps dc:* metadata, the manifest, and the spine to and from the book model.

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from lxml import etree

from quire.formats.constants import (
    DC_NAMESPACE,
    DEFAULT_AUTHOR,
    DEFAULT_TITLE,
    OPF_NAMESPACE,
    OPF_VERSION,
    UNIQUE_IDENTIFIER_ID,
    UNTITLED_CHAPTER,
    XHTML_MEDIA_TYPE,
)
from quire.formats.resources import derive_id, href_for, manifest_ids, resource_path_for
from quire.formats.xml import (
    child_text,
    first_by_local_name,
    iter_by_local_name,
    parse_xml,
    write_xml,
)
from quire.model.chapter import Chapter
from quire.model.metadata import EpubMetadata

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"^\s*(\d{4})(?:-(\d{1,2})(?:-(\d{1,2}))?)?(?=$|[T\s])")


@dataclass
class ParsedPackage:
    """Everything read from an OPF file that the book model needs."""

    metadata: EpubMetadata
    manifest: dict[str, str] = field(default_factory=dict)
    spine: list[str] = field(default_factory=list)


def parse_date(value: str | None) -> date | None:
    """Parse a dc:date value leniently.

    Accepts YYYY, YYYY-MM, YYYY-MM-DD and longer ISO timestamps (only the
    date part is kept). Missing month or day default to 1. Anything else
    yields None.
    """
    if not value:
        return None
    match = _DATE_RE.match(value)
    if match is None:
        return None
    year, month, day = match.groups()
    try:
        return date(int(year), int(month or 1), int(day or 1))
    except ValueError:
        logger.debug("Ignoring out-of-range dc:date %r", value)
        return None


def _read_metadata(root: etree._Element) -> EpubMetadata:
    node = first_by_local_name(root, "metadata")
    if node is None:
        return EpubMetadata(title=DEFAULT_TITLE, author=DEFAULT_AUTHOR)

    title = child_text(node, "title")
    author = child_text(node, "creator")
    return EpubMetadata(
        title=DEFAULT_TITLE if title is None else title,
        author=DEFAULT_AUTHOR if author is None else author,
        publisher=child_text(node, "publisher") or "",
        publication_date=parse_date(child_text(node, "date")),
        language=child_text(node, "language") or "",
        identifier=child_text(node, "identifier") or "",
        description=child_text(node, "description") or "",
    )


def read_opf(opf_path: Path) -> ParsedPackage:
    """Parse an OPF file into metadata, an id->href manifest map, and spine idrefs.

    Manifest items missing id or href are skipped, as are spine itemrefs
    without an idref. Elements are matched by local name so documents that
    omit or vary the OPF namespace still parse.

    Raises:
        etree.XMLSyntaxError: If the file is not well-formed XML.
    """
    root = parse_xml(opf_path)
    package = ParsedPackage(metadata=_read_metadata(root))

    manifest = first_by_local_name(root, "manifest")
    if manifest is not None:
        for item in iter_by_local_name(manifest, "item"):
            item_id, href = item.get("id"), item.get("href")
            if item_id is None or href is None:
                logger.debug("Skipping manifest item without id or href")
                continue
            package.manifest[item_id] = href

    spine = first_by_local_name(root, "spine")
    if spine is not None:
        for itemref in iter_by_local_name(spine, "itemref"):
            idref = itemref.get("idref")
            if idref is not None:
                package.spine.append(idref)

    return package


def resolve_spine_entry(
    idref: str, manifest: dict[str, str], opf_dir: Path, staging_dir: Path
) -> Chapter | None:
    """Build the chapter a spine entry points at, or None if it cannot be resolved.

    An idref missing from the manifest, a target file that does not exist,
    and a target outside the extracted archive all yield None.
    """
    href = manifest.get(idref)
    if href is None:
        logger.debug("Skipping spine entry %r: no manifest item", idref)
        return None

    resource_path = resource_path_for(href)
    # hrefs are relative to the OPF but may climb to siblings of its directory.
    chapter_file = (opf_dir / resource_path).resolve()
    if not chapter_file.is_relative_to(staging_dir.resolve()) or not chapter_file.is_file():
        logger.debug("Skipping spine entry %r: %s not found", idref, href)
        return None

    return Chapter(
        title=derive_id(resource_path) or UNTITLED_CHAPTER,
        content=chapter_file.read_bytes().decode("utf-8-sig"),
        resource_path=resource_path,
    )


def _opf_tag(name: str) -> str:
    return f"{{{OPF_NAMESPACE}}}{name}"


def _dc_element(parent: etree._Element, name: str, text: str) -> etree._Element:
    element = etree.SubElement(parent, f"{{{DC_NAMESPACE}}}{name}")
    element.text = text
    return element


def _write_metadata(package: etree._Element, metadata: EpubMetadata) -> None:
    node = etree.SubElement(package, _opf_tag("metadata"), nsmap={"dc": DC_NAMESPACE})
    _dc_element(node, "title", metadata.title)
    _dc_element(node, "creator", metadata.author)
    if metadata.publisher:
        _dc_element(node, "publisher", metadata.publisher)
    if metadata.publication_date is not None:
        _dc_element(node, "date", metadata.publication_date.isoformat())
    if metadata.language:
        _dc_element(node, "language", metadata.language)
    if metadata.identifier:
        _dc_element(node, "identifier", metadata.identifier).set("id", UNIQUE_IDENTIFIER_ID)
    if metadata.description:
        _dc_element(node, "description", metadata.description)


def write_opf(opf_path: Path, metadata: EpubMetadata, chapters: Sequence[Chapter]) -> None:
    """Write the OPF package document for metadata and chapters.

    Every chapter must already have a resource path. Manifest ids and spine
    idrefs both come from manifest_ids, and the spine follows chapter order.
    """
    package = etree.Element(
        _opf_tag("package"), nsmap={None: OPF_NAMESPACE}, version=OPF_VERSION
    )
    if metadata.identifier:
        package.set("unique-identifier", UNIQUE_IDENTIFIER_ID)

    _write_metadata(package, metadata)

    ids = manifest_ids(chapters)
    manifest = etree.SubElement(package, _opf_tag("manifest"))
    for resource_id, chapter in zip(ids, chapters):
        etree.SubElement(
            manifest,
            _opf_tag("item"),
            {
                "id": resource_id,
                "href": href_for(chapter.resource_path),
                "media-type": XHTML_MEDIA_TYPE,
            },
        )

    spine = etree.SubElement(package, _opf_tag("spine"))
    for resource_id in ids:
        etree.SubElement(spine, _opf_tag("itemref"), idref=resource_id)

    opf_path.parent.mkdir(parents=True, exist_ok=True)
    write_xml(package, opf_path)
