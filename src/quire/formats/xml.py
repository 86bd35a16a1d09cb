# ABOUTME: lxml helpers shared by the container.xml and content.opf codecs.
# ABOUTME: Hardened parsing, namespace-agnostic lookups, and indented UTF-8 output.

from collections.abc import Iterator
from pathlib import Path

from lxml import etree


def parse_xml(path: Path) -> etree._Element:
    """Parse an XML file without resolving entities or touching the network.

    Raises:
        etree.XMLSyntaxError: If the file is not well-formed XML.
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    return etree.parse(str(path), parser=parser).getroot()


def local_name(node: etree._Element) -> str:
    return etree.QName(node).localname


def iter_by_local_name(node: etree._Element, name: str) -> Iterator[etree._Element]:
    """Yield descendants of node named name, in document order, in any namespace."""
    for element in node.iter(etree.Element):
        if local_name(element) == name:
            yield element


def first_by_local_name(node: etree._Element, name: str) -> etree._Element | None:
    return next(iter_by_local_name(node, name), None)


def child_text(node: etree._Element, name: str) -> str | None:
    """Text of the first direct child named name, or None if there is no such child."""
    for child in node.iterchildren(etree.Element):
        if local_name(child) == name:
            return (child.text or "").strip()
    return None


def write_xml(root: etree._Element, path: Path) -> None:
    """Write root to path as indented UTF-8 with an XML declaration."""
    etree.ElementTree(root).write(
        str(path), pretty_print=True, xml_declaration=True, encoding="utf-8"
    )
