"""
XML parse/serialize helpers shared by every part.

All parts go through the same lxml parser configuration so that trees loaded at open
time and trees re-parsed during namespace normalization behave identically.
"""

from typing import Dict

from lxml import etree

NAMESPACES: Dict[str, str] = {
    "w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
    "r": "http://schemas.openxmlformats.org/officeDocument/2006/relationships",
    "mc": "http://schemas.openxmlformats.org/markup-compatibility/2006",
    "ct": "http://schemas.openxmlformats.org/package/2006/content-types",
    "x": "http://schemas.openxmlformats.org/spreadsheetml/2006/main",
}


def qn(tag: str) -> str:
    """Convert a prefixed name like ``w:p`` to Clark notation."""
    prefix, _, local = tag.partition(":")
    if not local:
        return tag
    return f"{{{NAMESPACES[prefix]}}}{local}"


def _parser() -> etree.XMLParser:
    # Entities stay unresolved and blank text is kept so untouched content
    # serializes back the way it was read.
    return etree.XMLParser(resolve_entities=False, no_network=True, remove_blank_text=False)


def parse_xml(data: bytes) -> etree._ElementTree:
    """
    Parse XML bytes into a tree.

    Args:
        data: Raw XML bytes

    Returns:
        Parsed element tree

    Raises:
        lxml.etree.XMLSyntaxError: If the bytes are not well-formed XML
    """
    root = etree.fromstring(data, _parser())
    return root.getroottree()


def serialize_xml(tree: etree._ElementTree) -> bytes:
    """
    Serialize a tree back to bytes with its original declaration.

    Args:
        tree: Element tree to serialize

    Returns:
        XML bytes including the XML declaration
    """
    docinfo = tree.docinfo
    return etree.tostring(
        tree,
        xml_declaration=True,
        encoding=docinfo.encoding or "UTF-8",
        standalone=docinfo.standalone,
    )
