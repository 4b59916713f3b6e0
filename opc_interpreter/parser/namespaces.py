"""
Namespace normalization for loaded parts.

Every part gets a canonical set of namespace declarations on its root element so that
prefixed path queries work no matter how the producing application declared its
namespaces. The sets are looked up by category; normalization touches only the root
element and then re-parses the tree once.
"""

import copy
import logging
from enum import Enum
from typing import Dict, List, NamedTuple, Optional

from lxml import etree

from .xml_engine import NAMESPACES, parse_xml

logger = logging.getLogger(__name__)

MC_IGNORABLE = f"{{{NAMESPACES['mc']}}}Ignorable"

BASE_PREFIXES: Dict[str, str] = {
    "wp14": "http://schemas.microsoft.com/office/word/2010/wordprocessingDrawing",
    "wp": "http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing",
    "w10": "urn:schemas-microsoft-com:office:word",
    "w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
    "w14": "http://schemas.microsoft.com/office/word/2010/wordml",
    "w15": "http://schemas.microsoft.com/office/word/2012/wordml",
    "w16cid": "http://schemas.microsoft.com/office/word/2016/wordml/cid",
    "w16se": "http://schemas.microsoft.com/office/word/2015/wordml/symex",
    "mc": NAMESPACES["mc"],
    "wps": "http://schemas.microsoft.com/office/word/2010/wordprocessingShape",
    "r": "http://schemas.openxmlformats.org/officeDocument/2006/relationships",
    "m": "http://schemas.openxmlformats.org/officeDocument/2006/math",
    "v": "urn:schemas-microsoft-com:vml",
}

DRAWING_PREFIXES: Dict[str, str] = {
    "c": "http://schemas.openxmlformats.org/drawingml/2006/chart",
    "a": "http://schemas.openxmlformats.org/drawingml/2006/main",
}

BASE_IGNORABLE = "w14 w15 w16se w16cid wp14"


class NamespaceCategory(Enum):
    """Canonical declaration sets a part can be normalized to."""

    BASE = "base"
    EXTENDED = "extended"
    PLAIN = "plain"


class NamespaceSet(NamedTuple):
    prefixes: Dict[str, str]
    ignorable: Optional[str]


_NAMESPACE_SETS: Dict[NamespaceCategory, NamespaceSet] = {
    NamespaceCategory.BASE: NamespaceSet(BASE_PREFIXES, BASE_IGNORABLE),
    NamespaceCategory.EXTENDED: NamespaceSet({**BASE_PREFIXES, **DRAWING_PREFIXES}, BASE_IGNORABLE),
    NamespaceCategory.PLAIN: NamespaceSet({}, None),
}


def namespace_set(category: NamespaceCategory) -> NamespaceSet:
    """
    Get the canonical declaration set for a category.

    Args:
        category: Namespace category

    Returns:
        NamespaceSet with a copy of its prefix map and its mc:Ignorable value
    """
    entry = _NAMESPACE_SETS[category]
    return NamespaceSet(dict(entry.prefixes), entry.ignorable)


def merge_ignorable(canonical: str, existing: Optional[str]) -> str:
    """Canonical tokens first, then any other tokens the part already listed."""
    tokens: List[str] = canonical.split()
    for token in (existing or "").split():
        if token not in tokens:
            tokens.append(token)
    return " ".join(tokens)


def _rebuild_root(root: etree._Element, nsmap: Dict[str, str]) -> etree._Element:
    new_root = etree.Element(root.tag, attrib=dict(root.attrib), nsmap=nsmap)
    new_root.text = root.text
    # Moving the children keeps every content node as it was.
    new_root.extend(list(root))
    # Top-level comments and processing instructions, kept in document order.
    for sibling in reversed(list(root.itersiblings(preceding=True))):
        new_root.addprevious(copy.copy(sibling))
    for sibling in reversed(list(root.itersiblings())):
        new_root.addnext(copy.copy(sibling))
    return new_root


def normalize_tree(tree: etree._ElementTree, category: NamespaceCategory) -> etree._ElementTree:
    """
    Normalize the root declarations of a tree.

    Declarations already present on the root keep their binding; canonical prefixes
    the root lacks are added. mc:Ignorable is set to the canonical token list. The
    result is serialized and parsed again so later queries see a clean tree.
    The children of the input tree are moved, so the input must not be used afterwards.

    Args:
        tree: Parsed part tree
        category: Which canonical set to apply

    Returns:
        A new, re-parsed tree
    """
    prefixes, ignorable = namespace_set(category)
    root = tree.getroot()

    if prefixes:
        nsmap = dict(prefixes)
        nsmap.update(root.nsmap)
        root = _rebuild_root(root, nsmap)
        if ignorable is not None:
            root.set(MC_IGNORABLE, merge_ignorable(ignorable, root.get(MC_IGNORABLE)))

    data = etree.tostring(
        root.getroottree(),
        xml_declaration=True,
        encoding=tree.docinfo.encoding or "UTF-8",
        standalone=tree.docinfo.standalone,
    )
    logger.debug(f"Normalized {etree.QName(root).localname} root with {category.value} namespaces")
    return parse_xml(data)


def declared_namespaces(tree: etree._ElementTree) -> Dict[Optional[str], str]:
    """Namespace declarations in scope on the root element."""
    return dict(tree.getroot().nsmap)


__all__ = [
    "NamespaceCategory",
    "NamespaceSet",
    "namespace_set",
    "normalize_tree",
    "declared_namespaces",
    "merge_ignorable",
]
