"""Bookmark projection for WordprocessingML."""

from typing import Any, Dict, Optional

from lxml import etree

from ..parser.xml_engine import qn
from .paragraph import Paragraph

# Inserted by Word to remember the last edit position.
GO_BACK = "_GoBack"


class Bookmark:
    """
    A w:bookmarkStart element.

    Args:
        node: The w:bookmarkStart element
        document_properties: Document-wide values passed on to the containing paragraph
    """

    def __init__(self, node: etree._Element, document_properties: Optional[Dict[str, Any]] = None):
        self.node = node
        self.document_properties = document_properties or {}

    @property
    def name(self) -> str:
        return self.node.get(qn("w:name"), "")

    @property
    def bookmark_id(self) -> str:
        return self.node.get(qn("w:id"), "")

    @property
    def paragraph(self) -> Optional[Paragraph]:
        """The paragraph containing the bookmark start, if any."""
        ancestor = next(self.node.iterancestors(qn("w:p")), None)
        return Paragraph(ancestor, self.document_properties) if ancestor is not None else None

    def __repr__(self) -> str:
        return f"Bookmark(name={self.name!r}, id={self.bookmark_id!r})"
