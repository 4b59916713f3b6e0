"""Paragraph and text run projections for WordprocessingML."""

import html
from typing import Any, Dict, List, Optional

from lxml import etree

from ..parser.xml_engine import NAMESPACES, qn

_W_VAL = qn("w:val")
_FALSE_VALUES = ("0", "false", "off")

_ALIGNMENT_CSS = {
    "left": "left",
    "start": "left",
    "center": "center",
    "right": "right",
    "end": "right",
    "both": "justify",
    "distribute": "justify",
}


def _toggle(properties: Optional[etree._Element], tag: str) -> bool:
    if properties is None:
        return False
    element = properties.find(qn(tag))
    if element is None:
        return False
    return (element.get(_W_VAL) or "true").lower() not in _FALSE_VALUES


def half_points_to_points(element: Optional[etree._Element]) -> Optional[int]:
    """Read a w:sz style element (half-points) as whole points."""
    if element is None:
        return None
    try:
        return int(element.get(_W_VAL)) // 2
    except (TypeError, ValueError):
        return None


class TextRun:
    """A w:r element inside a paragraph."""

    def __init__(self, node: etree._Element):
        self.node = node

    @property
    def properties(self) -> Optional[etree._Element]:
        return self.node.find(qn("w:rPr"))

    @property
    def text(self) -> str:
        parts: List[str] = []
        for child in self.node:
            if child.tag == qn("w:t"):
                parts.append(child.text or "")
            elif child.tag == qn("w:tab"):
                parts.append("\t")
            elif child.tag in (qn("w:br"), qn("w:cr")):
                parts.append("\n")
        return "".join(parts)

    @property
    def bold(self) -> bool:
        return _toggle(self.properties, "w:b")

    @property
    def italic(self) -> bool:
        return _toggle(self.properties, "w:i")

    @property
    def underline(self) -> bool:
        properties = self.properties
        if properties is None:
            return False
        element = properties.find(qn("w:u"))
        return element is not None and element.get(_W_VAL, "single") != "none"

    @property
    def font_size(self) -> Optional[int]:
        properties = self.properties
        if properties is None:
            return None
        return half_points_to_points(properties.find(qn("w:sz")))

    def to_html(self) -> str:
        content = html.escape(self.text)
        if self.italic:
            content = f"<em>{content}</em>"
        if self.bold:
            content = f"<strong>{content}</strong>"
        if self.underline:
            content = f'<span style="text-decoration:underline;">{content}</span>'
        return content

    def __str__(self) -> str:
        return self.text


class Paragraph:
    """
    A w:p element.

    Wraps the live node; every property is read from the tree when accessed.

    Args:
        node: The w:p element
        document_properties: Document-wide values (font_size) used when the
            paragraph does not set its own
    """

    def __init__(self, node: etree._Element, document_properties: Optional[Dict[str, Any]] = None):
        self.node = node
        self.document_properties = document_properties or {}

    @property
    def properties(self) -> Optional[etree._Element]:
        return self.node.find(qn("w:pPr"))

    @property
    def runs(self) -> List[TextRun]:
        nodes = self.node.xpath("./w:r | ./w:hyperlink/w:r", namespaces=NAMESPACES)
        return [TextRun(node) for node in nodes]

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)

    @property
    def style_id(self) -> Optional[str]:
        properties = self.properties
        if properties is None:
            return None
        style = properties.find(qn("w:pStyle"))
        return style.get(_W_VAL) if style is not None else None

    @property
    def alignment(self) -> Optional[str]:
        properties = self.properties
        if properties is None:
            return None
        jc = properties.find(qn("w:jc"))
        return jc.get(_W_VAL) if jc is not None else None

    @property
    def font_size(self) -> Optional[int]:
        properties = self.properties
        if properties is not None:
            size = half_points_to_points(properties.find(f"{qn('w:rPr')}/{qn('w:sz')}"))
            if size is not None:
                return size
        return self.document_properties.get("font_size")

    def to_html(self) -> str:
        """Render the paragraph as a <p> fragment."""
        content = "".join(run.to_html() for run in self.runs)
        styles: Dict[str, str] = {}
        if self.font_size is not None:
            styles["font-size"] = f"{self.font_size}pt"
        alignment = _ALIGNMENT_CSS.get(self.alignment or "")
        if alignment:
            styles["text-align"] = alignment
        if not styles:
            return f"<p>{content}</p>"
        style_attr = "".join(f"{key}:{value};" for key, value in styles.items())
        return f'<p style="{style_attr}">{content}</p>'

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Paragraph(text={self.text[:40]!r})"
