"""
Table projections for WordprocessingML.

Tables are read as rows of cells of paragraphs; cell formatting is not modelled.
"""

from typing import List

from lxml import etree

from ..parser.xml_engine import qn
from .paragraph import Paragraph


class TableCell:
    """A w:tc element."""

    def __init__(self, node: etree._Element):
        self.node = node

    @property
    def paragraphs(self) -> List[Paragraph]:
        return [Paragraph(node) for node in self.node.iterchildren(qn("w:p"))]

    @property
    def text(self) -> str:
        return "\n".join(paragraph.text for paragraph in self.paragraphs)


class TableRow:
    """A w:tr element."""

    def __init__(self, node: etree._Element):
        self.node = node

    @property
    def cells(self) -> List[TableCell]:
        return [TableCell(node) for node in self.node.iterchildren(qn("w:tc"))]


class Table:
    """A w:tbl element."""

    def __init__(self, node: etree._Element):
        self.node = node

    @property
    def rows(self) -> List[TableRow]:
        return [TableRow(node) for node in self.node.iterchildren(qn("w:tr"))]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        """Number of grid columns, falling back to the widest row."""
        grid = self.node.find(qn("w:tblGrid"))
        if grid is not None:
            columns = len(grid.findall(qn("w:gridCol")))
            if columns:
                return columns
        return max((len(row.cells) for row in self.rows), default=0)

    def cell(self, row: int, column: int) -> TableCell:
        return self.rows[row].cells[column]

    def __repr__(self) -> str:
        return f"Table(rows={self.row_count}, columns={self.column_count})"
