"""
Models for loaded parts and the read views computed over them.
"""

from .part import Part
from .paragraph import Paragraph, TextRun
from .table import Table, TableRow, TableCell
from .bookmark import Bookmark

__all__ = [
    "Part",
    "Paragraph",
    "TextRun",
    "Table",
    "TableRow",
    "TableCell",
    "Bookmark",
]
