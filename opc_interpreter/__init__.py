"""
OPC Interpreter - read/modify/write access to Office Open XML packages.

Opens word-processing (.docx) and spreadsheet (.xlsx) packages, loads the parts the
content-type manifest declares, normalizes their namespace declarations, and exposes
paragraphs, tables, bookmarks and the default font size as views over the live XML.
Saving rewrites the archive, substituting only the entries that changed.

Main Components:
- Document / Workbook: package models
- Parser: archive access, manifest, part loading, namespace normalization
- Models: parts and the paragraph/table/bookmark views over them
- Writer: edit buffer and archive write-back
"""

from .exceptions import (
    OpcInterpreterError,
    ParsingError,
    ManifestParseError,
    PartParseError,
    PackageError,
    MissingPartError,
)
from .config import PackageOptions, PartDiagnostic
from .package import (
    OfficePackage,
    Document,
    Workbook,
    open_package,
    open_document,
    open_workbook,
)
from .parser.part_loader import PartRole
from .parser.namespaces import NamespaceCategory
from .models import Part, Paragraph, TextRun, Table, TableRow, TableCell, Bookmark
from .writer import EditBuffer, PackageWriter
from .utils.logger import configure_logging

__version__ = "1.0.0"

__all__ = [
    "Document",
    "Workbook",
    "OfficePackage",
    "open_package",
    "open_document",
    "open_workbook",
    "PackageOptions",
    "PartDiagnostic",
    "PartRole",
    "NamespaceCategory",
    "Part",
    "Paragraph",
    "TextRun",
    "Table",
    "TableRow",
    "TableCell",
    "Bookmark",
    "EditBuffer",
    "PackageWriter",
    "configure_logging",
    "OpcInterpreterError",
    "ParsingError",
    "ManifestParseError",
    "PartParseError",
    "PackageError",
    "MissingPartError",
]
