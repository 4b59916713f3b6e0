"""
Package model for word-processing and spreadsheet documents.

A package owns the open archive, the parsed manifest and every loaded part. Queries
are computed from the live part trees on each call; callers edit documents by mutating
those trees (preferably through Part.edit()) and then saving.

    doc = Document.open("letter.docx")
    print(doc.to_text())

    with Document.open("letter.docx") as doc:
        body = doc.main_part.edit()
        ...
        doc.save("letter-edited.docx")
"""

import io
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from .config import PackageOptions
from .exceptions import MissingPartError, PackageError
from .models.bookmark import GO_BACK, Bookmark
from .models.paragraph import Paragraph, half_points_to_points
from .models.part import Part
from .models.table import Table
from .parser.content_types import MANIFEST_PATH, ManifestIndex
from .parser.namespaces import NamespaceCategory
from .parser.package_reader import PackageReader, PackageSource
from .parser.part_loader import PartLoader, PartRole
from .parser.xml_engine import NAMESPACES
from .writer import EditBuffer, PackageWriter

logger = logging.getLogger(__name__)


class OfficePackage(ABC):
    """
    Common base of Document and Workbook.

    Args:
        source: Package path, bytes, binary file object, or an open PackageReader
        options: Package options

    Raises:
        FileNotFoundError: If the path does not exist
        PackageError: If the source is not a zip archive
        MissingPartError: If a required part is absent
        ManifestParseError: If [Content_Types].xml is not well-formed
        PartParseError: If a required part is not well-formed
    """

    MAIN_PART: str = ""
    STYLES_PART: str = ""
    MAIN_ROLE: PartRole = PartRole.MAIN_DOCUMENT
    REQUIRED_PARTS: Tuple[str, ...] = ()

    def __init__(self, source: Union[PackageSource, PackageReader], options: Optional[PackageOptions] = None):
        self.options = options or PackageOptions()
        self._reader = source if isinstance(source, PackageReader) else PackageReader(source)
        self._edits = EditBuffer()
        self._parts: Dict[PartRole, List[Part]] = {}
        try:
            self.entries: List[str] = self._reader.namelist()
            loader = PartLoader(self._reader, self._read_manifest(), self.options)
            self.manifest = loader.manifest
            self._load(loader)
        except BaseException:
            self._reader.close()
            raise
        logger.info(f"Loaded {type(self).__name__} with {len(self.parts())} parts")

    @classmethod
    def open(cls, source: Union[PackageSource, PackageReader], options: Optional[PackageOptions] = None):
        """
        Open a package.

        Use the result as a context manager to have the archive closed when the
        block exits, including on error.
        """
        return cls(source, options)

    def _read_manifest(self) -> ManifestIndex:
        data = self._reader.read_if_exists(MANIFEST_PATH)
        if data is None:
            raise MissingPartError(MANIFEST_PATH)
        return ManifestIndex.parse(data)

    @abstractmethod
    def _load(self, loader: PartLoader) -> None:
        """Load the variant's parts into self._parts."""

    # Parts

    def parts(self) -> List[Part]:
        """Every loaded part, in load order."""
        return [part for parts in self._parts.values() for part in parts]

    def parts_for(self, role: PartRole) -> List[Part]:
        return list(self._parts.get(role, []))

    def get_part(self, path: str) -> Optional[Part]:
        for part in self.parts():
            if part.path == path:
                return part
        return None

    @property
    def main_part(self) -> Part:
        return self._parts[self.MAIN_ROLE][0]

    @property
    def styles_part(self) -> Part:
        return self._parts[PartRole.STYLES][0]

    # Queries

    def document_properties(self) -> Dict[str, Any]:
        """Document-wide values handed to paragraph projections."""
        return {"font_size": self.font_size()}

    def iter_paragraphs(self) -> Iterator[Paragraph]:
        properties = self.document_properties()
        for node in self.main_part.root.xpath("/w:document/w:body//w:p", namespaces=NAMESPACES):
            yield Paragraph(node, properties)

    def paragraphs(self) -> List[Paragraph]:
        """Paragraphs under the body, table cells included, in document order."""
        return list(self.iter_paragraphs())

    def tables(self) -> List[Table]:
        """Every table under the body, nested ones included, in document order."""
        nodes = self.main_part.root.xpath("/w:document/w:body//w:tbl", namespaces=NAMESPACES)
        return [Table(node) for node in nodes]

    def bookmarks(self) -> Dict[str, Bookmark]:
        """Bookmarks by name; a repeated name maps to its last occurrence."""
        properties = self.document_properties()
        bookmarks: Dict[str, Bookmark] = {}
        for node in self.main_part.root.xpath("//w:bookmarkStart", namespaces=NAMESPACES):
            bookmark = Bookmark(node, properties)
            if bookmark.name == GO_BACK:
                continue
            bookmarks[bookmark.name] = bookmark
        return bookmarks

    def font_size(self) -> Optional[int]:
        """Default font size in points, from the half-point value in the style defaults."""
        sizes = self.styles_part.root.xpath(
            "//w:docDefaults//w:rPrDefault//w:rPr//w:sz", namespaces=NAMESPACES
        )
        return half_points_to_points(sizes[0]) if sizes else None

    def to_text(self) -> str:
        return "\n".join(paragraph.text for paragraph in self.iter_paragraphs())

    @property
    def text(self) -> str:
        return self.to_text()

    def to_html(self) -> str:
        # Fragments are joined with a literal backslash-n, not a newline.
        return "\\n".join(paragraph.to_html() for paragraph in self.iter_paragraphs())

    def __str__(self) -> str:
        return self.to_text()

    # Saving

    def replace_entry(self, path: str, data: Union[bytes, str]) -> None:
        """
        Override an archive entry directly.

        A loaded part at the same path that is modified when saving is serialized
        over this value.
        """
        self._edits.set(path, data)

    def _update(self) -> None:
        for part in self.parts():
            if part.modified:
                self._edits.set(part.path, part.serialize())

    def _writer(self) -> PackageWriter:
        if self._reader.closed:
            raise PackageError("Package is closed")
        self._update()
        return PackageWriter(self._reader, self._edits, self.options)

    def save(self, path: Union[str, Path]) -> None:
        """
        Save the package to path and close the source archive.

        Args:
            path: Destination file path (may be the source path)
        """
        self._writer().write_file(path)
        logger.info(f"Saved package to {path}")
        self.close()

    def save_to_buffer(self) -> io.BytesIO:
        """
        Save the package into memory and close the source archive.

        Returns:
            Buffer holding the archive, positioned at the start
        """
        buffer = self._writer().write_buffer()
        logger.info(f"Saved package to buffer ({len(buffer.getvalue())} bytes)")
        self.close()
        return buffer

    # Lifecycle

    @property
    def closed(self) -> bool:
        return self._reader.closed

    def close(self) -> None:
        self._reader.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class Document(OfficePackage):
    """
    Word-processing package (.docx).
    """

    MAIN_PART = "word/document.xml"
    STYLES_PART = "word/styles.xml"
    MAIN_ROLE = PartRole.MAIN_DOCUMENT
    REQUIRED_PARTS = (MAIN_PART, STYLES_PART)

    def _load(self, loader: PartLoader) -> None:
        base = NamespaceCategory.BASE
        extended = NamespaceCategory.EXTENDED
        self._parts[PartRole.MAIN_DOCUMENT] = [
            loader.load_required_part(self.MAIN_PART, PartRole.MAIN_DOCUMENT, base)
        ]
        self._parts[PartRole.STYLES] = [loader.load_required_part(self.STYLES_PART, PartRole.STYLES, base)]
        self._parts[PartRole.HEADER_FOOTER] = loader.load_parts(PartRole.HEADER_FOOTER, base)
        self._parts[PartRole.CHART] = loader.load_parts(PartRole.CHART, extended)
        self._parts[PartRole.DIAGRAM] = loader.load_parts(PartRole.DIAGRAM, extended)

    @property
    def header_and_footers(self) -> List[Part]:
        return self.parts_for(PartRole.HEADER_FOOTER)

    @property
    def charts(self) -> List[Part]:
        return self.parts_for(PartRole.CHART)

    @property
    def diagrams(self) -> List[Part]:
        return self.parts_for(PartRole.DIAGRAM)


class Workbook(OfficePackage):
    """
    Spreadsheet package (.xlsx).

    The paragraph, table, bookmark and font size queries are inherited unchanged.
    They look for word-processing elements and so come back empty (or None) for
    spreadsheet content.
    """

    MAIN_PART = "xl/workbook.xml"
    SHARED_STRINGS_PART = "xl/sharedStrings.xml"
    STYLES_PART = "xl/styles.xml"
    MAIN_ROLE = PartRole.WORKBOOK
    REQUIRED_PARTS = (MAIN_PART, SHARED_STRINGS_PART, STYLES_PART)

    def _load(self, loader: PartLoader) -> None:
        plain = NamespaceCategory.PLAIN
        extended = NamespaceCategory.EXTENDED
        self._parts[PartRole.WORKBOOK] = [loader.load_required_part(self.MAIN_PART, PartRole.WORKBOOK, plain)]
        self._parts[PartRole.SHARED_STRINGS] = [
            loader.load_required_part(self.SHARED_STRINGS_PART, PartRole.SHARED_STRINGS, plain)
        ]
        self._parts[PartRole.WORKSHEET] = loader.load_parts(PartRole.WORKSHEET, plain)
        self._parts[PartRole.STYLES] = [loader.load_required_part(self.STYLES_PART, PartRole.STYLES, plain)]
        self._parts[PartRole.CHART] = loader.load_parts(PartRole.CHART, extended)
        self._parts[PartRole.DRAWING] = loader.load_parts(PartRole.DRAWING, extended)
        self._parts[PartRole.COMMENT] = loader.load_parts(PartRole.COMMENT, extended)

    @property
    def workbook_part(self) -> Part:
        return self.main_part

    @property
    def shared_strings_part(self) -> Part:
        return self._parts[PartRole.SHARED_STRINGS][0]

    @property
    def worksheets(self) -> List[Part]:
        return self.parts_for(PartRole.WORKSHEET)

    @property
    def charts(self) -> List[Part]:
        return self.parts_for(PartRole.CHART)

    @property
    def drawings(self) -> List[Part]:
        return self.parts_for(PartRole.DRAWING)

    @property
    def comments(self) -> List[Part]:
        return self.parts_for(PartRole.COMMENT)


def open_package(source: PackageSource, options: Optional[PackageOptions] = None) -> OfficePackage:
    """
    Open a package as a Document or Workbook depending on its main part.

    Raises:
        MissingPartError: If the archive has neither word/document.xml nor xl/workbook.xml
    """
    reader = PackageReader(source)
    if reader.has_entry(Document.MAIN_PART):
        return Document(reader, options)
    if reader.has_entry(Workbook.MAIN_PART):
        return Workbook(reader, options)
    reader.close()
    raise MissingPartError(Document.MAIN_PART, f"archive has neither {Document.MAIN_PART} nor {Workbook.MAIN_PART}")


def open_document(source: PackageSource, options: Optional[PackageOptions] = None) -> Document:
    """Open a word-processing package (convenience function)."""
    return Document.open(source, options)


def open_workbook(source: PackageSource, options: Optional[PackageOptions] = None) -> Workbook:
    """Open a spreadsheet package (convenience function)."""
    return Workbook.open(source, options)
