"""
Part discovery and loading.

Optional parts are found through the manifest and read from the archive. A part the
manifest declares but the archive does not contain is dropped without an error; only
the fixed required parts of each package variant are allowed to fail an open.
"""

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional

from lxml import etree

from ..config import PackageOptions, PartDiagnostic
from ..exceptions import MissingPartError, PartParseError
from ..models.part import Part
from .content_types import ManifestIndex
from .namespaces import NamespaceCategory, normalize_tree
from .package_reader import PackageReader
from .xml_engine import parse_xml

logger = logging.getLogger(__name__)


class PartRole(Enum):
    """What a part is for inside its package."""

    MAIN_DOCUMENT = "main_document"
    STYLES = "styles"
    HEADER_FOOTER = "header_footer"
    CHART = "chart"
    DIAGRAM = "diagram"
    DRAWING = "drawing"
    COMMENT = "comment"
    WORKBOOK = "workbook"
    SHARED_STRINGS = "shared_strings"
    WORKSHEET = "worksheet"


# Matched against the raw PartName of each manifest Override.
ROLE_PREDICATES: Dict[PartRole, Callable[[str], bool]] = {
    PartRole.HEADER_FOOTER: lambda name: "header" in name or "footer" in name,
    PartRole.CHART: lambda name: "charts/ch" in name,
    PartRole.DIAGRAM: lambda name: "diagrams" in name,
    PartRole.DRAWING: lambda name: "drawings" in name,
    PartRole.COMMENT: lambda name: "comments" in name,
    PartRole.WORKSHEET: lambda name: "worksheets" in name,
}


class PartLoader:
    """
    Resolves and loads parts for one open package.
    """

    def __init__(self, reader: PackageReader, manifest: ManifestIndex,
                 options: Optional[PackageOptions] = None):
        self.reader = reader
        self.manifest = manifest
        self.options = options or PackageOptions()

    def discover(self, role: PartRole) -> List[str]:
        """
        Find the manifest-declared paths for a role.

        Args:
            role: Part role with a discovery predicate

        Returns:
            Part paths in manifest order
        """
        paths = self.manifest.discover(ROLE_PREDICATES[role])
        logger.debug(f"Discovered {len(paths)} {role.value} part(s)")
        return paths

    def load(self, path: str, role: Optional[PartRole] = None) -> Optional[bytes]:
        """
        Read a part's bytes, or None if the archive has no such entry.

        Args:
            path: Archive path of the part
            role: Role the part was discovered for, used in diagnostics

        Returns:
            Raw bytes, or None when the entry is absent
        """
        data = self.reader.read_if_exists(path)
        if data is None:
            logger.debug(f"Manifest declares {path} but the archive has no such entry")
            self._report(path, role, "absent from archive")
        return data

    def load_required(self, path: str) -> bytes:
        """
        Read a part that must exist.

        Raises:
            MissingPartError: If the archive has no such entry
        """
        data = self.reader.read_if_exists(path)
        if data is None:
            raise MissingPartError(path)
        return data

    def load_required_part(self, path: str, role: PartRole, category: NamespaceCategory) -> Part:
        """
        Load, parse and normalize a required part.

        Raises:
            MissingPartError: If the archive has no such entry
            PartParseError: If the part is not well-formed XML
        """
        data = self.load_required(path)
        try:
            tree = parse_xml(data)
        except etree.XMLSyntaxError as e:
            raise PartParseError(f"Required part is not well-formed XML: {path}", path, str(e)) from e
        return Part(path, normalize_tree(tree, category), role)

    def load_parts(self, role: PartRole, category: NamespaceCategory) -> List[Part]:
        """
        Discover and load every part of a role.

        Parts absent from the archive or not well-formed are left out.

        Args:
            role: Role to discover
            category: Namespace category applied to each part

        Returns:
            Loaded parts in manifest order
        """
        parts: List[Part] = []
        for path in self.discover(role):
            data = self.load(path, role)
            if data is None:
                continue
            try:
                tree = parse_xml(data)
            except etree.XMLSyntaxError as e:
                logger.warning(f"Skipping {path}: not well-formed XML ({e})")
                self._report(path, role, f"not well-formed XML: {e}")
                continue
            parts.append(Part(path, normalize_tree(tree, category), role))
        return parts

    def _report(self, path: str, role: Optional[PartRole], reason: str) -> None:
        self.options.report(PartDiagnostic(path, role.value if role else "", reason))
