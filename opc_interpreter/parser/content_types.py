"""
Content-type manifest ([Content_Types].xml) index.

The manifest is the only place a package says which parts it has and what role each
one plays, so part discovery is driven entirely by its Override entries.
"""

import logging
import posixpath
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from lxml import etree

from ..exceptions import ManifestParseError
from .xml_engine import parse_xml

logger = logging.getLogger(__name__)

MANIFEST_PATH = "[Content_Types].xml"


@dataclass(frozen=True)
class ManifestOverride:
    """One Override entry: archive path, raw PartName and declared content type."""

    part_path: str
    part_name: str
    content_type: str = ""


class ManifestIndex:
    """
    Ordered view of the Override and Default entries of a content-type manifest.
    """

    def __init__(self, overrides: List[ManifestOverride], defaults: Optional[Dict[str, str]] = None):
        self._overrides = list(overrides)
        self._defaults = dict(defaults or {})

    @classmethod
    def parse(cls, manifest_bytes: bytes) -> "ManifestIndex":
        """
        Parse manifest bytes.

        Args:
            manifest_bytes: Raw [Content_Types].xml content

        Returns:
            ManifestIndex with overrides in declaration order

        Raises:
            ManifestParseError: If the manifest is not well-formed XML
        """
        try:
            root = parse_xml(manifest_bytes).getroot()
        except etree.XMLSyntaxError as e:
            raise ManifestParseError(f"{MANIFEST_PATH} is not well-formed XML", str(e)) from e

        overrides: List[ManifestOverride] = []
        defaults: Dict[str, str] = {}
        for element in root.iter(etree.Element):
            local_name = etree.QName(element).localname
            if local_name == "Override":
                part_name = element.get("PartName")
                if not part_name:
                    continue
                overrides.append(ManifestOverride(
                    part_path=part_name[1:] if part_name.startswith("/") else part_name,
                    part_name=part_name,
                    content_type=element.get("ContentType", ""),
                ))
            elif local_name == "Default":
                extension = element.get("Extension")
                if extension:
                    defaults[extension.lower()] = element.get("ContentType", "")

        logger.debug(f"Parsed manifest: {len(overrides)} overrides, {len(defaults)} defaults")
        return cls(overrides, defaults)

    @property
    def overrides(self) -> List[ManifestOverride]:
        return list(self._overrides)

    @property
    def defaults(self) -> Dict[str, str]:
        return dict(self._defaults)

    def discover(self, predicate: Callable[[str], bool]) -> List[str]:
        """
        Find part paths whose PartName satisfies predicate.

        Args:
            predicate: Called with the raw PartName (leading slash included)

        Returns:
            Matching part paths in manifest order
        """
        return [override.part_path for override in self._overrides if predicate(override.part_name)]

    def content_type_for(self, part_path: str) -> Optional[str]:
        """
        Resolve the content type of a part: its Override if any, else its extension Default.
        """
        for override in self._overrides:
            if override.part_path == part_path:
                return override.content_type
        extension = posixpath.splitext(part_path)[1].lstrip(".").lower()
        return self._defaults.get(extension)

    def __len__(self) -> int:
        return len(self._overrides)

    def __iter__(self):
        return iter(self._overrides)
