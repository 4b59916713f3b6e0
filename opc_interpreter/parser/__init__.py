"""
Parser module for OPC packages.

Archive access, the content-type manifest, XML parsing and namespace normalization.
Part discovery and loading lives in :mod:`opc_interpreter.parser.part_loader`.
"""

from .package_reader import PackageReader
from .content_types import ManifestIndex, ManifestOverride
from .xml_engine import NAMESPACES, parse_xml, serialize_xml, qn
from .namespaces import NamespaceCategory, namespace_set, normalize_tree

__all__ = [
    "PackageReader",
    "ManifestIndex",
    "ManifestOverride",
    "NAMESPACES",
    "parse_xml",
    "serialize_xml",
    "qn",
    "NamespaceCategory",
    "namespace_set",
    "normalize_tree",
]
