"""
Part model: one archive path plus its live XML tree.
"""

import hashlib
import logging
from typing import Any

from lxml import etree

from ..parser.xml_engine import serialize_xml

logger = logging.getLogger(__name__)


class Part:
    """
    A loaded package part.

    The tree is mutated in place by whoever holds a reference into it. edit() is
    the tracked way in; changes made through projections or other references are
    still picked up because modified compares against the tree as loaded.
    """

    def __init__(self, path: str, tree: etree._ElementTree, role: Any = None):
        self.path = path
        self.role = role
        self._tree = tree
        self._touched = False
        self._baseline = self._fingerprint()

    @property
    def tree(self) -> etree._ElementTree:
        return self._tree

    @property
    def root(self) -> etree._Element:
        return self._tree.getroot()

    def edit(self) -> etree._Element:
        """
        Get the root element for mutation and mark the part for re-serialization.

        Returns:
            Root element of the part's tree
        """
        if not self._touched:
            logger.debug(f"Part opened for editing: {self.path}")
        self._touched = True
        return self.root

    @property
    def touched(self) -> bool:
        return self._touched

    @property
    def modified(self) -> bool:
        """True if edit() was called or the tree no longer matches what was loaded."""
        return self._touched or self._fingerprint() != self._baseline

    def serialize(self) -> bytes:
        return serialize_xml(self._tree)

    def _fingerprint(self) -> str:
        return hashlib.sha256(self.serialize()).hexdigest()

    def __repr__(self) -> str:
        return f"Part(path={self.path!r}, role={getattr(self.role, 'value', self.role)!r})"
