"""
Package reader for OPC archives.

Thin wrapper over zipfile that owns the archive handle for the lifetime of a package.
"""

import io
import logging
import zipfile
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from ..exceptions import PackageError

logger = logging.getLogger(__name__)

PackageSource = Union[str, Path, bytes, BinaryIO]


class PackageReader:
    """
    Reads entries of an OPC zip archive.

    The archive stays open until close() so that save can stream untouched
    entries straight from the source.
    """

    def __init__(self, source: PackageSource):
        """
        Open the archive.

        Args:
            source: Path to the package, raw package bytes, or a binary file object

        Raises:
            FileNotFoundError: If a path is given and does not exist
            PackageError: If the source is not a readable zip archive
        """
        self.source_path: Optional[Path] = None
        self._zip_file: Optional[zipfile.ZipFile] = None

        if isinstance(source, (str, Path)):
            self.source_path = Path(source)
            if not self.source_path.exists():
                raise FileNotFoundError(f"Package not found: {self.source_path}")
            handle: Union[Path, BinaryIO] = self.source_path
        elif isinstance(source, (bytes, bytearray)):
            handle = io.BytesIO(bytes(source))
        else:
            handle = source

        try:
            self._zip_file = zipfile.ZipFile(handle, 'r')
        except zipfile.BadZipFile as e:
            raise PackageError("Not a valid zip archive", str(self.source_path or "<stream>")) from e

        logger.info(f"Opened package: {self.source_path or '<stream>'}")

    @property
    def closed(self) -> bool:
        return self._zip_file is None

    @property
    def zip_file(self) -> zipfile.ZipFile:
        if self._zip_file is None:
            raise PackageError("Package is closed")
        return self._zip_file

    def namelist(self) -> List[str]:
        """Entry names in archive order."""
        return self.zip_file.namelist()

    def infolist(self) -> List[zipfile.ZipInfo]:
        """Entry metadata in archive order."""
        return self.zip_file.infolist()

    def has_entry(self, name: str) -> bool:
        try:
            self.zip_file.getinfo(name)
        except KeyError:
            return False
        return True

    def read(self, name: Union[str, zipfile.ZipInfo]) -> bytes:
        """
        Read an entry.

        Args:
            name: Entry name or ZipInfo

        Returns:
            Entry bytes

        Raises:
            KeyError: If the entry does not exist
        """
        return self.zip_file.read(name)

    def read_if_exists(self, name: str) -> Optional[bytes]:
        """Read an entry, returning None instead of raising KeyError."""
        if not self.has_entry(name):
            return None
        return self.read(name)

    def close(self) -> None:
        """Close the archive. Safe to call more than once."""
        if self._zip_file is not None:
            self._zip_file.close()
            self._zip_file = None
            logger.info(f"Package closed: {self.source_path or '<stream>'}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
