"""
Write-back of OPC packages.

Saving never builds an archive from scratch: the source archive is streamed entry by
entry in its original order, and only entries with pending bytes in the EditBuffer are
substituted. Untouched entries keep their exact content and metadata.
"""

import io
import logging
import os
import shutil
import tempfile
import zipfile
from pathlib import Path
from typing import BinaryIO, Dict, Iterator, Optional, Tuple, Union

from .config import PackageOptions
from .parser.package_reader import PackageReader

logger = logging.getLogger(__name__)


class EditBuffer:
    """
    Pending entry overrides, keyed by archive path.

    Last write for a path wins. Content is not validated.
    """

    def __init__(self):
        self._entries: Dict[str, bytes] = {}

    def set(self, path: str, data: Union[bytes, str]) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._entries[path] = bytes(data)
        logger.debug(f"Pending override for {path} ({len(data)} bytes)")

    def get(self, path: str) -> Optional[bytes]:
        return self._entries.get(path)

    def items(self) -> Iterator[Tuple[str, bytes]]:
        return iter(self._entries.items())

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)


class PackageWriter:
    """
    Streams the source archive to a destination, substituting buffered entries.

    Args:
        reader: Open reader of the source archive
        edits: Pending overrides
        options: Package options (compression, atomic_save)
    """

    def __init__(self, reader: PackageReader, edits: EditBuffer, options: Optional[PackageOptions] = None):
        self.reader = reader
        self.edits = edits
        self.options = options or PackageOptions()

    def write_to(self, destination: BinaryIO) -> int:
        """
        Write the archive to a binary stream.

        Args:
            destination: Writable binary stream

        Returns:
            Number of entries whose content was substituted
        """
        entries = self.reader.infolist()
        names = {info.filename for info in entries}
        for path in self.edits:
            if path not in names:
                logger.warning(f"Ignoring override for {path}: no such entry in the source archive")

        substituted = 0
        with zipfile.ZipFile(destination, "w") as out:
            for info in entries:
                data = self.edits.get(info.filename)
                if data is None:
                    data = self.reader.read(info)
                else:
                    substituted += 1
                out.writestr(self._entry_info(info), data)

        logger.debug(f"Wrote {len(entries)} entries, {substituted} substituted")
        return substituted

    def write_file(self, path: Union[str, Path]) -> None:
        """
        Write the archive to a file.

        With atomic_save the archive is written next to the destination and renamed
        over it only after it is complete.

        Args:
            path: Destination file path
        """
        destination = Path(path)
        if not self.options.atomic_save:
            with open(destination, "wb") as handle:
                self.write_to(handle)
            return

        fd, temp_name = tempfile.mkstemp(
            prefix=f".{destination.name}.", suffix=".tmp", dir=str(destination.parent)
        )
        try:
            with os.fdopen(fd, "wb") as handle:
                self.write_to(handle)
            if destination.exists():
                shutil.copymode(destination, temp_name)
            else:
                os.chmod(temp_name, 0o644)
            os.replace(temp_name, destination)
        except BaseException:
            if os.path.exists(temp_name):
                os.unlink(temp_name)
            raise

    def write_buffer(self) -> io.BytesIO:
        """Write the archive into memory; the returned buffer is rewound."""
        buffer = io.BytesIO()
        self.write_to(buffer)
        buffer.seek(0)
        return buffer

    def _entry_info(self, info: zipfile.ZipInfo) -> zipfile.ZipInfo:
        # Fresh ZipInfo: writestr updates offsets and sizes on the object it is given.
        clone = zipfile.ZipInfo(info.filename, date_time=info.date_time)
        clone.compress_type = (
            self.options.compression if self.options.compression is not None else info.compress_type
        )
        clone.comment = info.comment
        clone.create_system = info.create_system
        clone.external_attr = info.external_attr
        clone.internal_attr = info.internal_attr
        return clone
