"""
Options for opening and saving OPC packages.
"""

from dataclasses import dataclass
from typing import Callable, Optional


@dataclass(frozen=True)
class PartDiagnostic:
    """A manifest-declared optional part that was left out of the loaded set."""

    part_path: str
    role: str
    reason: str


@dataclass
class PackageOptions:
    """
    Package options.

    Args:
        compression: zipfile compression constant applied to every written entry,
            or None to keep the compression each entry had in the source archive
        atomic_save: Write to a temporary file and rename it over the destination
        diagnostics: Callback receiving a PartDiagnostic for every optional part
            skipped while opening (absent from the archive or not well-formed)
    """

    compression: Optional[int] = None
    atomic_save: bool = True
    diagnostics: Optional[Callable[[PartDiagnostic], None]] = None

    def report(self, diagnostic: PartDiagnostic) -> None:
        if self.diagnostics is not None:
            self.diagnostics(diagnostic)
