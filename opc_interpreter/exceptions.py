"""Custom exceptions for OPC Interpreter."""

from typing import Optional


class OpcInterpreterError(Exception):
    """Base exception for OPC Interpreter errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ParsingError(OpcInterpreterError):
    """Exception raised while parsing package XML."""

    pass


class ManifestParseError(ParsingError):
    """Exception raised when [Content_Types].xml is not well-formed."""

    pass


class PartParseError(ParsingError):
    """Exception raised when a required part is not well-formed XML."""

    def __init__(self, message: str, part_name: str, details: Optional[str] = None):
        super().__init__(message, details)
        self.part_name = part_name


class PackageError(OpcInterpreterError):
    """Exception raised for archive-level failures."""

    pass


class MissingPartError(PackageError):
    """Exception raised when a required part is absent from the archive."""

    def __init__(self, part_name: str, details: Optional[str] = None):
        super().__init__(f"Required part not found: {part_name}", details)
        self.part_name = part_name
