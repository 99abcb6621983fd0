"""Exceptions raised while reading a BagIt archive."""

from pathlib import Path
from typing import Optional


class BagReaderError(Exception):
    """Base class for every failure raised by bagreader.

    Carries the file being read and, when a single line is at fault, its
    1-based line number and text.
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        line_number: Optional[int] = None,
        line: Optional[str] = None,
    ):
        self.message = message
        self.path = path
        self.line_number = line_number
        self.line = line
        super().__init__(message)

    def __str__(self) -> str:
        location = ""
        if self.path is not None:
            location = f"{self.path}"
            if self.line_number is not None:
                location += f":{self.line_number}"
            location += ": "
        detail = f" [{self.line!r}]" if self.line is not None else ""
        return f"{location}{self.message}{detail}"


class FileUnreadable(BagReaderError):
    """A control file could not be opened, read or decoded."""


class MissingRequiredFile(BagReaderError):
    """A file every bag must have (bagit.txt) is absent."""


class MalformedVersion(BagReaderError, ValueError):
    pass


class MalformedKeyValueLine(BagReaderError, ValueError):
    pass


class MalformedManifestLine(BagReaderError, ValueError):
    pass


class MalformedFetchLine(BagReaderError, ValueError):
    pass


class UnrecognizedManifestName(BagReaderError, ValueError):
    pass
