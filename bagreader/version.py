"""The BagIt-Version declared in bagit.txt."""

import re

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from bagreader.errors import MalformedVersion


VERSION_SEGMENT = re.compile(r"[0-9]+")


@dataclass(frozen=True, order=True)
class Version:
    major: int
    minor: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


def parse_version(token: Optional[str], source: Optional[Path] = None) -> Version:
    """Parse a `MAJOR.MINOR` token.

    Only the first two segments are read, so `1.0.3` is `Version(1, 0)`.
    """
    if token is None:
        raise MalformedVersion("BagIt-Version is missing", path=source)

    token = token.strip()
    if "." not in token:
        raise MalformedVersion(f"Version must be in format MAJOR.MINOR but was '{token}'", path=source)

    major, minor = token.split(".", 2)[:2]
    if not VERSION_SEGMENT.fullmatch(major) or not VERSION_SEGMENT.fullmatch(minor):
        raise MalformedVersion(f"Version must be in format MAJOR.MINOR but was '{token}'", path=source)

    return Version(int(major), int(minor))
