"""Parse fetch.txt, the list of files to be retrieved from elsewhere."""

import logging
import re

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from urllib3.exceptions import LocationParseError
from urllib3.util import parse_url

from bagreader.errors import MalformedFetchLine
from bagreader.utils import DEFAULT_ENCODING, read_lines


logger = logging.getLogger(__name__)

UNKNOWN_LENGTH_TOKEN = "-"
LENGTH = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class FetchItem:
    """A file that belongs in the bag but has to be downloaded first.

    `length` is the expected size in bytes, or None when fetch.txt gives `-`.
    `path` is relative to the bag root and kept exactly as written.
    """
    url: str
    length: Optional[int]
    path: str

    @property
    def length_known(self) -> bool:
        return self.length is not None


def is_valid_url(url: str) -> bool:
    """Check that `url` is an absolute URL. No request is made."""
    try:
        parsed = parse_url(url)
    except LocationParseError:
        return False
    if not parsed.scheme:
        return False
    # file:///some/path has no host
    return bool(parsed.host) or (parsed.scheme == "file" and bool(parsed.path))


def parse_fetch_line(line: str, source: Optional[Path] = None, line_number: Optional[int] = None) -> FetchItem:
    parts = line.split(None, 2)
    if len(parts) < 3:
        raise MalformedFetchLine(
            "Fetch line must have a url, a length and a path", source, line_number, line
        )
    url, length_token, path = parts

    if length_token == UNKNOWN_LENGTH_TOKEN:
        length = None
    elif LENGTH.fullmatch(length_token):
        length = int(length_token)
    else:
        raise MalformedFetchLine(
            f"Length must be a number of bytes or '{UNKNOWN_LENGTH_TOKEN}'", source, line_number, line
        )

    if not is_valid_url(url):
        raise MalformedFetchLine(f"'{url}' is not a valid URL", source, line_number, line)

    logger.debug("Read URL [%s] length [%s] path [%s] from fetch file [%s]", url, length, path, source)
    return FetchItem(url, length, path)


def parse_fetch_lines(lines: Iterable[str], source: Optional[Path] = None) -> tuple[FetchItem, ...]:
    """Parse fetch.txt lines in order. Duplicate lines give duplicate items."""
    return tuple(
        parse_fetch_line(line, source, line_number)
        for line_number, line in enumerate(lines, start=1)
        if line.strip()
    )


def read_fetch_file(path: Path, encoding: str = DEFAULT_ENCODING) -> tuple[FetchItem, ...]:
    return parse_fetch_lines(read_lines(path, encoding), source=path)
