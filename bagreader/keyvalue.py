"""Parse the folded `Key: Value` text used by bagit.txt and bag-info.txt."""

import logging

from pathlib import Path
from typing import Iterable, Optional

from bagreader.errors import MalformedKeyValueLine
from bagreader.utils import DEFAULT_ENCODING, read_lines


logger = logging.getLogger(__name__)


def is_continuation_line(line: str) -> bool:
    return line[:1].isspace()


def parse_key_value_lines(
    lines: Iterable[str],
    delimiter: str = ":",
    source: Optional[Path] = None,
) -> dict[str, str]:
    """Parse key-value lines into a dict, keeping the order keys first appear in.

    A line starting with whitespace continues the value of the previous key and
    is appended to it, after a newline, with its indentation intact. Any other
    line is split on the first `delimiter` only, so values may contain the
    delimiter. A repeated key replaces the earlier value.
    """
    values: dict[str, str] = {}
    last_key = None

    for line_number, line in enumerate(lines, start=1):
        if not line:
            continue

        if is_continuation_line(line):
            if last_key is None:
                raise MalformedKeyValueLine(
                    "Continuation line found before any key", source, line_number, line
                )
            logger.debug("Found an indented line - merging it to key [%s]", last_key)
            values[last_key] = f"{values[last_key]}\n{line}"
            continue

        key, found, value = line.partition(delimiter)
        key = key.strip()
        if not found:
            raise MalformedKeyValueLine(
                f"Line has no '{delimiter}' delimiter", source, line_number, line
            )
        if not key:
            raise MalformedKeyValueLine("Line has an empty key", source, line_number, line)

        last_key = key
        values[key] = value.strip()
        logger.debug("Found key [%s] value [%s] in file [%s]", key, values[key], source)

    return values


def read_key_value_file(
    path: Path,
    delimiter: str = ":",
    encoding: str = DEFAULT_ENCODING,
) -> dict[str, str]:
    """Read and parse a key-value text file such as bag-info.txt."""
    return parse_key_value_lines(read_lines(path, encoding), delimiter, source=path)
