"""Helpers too generic to be in other modules."""
import logging

from pathlib import Path

from bagreader.errors import FileUnreadable


logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "UTF-8"
BOM = "\ufeff"

CONTROL_DIRECTORY_NAME = ".bagit"
BAGIT_FILE_NAME = "bagit.txt"
BAG_INFO_FILE_NAME = "bag-info.txt"
# only written by bagit versions 0.93 - 0.95
PACKAGE_INFO_FILE_NAME = "package-info.txt"
FETCH_FILE_NAME = "fetch.txt"


def read_lines(path: Path, encoding: str = DEFAULT_ENCODING) -> list[str]:
    """Read a text file into a list of lines without their line endings.

    The file is closed before returning, whether or not reading succeeded.
    Any failure to open, read or decode the file is raised as `FileUnreadable`.
    """
    logger.debug("Reading '%s' as %s", path, encoding)
    try:
        with open(path, "r", encoding=encoding, newline=None) as fp:
            lines = [line.rstrip("\n") for line in fp]
    except (OSError, UnicodeDecodeError, LookupError) as err:
        raise FileUnreadable(f"Unable to read file: {err}", path=path) from err

    # ignore a byte order mark left by editors that write one
    if lines and lines[0].startswith(BOM):
        lines[0] = lines[0][len(BOM):]
    return lines
