"""Parse checksum manifests (manifest-<alg>.txt and tagmanifest-<alg>.txt)."""

import logging
import os
import re

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from bagreader.errors import MalformedManifestLine, UnrecognizedManifestName
from bagreader.utils import DEFAULT_ENCODING, read_lines


logger = logging.getLogger(__name__)

# e.g. manifest-md5.txt, tagmanifest-sha256.txt
MANIFEST_NAME = re.compile(r"(?:tag)?manifest-(?P<algorithm>[^-.]+)(?:-[^.]*)?\..+")
# what the bag reader picks up from the control directory
MANIFEST_FILE_NAME = re.compile(r"(?:tag)?manifest-.*\.txt")


@dataclass(frozen=True)
class Manifest:
    """Checksums for one digest algorithm, keyed by absolute file path."""
    algorithm: str
    entries: Mapping[Path, str] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        # entries is exposed read-only so a returned manifest can't be changed
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))


def is_manifest_name(name: str) -> bool:
    return MANIFEST_FILE_NAME.fullmatch(name) is not None


def is_tag_manifest_name(name: str) -> bool:
    return is_manifest_name(name) and name.startswith("tag")


def algorithm_from_manifest_name(name: str, source: Optional[Path] = None) -> str:
    """Get the digest algorithm from a manifest file name.

    The algorithm is everything between the first `-` and the next `-` or `.`,
    so `manifest-sha256.txt` gives `sha256`.
    """
    match = MANIFEST_NAME.fullmatch(name)
    if not match:
        raise UnrecognizedManifestName(
            f"'{name}' does not look like (tag)manifest-<algorithm>.<extension>",
            path=source,
        )
    return match.group("algorithm")


def parse_manifest(
    manifest_name: str,
    lines: Iterable[str],
    resolution_root: Path,
    source: Optional[Path] = None,
) -> Manifest:
    """Parse manifest lines of the form `<checksum> <relative path>`.

    Paths are joined onto `resolution_root` (the bag root, not the directory
    holding the manifest). The last checksum listed for a path wins.
    """
    algorithm = algorithm_from_manifest_name(manifest_name, source)
    root = Path(os.path.abspath(resolution_root))
    entries: dict[Path, str] = {}

    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        parts = line.split(None, 1)
        if len(parts) < 2:
            raise MalformedManifestLine(
                "Manifest line must have a checksum and a path", source, line_number, line
            )
        checksum, relative_path = parts
        # a leading "/" must not escape the root
        file_path = root / relative_path.lstrip("/")
        logger.debug("Read checksum [%s] and file [%s] from manifest [%s]", checksum, file_path, manifest_name)
        entries[file_path] = checksum

    return Manifest(algorithm, entries)


def read_manifest(
    manifest_file: Path,
    resolution_root: Path,
    encoding: str = DEFAULT_ENCODING,
) -> Manifest:
    """Read a manifest file and resolve its paths against `resolution_root`."""
    logger.debug("Reading manifest [%s]", manifest_file)
    manifest_file = Path(manifest_file)
    return parse_manifest(
        manifest_file.name,
        read_lines(manifest_file, encoding),
        resolution_root,
        source=manifest_file,
    )
