"""The in-memory description of a bag."""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from bagreader.fetch import FetchItem
from bagreader.manifest import Manifest
from bagreader.utils import DEFAULT_ENCODING
from bagreader.version import Version


@dataclass(frozen=True)
class Bag:
    """Everything read from a bag's control files.

    Instances are never modified. Each reading step returns a new Bag built
    with `dataclasses.replace`, so a Bag can be shared between threads.
    """
    root_directory: Path
    control_directory: Optional[Path] = None
    version: Optional[Version] = None
    file_encoding: str = DEFAULT_ENCODING
    payload_manifests: frozenset[Manifest] = frozenset()
    tag_manifests: frozenset[Manifest] = frozenset()
    metadata: Mapping[str, str] = field(default_factory=dict, hash=False)
    fetch_items: tuple[FetchItem, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "payload_manifests", frozenset(self.payload_manifests))
        object.__setattr__(self, "tag_manifests", frozenset(self.tag_manifests))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))
        object.__setattr__(self, "fetch_items", tuple(self.fetch_items))

    # the reader allows one payload and one tag manifest per algorithm
    def payload_manifest(self, algorithm: str) -> Optional[Manifest]:
        return _find_manifest(self.payload_manifests, algorithm)

    def tag_manifest(self, algorithm: str) -> Optional[Manifest]:
        return _find_manifest(self.tag_manifests, algorithm)


def _find_manifest(manifests: frozenset[Manifest], algorithm: str) -> Optional[Manifest]:
    for manifest in manifests:
        if manifest.algorithm == algorithm:
            return manifest
    return None
