"""Read a BagIt archive's control files into a `Bag`.

For more information on the bagit standard, see: https://en.wikipedia.org/wiki/BagIt

Each step takes a Bag and returns a new one with the step's results added,
so `read` is a chain of steps and nothing is changed in place.
"""

import logging

from dataclasses import replace
from pathlib import Path

from bagreader.bag import Bag
from bagreader.errors import FileUnreadable, MissingRequiredFile, UnrecognizedManifestName
from bagreader.fetch import read_fetch_file
from bagreader.keyvalue import read_key_value_file
from bagreader.manifest import is_manifest_name, is_tag_manifest_name, read_manifest
from bagreader.utils import (
    BAG_INFO_FILE_NAME,
    BAGIT_FILE_NAME,
    CONTROL_DIRECTORY_NAME,
    DEFAULT_ENCODING,
    FETCH_FILE_NAME,
    PACKAGE_INFO_FILE_NAME,
)
from bagreader.version import parse_version


logger = logging.getLogger(__name__)

VERSION_KEY = "BagIt-Version"
ENCODING_KEY = "Tag-File-Character-Encoding"


def find_control_directory(root_directory: Path) -> Path:
    """Control files live in `.bagit` when the bag has one, else in the bag root."""
    control_directory = Path(root_directory) / CONTROL_DIRECTORY_NAME
    if control_directory.is_dir():
        return control_directory
    return Path(root_directory)


def read_bagit_text_file(bagit_file: Path, bag: Bag) -> Bag:
    """Add the version and tag file encoding declared in bagit.txt."""
    if not bagit_file.is_file():
        raise MissingRequiredFile(f"Every bag must have a {BAGIT_FILE_NAME}", path=bagit_file)

    logger.debug("Reading %s file", BAGIT_FILE_NAME)
    # bagit.txt itself is always UTF-8
    declarations = read_key_value_file(bagit_file, ":", DEFAULT_ENCODING)

    version = parse_version(declarations.get(VERSION_KEY), source=bagit_file)
    logger.debug("%s is [%s]", VERSION_KEY, version)

    encoding = declarations.get(ENCODING_KEY)
    if not encoding:
        logger.warning("'%s' has no %s, assuming %s", bagit_file, ENCODING_KEY, DEFAULT_ENCODING)
        encoding = DEFAULT_ENCODING
    logger.debug("%s is [%s]", ENCODING_KEY, encoding)

    return replace(bag, version=version, file_encoding=encoding)


def find_manifest_files(control_directory: Path) -> list[Path]:
    try:
        return sorted(
            path for path in Path(control_directory).iterdir()
            if path.is_file() and is_manifest_name(path.name)
        )
    except OSError as err:
        raise FileUnreadable(f"Unable to list directory: {err}", path=control_directory) from err


def read_all_manifests(control_directory: Path, bag: Bag) -> Bag:
    """Add every payload and tag manifest found in the control directory.

    Manifest paths are resolved against the bag root, wherever the manifests
    themselves live. A bag without manifests is not an error here, but two
    payload (or two tag) manifests for the same algorithm are.
    """
    payload_manifests = set(bag.payload_manifests)
    tag_manifests = set(bag.tag_manifests)

    for manifest_file in find_manifest_files(control_directory):
        manifest = read_manifest(manifest_file, bag.root_directory, bag.file_encoding)
        manifests = tag_manifests if is_tag_manifest_name(manifest_file.name) else payload_manifests
        if any(m.algorithm == manifest.algorithm for m in manifests):
            raise UnrecognizedManifestName(
                f"More than one manifest for algorithm '{manifest.algorithm}'", path=manifest_file
            )
        manifests.add(manifest)

    return replace(bag, payload_manifests=payload_manifests, tag_manifests=tag_manifests)


def read_bag_metadata(control_directory: Path, bag: Bag) -> Bag:
    """Add the fields of bag-info.txt, or of package-info.txt for older bags."""
    bag_info_file = Path(control_directory) / BAG_INFO_FILE_NAME
    package_info_file = Path(control_directory) / PACKAGE_INFO_FILE_NAME

    if bag_info_file.exists():
        metadata_file = bag_info_file
    elif package_info_file.exists():
        metadata_file = package_info_file
    else:
        logger.debug("No %s or %s found", BAG_INFO_FILE_NAME, PACKAGE_INFO_FILE_NAME)
        return replace(bag, metadata={})

    logger.debug("Reading bag metadata from [%s]", metadata_file)
    return replace(bag, metadata=read_key_value_file(metadata_file, ":", bag.file_encoding))


def read_fetch(control_directory: Path, bag: Bag) -> Bag:
    """Add the items listed in fetch.txt, if the bag has one."""
    fetch_file = Path(control_directory) / FETCH_FILE_NAME
    if not fetch_file.exists():
        return replace(bag, fetch_items=())
    return replace(bag, fetch_items=read_fetch_file(fetch_file, bag.file_encoding))


def read(root_directory: Path) -> Bag:
    """Read the bag at `root_directory`.

    Either the whole bag is read or a `BagReaderError` is raised.
    """
    root_directory = Path(root_directory)
    control_directory = find_control_directory(root_directory)
    logger.debug("Reading bag '%s' with control files in '%s'", root_directory, control_directory)

    bag = Bag(root_directory=root_directory, control_directory=control_directory)
    bag = read_bagit_text_file(control_directory / BAGIT_FILE_NAME, bag)
    bag = read_all_manifests(control_directory, bag)
    bag = read_bag_metadata(control_directory, bag)
    bag = read_fetch(control_directory, bag)

    return bag
