"""Command line interface for bagreader."""
import logging
from pathlib import Path

import click

from bagreader.bag import Bag
from bagreader.errors import BagReaderError
from bagreader.fetch import UNKNOWN_LENGTH_TOKEN
from bagreader.reader import read


def format_bag(bag: Bag) -> str:
    lines = [
        f"Bag: {bag.root_directory}",
        f"BagIt-Version: {bag.version}",
        f"Tag-File-Character-Encoding: {bag.file_encoding}",
    ]
    for label, manifests in (("Payload manifest", bag.payload_manifests), ("Tag manifest", bag.tag_manifests)):
        for manifest in sorted(manifests, key=lambda m: m.algorithm):
            lines.append(f"{label} ({manifest.algorithm}): {len(manifest.entries)} files")

    if bag.metadata:
        lines.append("Metadata:")
        lines.extend(f"  {key}: {value}" for key, value in bag.metadata.items())

    if bag.fetch_items:
        lines.append("Fetch:")
        for item in bag.fetch_items:
            length = item.length if item.length_known else UNKNOWN_LENGTH_TOKEN
            lines.append(f"  {item.url} {length} {item.path}")

    return "\n".join(lines)


@click.command()
@click.option('-v', '--verbose/--no-verbose', default=False, help='Print more information about the process')
@click.argument('bag_directory', type=click.Path(exists=True, file_okay=False, path_type=Path))
def cli(verbose: bool, bag_directory: Path):
    """Read the BagIt archive at BAG_DIRECTORY and print what it contains."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        bag = read(bag_directory)
    except BagReaderError as err:
        raise click.ClickException(str(err)) from err
    click.echo(format_bag(bag))


if __name__ == "__main__":
    cli()
