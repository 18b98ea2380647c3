#!/usr/bin/env python
"""Store the build for a tile without waiting for a chain event.

Builds the same event the map updater sends, validates it, and runs the
usher pipeline locally against the configured tables and geometry Lambda.

Usage:
    python scripts/submit_build.py --tile-index 123 --block-number 4567890 \
        --hex-string 0x... --version 1.2 [--dry-run]
    python scripts/submit_build.py --tile-index 123 --version 1.2 --show

Options:
    --tile-index    Tile to (re)build
    --block-number  Block the hex string was read at
    --hex-string    Hex string to render
    --version       Schema version (0.9, 1.0, 1.1, 1.2)
    --dry-run       Validate the event and print it without storing anything
    --show          Print what is stored for the tile/version instead

Tables, region and the geometry function come from BUILD_USHER_* variables.
"""

import argparse
import json
import logging
import sys

from build_usher.compression import decompress_build
from build_usher.config import get_config
from build_usher.constants import SUPPORTED_VERSIONS
from build_usher.data.dynamo_client import DynamoClient
from build_usher.data.shared_exceptions import BuildUsherError
from build_usher.entities.build_event import BuildEvent
from build_usher.geometry import GeometryClient
from build_usher.usher import BuildUsher
from build_usher.validation import validate_event


def show_build(client: DynamoClient, tile_index: str, version: str) -> None:
    record = client.get_build(tile_index, version)
    document = decompress_build(record.build)
    indices = client.get_build_indices(version)
    print(f"Tile {record.tile_index} version {record.version}")
    print(f"  block number:      {record.block_number}")
    print(f"  compressed length: {len(record.build)}")
    print(f"  document length:   {len(json.dumps(document))}")
    print(f"  indexed:           {record.tile_index in map(str, indices.indices)}")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Store the build for a tile from its hex string"
    )
    parser.add_argument("--tile-index", required=True, help="Tile to build")
    parser.add_argument("--block-number", help="Block the hex string came from")
    parser.add_argument("--hex-string", help="Hex string to render")
    parser.add_argument(
        "--version",
        required=True,
        choices=sorted(SUPPORTED_VERSIONS),
        help="Schema version",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate and print the event without storing anything",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Print the stored build for the tile instead of building it",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    config = get_config()

    if args.show:
        client = DynamoClient(
            builds_table_name=config.builds_table_name,
            global_vars_table_name=config.global_vars_table_name,
            region=config.aws_region,
            endpoint_url=config.endpoint_url,
        )
        try:
            show_build(client, args.tile_index, args.version)
        except BuildUsherError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        return 0

    if not args.block_number or not args.hex_string:
        parser.error("--block-number and --hex-string are required to build")

    event = BuildEvent(
        hex_string=args.hex_string,
        tile_index=args.tile_index,
        block_number=args.block_number,
        version=args.version,
    ).to_envelope()

    try:
        build_event = validate_event(event)
    except BuildUsherError as e:
        print(f"Invalid event: {e}", file=sys.stderr)
        return 1

    if args.dry_run:
        print("[DRY RUN] Would submit:")
        print(json.dumps(event, indent=2))
        return 0

    client = DynamoClient(
        builds_table_name=config.builds_table_name,
        global_vars_table_name=config.global_vars_table_name,
        region=config.aws_region,
        endpoint_url=config.endpoint_url,
    )
    usher = BuildUsher(client, GeometryClient(config=config), config)
    try:
        indices = usher.process(build_event)
    except BuildUsherError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(
        f"Stored build {build_event.build_key}; "
        f"{len(indices.indices)} tiles indexed for version {args.version}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
