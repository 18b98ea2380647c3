"""Business logic for turning a build event into stored build records.

Runs the pipeline one step at a time: ask the geometry service for the hex
shapes, compress them, write the build record(s), then record the tile in the
version's build index. Any failure stops the pipeline where it is; records
already written are left in place.
"""

import logging
from typing import List, Optional

from build_usher.compression import compress_build, split_payload
from build_usher.config import UsherConfig, get_config
from build_usher.data.dynamo_client import DynamoClient
from build_usher.entities.build_event import BuildEvent
from build_usher.entities.build_indices import BuildIndices
from build_usher.entities.build_record import BuildRecord
from build_usher.geometry import GeometryClient
from build_usher.validation import to_number

logger = logging.getLogger(__name__)


def build_records(
    build_event: BuildEvent, compressed: str, threshold: int
) -> List[BuildRecord]:
    """Return the record(s) that store ``compressed`` for ``build_event``."""
    return [
        BuildRecord(
            tile_index=build_event.tile_index,
            version=build_event.version,
            block_number=to_number(build_event.block_number),
            build=part,
            hex_string=build_event.hex_string,
            part=part_number,
        )
        for part_number, part in enumerate(
            split_payload(compressed, threshold), start=1
        )
    ]


class BuildUsher:
    """Moves one build from the geometry service into DynamoDB."""

    def __init__(
        self,
        dynamo_client: DynamoClient,
        geometry_client: GeometryClient,
        config: Optional[UsherConfig] = None,
    ):
        self._dynamo = dynamo_client
        self._geometry = geometry_client
        self._config = config or get_config()

    def process(self, build_event: BuildEvent) -> BuildIndices:
        """Generate, compress and store the build for ``build_event``.

        Returns:
            BuildIndices: The version's build index after the update.
        """
        hex_shapes = self._geometry.generate(build_event.hex_string)

        compressed = compress_build(hex_shapes)
        logger.info("compressed.length=%d", len(compressed))

        records = build_records(
            build_event, compressed, self._config.split_threshold
        )
        if len(records) > 1:
            logger.info(
                "Build for %s exceeds %d characters, storing in %d parts",
                build_event.build_key,
                self._config.split_threshold,
                len(records),
            )
        self._dynamo.put_build_records(records)

        return self._dynamo.add_build_index(
            build_event.version,
            to_number(build_event.tile_index),
            max_attempts=self._config.index_update_attempts,
        )
