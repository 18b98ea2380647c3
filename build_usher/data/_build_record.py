import logging
from typing import List, Optional

from build_usher.constants import BUILD_KEY_ATTRIBUTE, SECOND_PART_SUFFIX
from build_usher.data.base_operations import (
    DynamoDBBaseOperations,
    handle_dynamodb_errors,
)
from build_usher.data.shared_exceptions import (
    EntityNotFoundError,
    EntityValidationError,
)
from build_usher.entities.build_record import (
    BuildRecord,
    item_to_build_record,
)

logger = logging.getLogger(__name__)


class _BuildRecord(DynamoDBBaseOperations):
    """Accessor methods for BuildRecord items in DynamoDB."""

    @handle_dynamodb_errors("put_build_record")
    def put_build_record(self, record: BuildRecord) -> None:
        """Write a build record, replacing any previous build for its key."""
        if record is None:
            raise EntityValidationError("record cannot be None")
        if not isinstance(record, BuildRecord):
            raise EntityValidationError(
                "record must be an instance of the BuildRecord class."
            )
        self._client.put_item(
            TableName=self.builds_table_name,
            Item=record.to_item(),
        )
        logger.info(
            "%s put success (%s)",
            self.builds_table_name,
            record.key[BUILD_KEY_ATTRIBUTE]["S"],
        )

    def put_build_records(self, records: List[BuildRecord]) -> None:
        """Write the parts of one build in order.

        The writes are independent: if the second one fails the first part
        stays visible to readers. A build that fits in one record removes any
        second part left by an earlier, larger build of the same tile.
        """
        if not isinstance(records, list) or not all(
            isinstance(record, BuildRecord) for record in records
        ):
            raise EntityValidationError(
                "records must be a list of BuildRecord instances."
            )
        for record in records:
            self.put_build_record(record)
        if len(records) == 1:
            self.delete_build_record(
                records[0].tile_index, records[0].version, part=2
            )

    @handle_dynamodb_errors("delete_build_record")
    def delete_build_record(
        self, tile_index: str, version: str, part: int = 1
    ) -> None:
        """Delete one stored part of a build; an absent part is ignored."""
        key = _build_key(tile_index, version, part)
        self._client.delete_item(
            TableName=self.builds_table_name,
            Key={BUILD_KEY_ATTRIBUTE: {"S": key}},
        )
        logger.info("%s delete success (%s)", self.builds_table_name, key)

    @handle_dynamodb_errors("get_build_record")
    def get_build_record(
        self, tile_index: str, version: str, part: int = 1
    ) -> Optional[BuildRecord]:
        """Return one stored part of a build, or None when it is absent."""
        key = _build_key(tile_index, version, part)
        response = self._client.get_item(
            TableName=self.builds_table_name,
            Key={BUILD_KEY_ATTRIBUTE: {"S": key}},
            ConsistentRead=True,
        )
        item = response.get("Item")
        if item is None:
            return None
        return item_to_build_record(item)

    def get_build(self, tile_index: str, version: str) -> BuildRecord:
        """Return the complete build for a tile, re-joining a split payload.

        Raises:
            EntityNotFoundError: If no build is stored for the tile/version.
        """
        first = self.get_build_record(tile_index, version)
        if first is None:
            raise EntityNotFoundError(
                f"Build for tile {tile_index} version {version} does not exist"
            )
        second = self.get_build_record(tile_index, version, part=2)
        if second is None:
            return first
        return BuildRecord(
            tile_index=first.tile_index,
            version=first.version,
            block_number=first.block_number,
            build=first.build + second.build,
            hex_string=first.hex_string,
        )


def _build_key(tile_index: str, version: str, part: int) -> str:
    if part not in (1, 2):
        raise EntityValidationError("part must be 1 or 2")
    key = f"{tile_index}v{version}"
    return key + SECOND_PART_SUFFIX if part == 2 else key
