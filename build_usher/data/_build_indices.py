import logging
from typing import Tuple, Union

from botocore.exceptions import ClientError

from build_usher.constants import (
    BUILD_INDICES_NAME_PREFIX,
    GLOBAL_VAR_KEY_ATTRIBUTE,
    GLOBAL_VAR_VALUE_ATTRIBUTE,
)
from build_usher.data.base_operations import (
    CONDITIONAL_CHECK_FAILED,
    DynamoDBBaseOperations,
    error_code,
    handle_dynamodb_errors,
)
from build_usher.data.shared_exceptions import (
    EntityNotFoundError,
    EntityValidationError,
    IndexUpdateConflictError,
)
from build_usher.entities.build_indices import (
    BuildIndices,
    item_to_build_indices,
)

logger = logging.getLogger(__name__)


class _BuildIndices(DynamoDBBaseOperations):
    """Accessor methods for the per-version build index in DynamoDB."""

    def _read_build_indices(self, version: str) -> Tuple[BuildIndices, str]:
        response = self._client.get_item(
            TableName=self.global_vars_table_name,
            Key={
                GLOBAL_VAR_KEY_ATTRIBUTE: {
                    "S": f"{BUILD_INDICES_NAME_PREFIX}{version}"
                }
            },
            ConsistentRead=True,
        )
        item = response.get("Item")
        if item is None:
            raise EntityNotFoundError(
                f"{BUILD_INDICES_NAME_PREFIX}{version} does not exist"
            )
        try:
            indices = item_to_build_indices(item)
        except ValueError as exc:
            raise EntityValidationError(str(exc)) from exc
        return indices, item[GLOBAL_VAR_VALUE_ATTRIBUTE]["S"]

    @handle_dynamodb_errors("get_build_indices")
    def get_build_indices(self, version: str) -> BuildIndices:
        """Return the build index for ``version``.

        Raises:
            EntityNotFoundError: If the index item has never been created.
        """
        indices, _ = self._read_build_indices(version)
        return indices

    @handle_dynamodb_errors("put_build_indices")
    def put_build_indices(self, indices: BuildIndices) -> None:
        """Unconditionally write a build index (used to seed new versions)."""
        if not isinstance(indices, BuildIndices):
            raise EntityValidationError(
                "indices must be an instance of the BuildIndices class."
            )
        self._client.put_item(
            TableName=self.global_vars_table_name,
            Item=indices.to_item(),
        )

    @handle_dynamodb_errors("add_build_index")
    def add_build_index(
        self,
        version: str,
        tile_index: Union[int, float],
        max_attempts: int = 3,
    ) -> BuildIndices:
        """Merge ``tile_index`` into the build index for ``version``.

        The write is conditional on the stored value being the one that was
        read, so two concurrent updaters cannot drop each other's tile. A lost
        race re-reads and merges again. Duplicates already in the stored list
        are collapsed on write; nothing is written when the tile is already
        listed exactly once.

        Args:
            version: Schema version whose index is updated.
            tile_index: Tile to record.
            max_attempts: Read-merge-write attempts before giving up.

        Returns:
            BuildIndices: The index as stored after the update.

        Raises:
            EntityNotFoundError: If the index item does not exist.
            EntityValidationError: If ``tile_index`` is not a number.
            IndexUpdateConflictError: If every attempt lost a race.
        """
        if max_attempts < 1:
            raise EntityValidationError("max_attempts must be at least 1")
        if isinstance(tile_index, bool) or not isinstance(
            tile_index, (int, float)
        ):
            raise EntityValidationError("tile_index must be a number")

        for attempt in range(1, max_attempts + 1):
            current, stored_value = self._read_build_indices(version)
            logger.info(
                "success getting %s (%d tiles)",
                current.name,
                len(current.indices),
            )
            updated = current.with_index(tile_index)
            if updated.indices == current.indices:
                logger.info(
                    "%s already contains %s, nothing to update",
                    current.name,
                    tile_index,
                )
                return current

            logger.info(
                "adding %s to %s. Array is now %s",
                tile_index,
                current.name,
                updated.value,
            )
            try:
                self._client.put_item(
                    TableName=self.global_vars_table_name,
                    Item=updated.to_item(),
                    ConditionExpression="#value = :expected",
                    ExpressionAttributeNames={
                        "#value": GLOBAL_VAR_VALUE_ATTRIBUTE
                    },
                    ExpressionAttributeValues={
                        ":expected": {"S": stored_value}
                    },
                )
            except ClientError as e:
                if error_code(e) != CONDITIONAL_CHECK_FAILED:
                    raise
                logger.warning(
                    "%s changed during update (attempt %d of %d)",
                    current.name,
                    attempt,
                    max_attempts,
                )
                continue
            logger.info("success putting %s", updated.name)
            return updated

        raise IndexUpdateConflictError(
            f"Could not update {BUILD_INDICES_NAME_PREFIX}{version} after "
            f"{max_attempts} attempts"
        )
