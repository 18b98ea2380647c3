"""Lambda handler for storing newly detected Etheria builds.

Invoked by the map updater / event detector whenever a tile's build changes
on chain. The event carries the tile's hex string and where it came from:

    {
        "params": {
            "querystring": {
                "tileIndex": "123",
                "blockNumber": "4567890",
                "hexString": "0x...",
                "version": "1.2"
            }
        }
    }

The same event can be sent by hand to (re)build any tile without waiting for
a chain event.

Environment Variables:
    LOG_LEVEL: Logging level (default INFO)
    BUILD_USHER_*: See build_usher.config.UsherConfig
"""

import json
import logging
import os
from typing import Any, Optional

from build_usher.config import get_config
from build_usher.data.dynamo_client import DynamoClient
from build_usher.data.shared_exceptions import (
    BuildUsherError,
    EventValidationError,
)
from build_usher.geometry import GeometryClient
from build_usher.usher import BuildUsher
from build_usher.validation import validate_event

# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=getattr(logging, log_level, logging.INFO))
logger = logging.getLogger(__name__)

# Reused across warm invocations
_usher: Optional[BuildUsher] = None


def get_usher() -> BuildUsher:
    """Return the module's BuildUsher, creating its clients on first use."""
    global _usher  # pylint: disable=global-statement
    if _usher is None:
        config = get_config()
        dynamo_client = DynamoClient(
            builds_table_name=config.builds_table_name,
            global_vars_table_name=config.global_vars_table_name,
            region=config.aws_region,
            endpoint_url=config.endpoint_url,
        )
        _usher = BuildUsher(dynamo_client, GeometryClient(config=config), config)
    return _usher


def lambda_handler(event: Any, _context: Any) -> None:
    """Validate a build event and store the build it describes.

    Args:
        event: Invocation envelope from the event detector.
        context: Lambda context object.

    Returns:
        None on success.

    Raises:
        EventValidationError: If the event is malformed; nothing downstream
            is called.
        BuildUsherError, ClientError, BotoCoreError: If any downstream step
            fails. Earlier writes are not rolled back.
    """
    logger.info("event=%s", json.dumps(event, default=str))

    try:
        build_event = validate_event(event)
    except EventValidationError as e:
        logger.error("Rejected event: %s", e)
        raise

    try:
        indices = get_usher().process(build_event)
    except BuildUsherError as e:
        logger.error(
            "Failed to store build %s: %s",
            build_event.build_key,
            e,
            exc_info=True,
        )
        raise

    logger.info(
        "Stored build %s at block %s (%d tiles indexed for version %s)",
        build_event.build_key,
        build_event.block_number,
        len(indices.indices),
        build_event.version,
    )
