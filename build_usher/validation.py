"""
Validation of the event envelope handed to the usher by the upstream
detector (or by anyone inserting a build by hand).

Checks run in a fixed order and the first failure wins, so callers always
see the same message for the same malformed event.
"""

import logging
import math
from typing import Any, Mapping, Union

from build_usher.constants import MAX_TILE_INDEX, SUPPORTED_VERSIONS
from build_usher.data.shared_exceptions import EventValidationError
from build_usher.entities.build_event import BuildEvent

logger = logging.getLogger(__name__)


def is_numeric(value: Any) -> bool:
    """Return True if ``value`` is a string holding exactly one finite number.

    Only strings are accepted. Surrounding whitespace is tolerated, but
    whitespace-only, partially numeric (``"12abc"``), digit-grouped
    (``"1_000"``), non-ASCII digits, hex literals, NaN and infinite values
    are rejected.
    """
    if not isinstance(value, str):
        return False
    if "_" in value or not value.isascii():
        return False
    try:
        number = float(value)
    except ValueError:
        return False
    return math.isfinite(number)


def to_number(value: str) -> Union[int, float]:
    """Coerce a numeric string to ``int`` when it is integral."""
    try:
        return int(value.strip())
    except ValueError:
        number = float(value)
        return int(number) if number.is_integer() else number


def _field_error(name: str) -> EventValidationError:
    return EventValidationError(
        f"event.params.querystring.{name} is invalid or missing"
    )


def validate_event(event: Any) -> BuildEvent:
    """Validate a Lambda event envelope and return the BuildEvent it carries.

    Args:
        event: ``{"params": {"querystring": {...}}}`` as delivered by the
            upstream detector.

    Returns:
        BuildEvent: the validated event.

    Raises:
        EventValidationError: On the first failing check.
    """
    if not event or not isinstance(event, Mapping):
        raise EventValidationError("event is invalid or missing")

    params = event.get("params")
    if not isinstance(params, Mapping):
        raise EventValidationError("event.params is invalid or missing")

    querystring = params.get("querystring")
    if not isinstance(querystring, Mapping):
        raise EventValidationError(
            "event.params.querystring is invalid or missing"
        )

    tile_index = querystring.get("tileIndex")
    if (
        not tile_index
        or not is_numeric(tile_index)
        or to_number(tile_index) > MAX_TILE_INDEX
    ):
        raise _field_error("tileIndex")
    logger.info("tileIndex=%s", tile_index)

    block_number = querystring.get("blockNumber")
    if not block_number or not is_numeric(block_number):
        raise _field_error("blockNumber")
    logger.info("blockNumber=%s", block_number)

    hex_string = querystring.get("hexString")
    if not hex_string or not isinstance(hex_string, str):
        raise _field_error("hexString")
    logger.info("hexString=%s", hex_string)

    version = querystring.get("version")
    if not isinstance(version, str) or version not in SUPPORTED_VERSIONS:
        raise EventValidationError("Invalid or missing version parameter")
    logger.info("version=%s", version)

    return BuildEvent(
        hex_string=hex_string,
        tile_index=tile_index,
        block_number=block_number,
        version=version,
    )
