from unittest.mock import MagicMock

import pytest

from build_usher import handler
from build_usher.data.shared_exceptions import (
    EntityNotFoundError,
    EventValidationError,
)
from build_usher.entities.build_event import BuildEvent
from build_usher.entities.build_indices import BuildIndices

VALID_EVENT = {
    "params": {
        "querystring": {
            "tileIndex": "12",
            "blockNumber": "4567890",
            "hexString": "0x00ff",
            "version": "1.0",
        }
    }
}


@pytest.fixture
def usher(mocker) -> MagicMock:
    usher = MagicMock()
    usher.process.return_value = BuildIndices(version="1.0", indices=[12])
    mocker.patch.object(handler, "get_usher", return_value=usher)
    return usher


@pytest.mark.unit
def test_handler_returns_none_on_success(usher: MagicMock) -> None:
    assert handler.lambda_handler(VALID_EVENT, None) is None

    usher.process.assert_called_once_with(
        BuildEvent(
            hex_string="0x00ff",
            tile_index="12",
            block_number="4567890",
            version="1.0",
        )
    )


@pytest.mark.unit
@pytest.mark.parametrize(
    "event",
    [
        None,
        {},
        {"params": {}},
        {"params": {"querystring": {"tileIndex": "2000"}}},
        {
            "params": {
                "querystring": {
                    "tileIndex": "12",
                    "blockNumber": "1",
                    "hexString": "0x1",
                    "version": "2.0",
                }
            }
        },
    ],
)
def test_invalid_event_makes_no_outbound_call(usher: MagicMock, event) -> None:
    with pytest.raises(EventValidationError):
        handler.lambda_handler(event, None)

    handler.get_usher.assert_not_called()
    usher.process.assert_not_called()


@pytest.mark.unit
def test_downstream_failure_is_raised(usher: MagicMock, caplog) -> None:
    usher.process.side_effect = EntityNotFoundError(
        "buildIndicesV1.0 does not exist"
    )

    with pytest.raises(EntityNotFoundError, match="buildIndicesV1.0"):
        handler.lambda_handler(VALID_EVENT, None)

    assert "Failed to store build 12v1.0" in caplog.text


@pytest.mark.unit
def test_get_usher_builds_clients_once(mocker) -> None:
    handler.get_config.cache_clear()
    mocker.patch.object(handler, "_usher", None)
    dynamo_client = mocker.patch.object(handler, "DynamoClient")
    geometry_client = mocker.patch.object(handler, "GeometryClient")

    first = handler.get_usher()
    second = handler.get_usher()

    assert first is second
    dynamo_client.assert_called_once_with(
        builds_table_name="EtheriaBuildsUnified",
        global_vars_table_name="EtheriaGlobalVars",
        region="us-east-1",
        endpoint_url=None,
    )
    geometry_client.assert_called_once()
