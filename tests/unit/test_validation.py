from typing import Any, Dict

import pytest

from build_usher.data.shared_exceptions import EventValidationError
from build_usher.entities.build_event import BuildEvent
from build_usher.validation import is_numeric, to_number, validate_event


def _event(**overrides: Any) -> Dict[str, Any]:
    querystring = {
        "tileIndex": "123",
        "blockNumber": "4567890",
        "hexString": "0x00ff00ff",
        "version": "1.2",
    }
    querystring.update(overrides)
    return {"params": {"querystring": querystring}}


@pytest.mark.unit
@pytest.mark.parametrize(
    "value", ["42", "3.14", "0", "-5", "1e3", " 7 ", "007"]
)
def test_is_numeric_accepts_whole_numbers(value: str) -> None:
    assert is_numeric(value)


@pytest.mark.unit
@pytest.mark.parametrize(
    "value",
    [
        "abc",
        "  ",
        "",
        "12abc",
        "3.14.15",
        "1_000",
        "nan",
        "inf",
        "Infinity",
        "\u0661\u0662",
        "\uff17",
        "0x1A",
    ],
)
def test_is_numeric_rejects_non_numbers(value: str) -> None:
    assert not is_numeric(value)


@pytest.mark.unit
@pytest.mark.parametrize("value", [42, 3.14, None, True, ["1"], b"1"])
def test_is_numeric_rejects_non_strings(value: Any) -> None:
    assert not is_numeric(value)


@pytest.mark.unit
def test_to_number() -> None:
    assert to_number("7") == 7
    assert isinstance(to_number("7"), int)
    assert to_number(" 12 ") == 12
    assert to_number("1e3") == 1000
    assert isinstance(to_number("1e3"), int)
    assert to_number("3.5") == 3.5


@pytest.mark.unit
def test_validate_event_returns_build_event() -> None:
    build_event = validate_event(_event())

    assert build_event == BuildEvent(
        hex_string="0x00ff00ff",
        tile_index="123",
        block_number="4567890",
        version="1.2",
    )
    assert build_event.build_key == "123v1.2"
    assert build_event.indices_name == "buildIndicesV1.2"


@pytest.mark.unit
@pytest.mark.parametrize("version", ["0.9", "1.0", "1.1", "1.2"])
def test_validate_event_accepts_every_supported_version(version: str) -> None:
    assert validate_event(_event(version=version)).version == version


@pytest.mark.unit
def test_validate_event_accepts_tile_index_at_limit() -> None:
    assert validate_event(_event(tileIndex="1088")).tile_index == "1088"


@pytest.mark.unit
@pytest.mark.parametrize(
    "event,message",
    [
        (None, "event is invalid or missing"),
        ({}, "event is invalid or missing"),
        ("not an event", "event is invalid or missing"),
        ({"body-json": {}}, "event.params is invalid or missing"),
        (
            {"params": {"path": {}}},
            "event.params.querystring is invalid or missing",
        ),
    ],
)
def test_validate_event_rejects_bad_envelopes(event: Any, message: str) -> None:
    with pytest.raises(EventValidationError, match=message):
        validate_event(event)


@pytest.mark.unit
@pytest.mark.parametrize(
    "overrides,field",
    [
        ({"tileIndex": None}, "tileIndex"),
        ({"tileIndex": ""}, "tileIndex"),
        ({"tileIndex": "abc"}, "tileIndex"),
        ({"tileIndex": "1089"}, "tileIndex"),
        ({"tileIndex": 12}, "tileIndex"),
        ({"blockNumber": None}, "blockNumber"),
        ({"blockNumber": "  "}, "blockNumber"),
        ({"blockNumber": "12x"}, "blockNumber"),
        ({"hexString": None}, "hexString"),
        ({"hexString": ""}, "hexString"),
    ],
)
def test_validate_event_rejects_bad_fields(
    overrides: Dict[str, Any], field: str
) -> None:
    with pytest.raises(
        EventValidationError,
        match=f"event.params.querystring.{field} is invalid or missing",
    ):
        validate_event(_event(**overrides))


@pytest.mark.unit
@pytest.mark.parametrize("version", [None, "", "2.0", "1", 1.2, "v1.2"])
def test_validate_event_rejects_unknown_versions(version: Any) -> None:
    with pytest.raises(
        EventValidationError, match="Invalid or missing version parameter"
    ):
        validate_event(_event(version=version))


@pytest.mark.unit
def test_validate_event_reports_first_failure() -> None:
    event = _event(tileIndex="9999", blockNumber="nope", version="9.9")

    with pytest.raises(EventValidationError, match="tileIndex"):
        validate_event(event)


@pytest.mark.unit
def test_validation_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        validate_event({})


@pytest.mark.unit
def test_envelope_round_trips_through_validation() -> None:
    build_event = BuildEvent(
        hex_string="0xabc",
        tile_index="5",
        block_number="10",
        version="0.9",
    )

    assert validate_event(build_event.to_envelope()) == build_event
