from dataclasses import dataclass
from typing import Any, Dict, Generator, Tuple, Union

from build_usher.constants import (
    BUILD_KEY_ATTRIBUTE,
    SECOND_PART_SUFFIX,
    SUPPORTED_VERSIONS,
)


@dataclass(eq=True, unsafe_hash=False)
class BuildRecord:
    """One stored part of a compressed tile build.

    A build whose compressed payload exceeds the split threshold is stored as
    two records: part 1 under ``<tileIndex>v<version>`` and part 2 under the
    same key suffixed ``_2``.
    """

    tile_index: str
    version: str
    block_number: Union[int, float]
    build: str
    hex_string: str
    part: int = 1

    def __post_init__(self) -> None:
        if not isinstance(self.tile_index, str) or not self.tile_index:
            raise ValueError("tile_index must be a non-empty string")
        if self.version not in SUPPORTED_VERSIONS:
            raise ValueError(
                f"version must be one of {sorted(SUPPORTED_VERSIONS)}"
            )
        if isinstance(self.block_number, bool) or not isinstance(
            self.block_number, (int, float)
        ):
            raise ValueError("block_number must be a number")
        if not isinstance(self.build, str):
            raise ValueError("build must be a string")
        if not isinstance(self.hex_string, str) or not self.hex_string:
            raise ValueError("hex_string must be a non-empty string")
        if self.part not in (1, 2):
            raise ValueError("part must be 1 or 2")

    @property
    def key(self) -> Dict[str, Dict[str, str]]:
        key = f"{self.tile_index}v{self.version}"
        if self.part == 2:
            key += SECOND_PART_SUFFIX
        return {BUILD_KEY_ATTRIBUTE: {"S": key}}

    def to_item(self) -> Dict[str, Dict[str, Any]]:
        return {
            **self.key,
            "blockNumber": {"N": str(self.block_number)},
            "build": {"S": self.build},
            "tileIndex": {"S": self.tile_index},
            "version": {"S": self.version},
            "hexString": {"S": self.hex_string},
        }

    def __iter__(self) -> Generator[Tuple[str, Any], None, None]:
        yield "tile_index", self.tile_index
        yield "version", self.version
        yield "block_number", self.block_number
        yield "build", self.build
        yield "hex_string", self.hex_string
        yield "part", self.part

    def __repr__(self) -> str:
        return (
            f"BuildRecord(tile_index='{self.tile_index}', "
            f"version='{self.version}', "
            f"block_number={self.block_number}, "
            f"part={self.part}, "
            f"build=<{len(self.build)} chars>)"
        )


def _parse_number(value: str) -> Union[int, float]:
    number = float(value)
    return int(number) if number.is_integer() else number


def item_to_build_record(item: Dict[str, Any]) -> BuildRecord:
    required = {
        BUILD_KEY_ATTRIBUTE,
        "blockNumber",
        "build",
        "tileIndex",
        "version",
        "hexString",
    }
    if not required.issubset(item):
        missing = required - set(item)
        raise ValueError(f"Item is missing required keys: {missing}")
    key = item[BUILD_KEY_ATTRIBUTE]["S"]
    return BuildRecord(
        tile_index=item["tileIndex"]["S"],
        version=item["version"]["S"],
        block_number=_parse_number(item["blockNumber"]["N"]),
        build=item["build"]["S"],
        hex_string=item["hexString"]["S"],
        part=2 if key.endswith(SECOND_PART_SUFFIX) else 1,
    )
