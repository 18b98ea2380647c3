from dataclasses import dataclass
from typing import Any, Dict

from build_usher.constants import BUILD_INDICES_NAME_PREFIX


@dataclass(frozen=True)
class BuildEvent:
    """A validated request to generate and store the build for one tile.

    Field values are kept exactly as received in the query string; numeric
    coercion happens where the stored schema needs a number.
    """

    hex_string: str
    tile_index: str
    block_number: str
    version: str

    @property
    def build_key(self) -> str:
        return f"{self.tile_index}v{self.version}"

    @property
    def indices_name(self) -> str:
        return f"{BUILD_INDICES_NAME_PREFIX}{self.version}"

    def to_envelope(self) -> Dict[str, Any]:
        """Return the invocation envelope the upstream detector sends."""
        return {
            "params": {
                "querystring": {
                    "tileIndex": self.tile_index,
                    "blockNumber": self.block_number,
                    "hexString": self.hex_string,
                    "version": self.version,
                }
            }
        }

    def __repr__(self) -> str:
        return (
            f"BuildEvent(tile_index='{self.tile_index}', "
            f"block_number='{self.block_number}', "
            f"version='{self.version}', "
            f"hex_string='{self.hex_string[:16]}...')"
        )
