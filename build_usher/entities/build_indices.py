import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from build_usher.constants import (
    BUILD_INDICES_NAME_PREFIX,
    GLOBAL_VAR_KEY_ATTRIBUTE,
    GLOBAL_VAR_VALUE_ATTRIBUTE,
    SUPPORTED_VERSIONS,
)

Number = Union[int, float]

# Entries written by other tools are kept as stored, whatever scalar they are.
_STORED_ENTRY_TYPES = (int, float, str, type(None))


@dataclass(eq=True, unsafe_hash=False)
class BuildIndices:
    """The tile indices that have a build stored for one schema version.

    Persisted in the global vars table as ``buildIndicesV<version>`` with the
    indices JSON-encoded in ``value``, so the explorer can load the list
    without scanning every build.
    """

    version: str
    indices: List[Any] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.version not in SUPPORTED_VERSIONS:
            raise ValueError(
                f"version must be one of {sorted(SUPPORTED_VERSIONS)}"
            )
        if not isinstance(self.indices, list):
            raise ValueError("indices must be a list")
        for index in self.indices:
            if not isinstance(index, _STORED_ENTRY_TYPES):
                raise ValueError("indices must contain only JSON scalars")

    @property
    def name(self) -> str:
        return f"{BUILD_INDICES_NAME_PREFIX}{self.version}"

    @property
    def key(self) -> Dict[str, Dict[str, str]]:
        return {GLOBAL_VAR_KEY_ATTRIBUTE: {"S": self.name}}

    @property
    def value(self) -> str:
        return json.dumps(self.indices, separators=(",", ":"))

    def with_index(self, tile_index: Number) -> "BuildIndices":
        """Return a copy that also contains ``tile_index``.

        Order of first appearance is kept and duplicates already present in
        the stored list are collapsed.

        Raises:
            ValueError: If ``tile_index`` is not a number.
        """
        if isinstance(tile_index, bool) or not isinstance(
            tile_index, (int, float)
        ):
            raise ValueError("tile_index must be a number")
        merged = list(dict.fromkeys([*self.indices, tile_index]))
        return BuildIndices(version=self.version, indices=merged)

    def __contains__(self, tile_index: object) -> bool:
        return tile_index in self.indices

    def to_item(self) -> Dict[str, Dict[str, Any]]:
        return {
            **self.key,
            GLOBAL_VAR_VALUE_ATTRIBUTE: {"S": self.value},
        }

    def __repr__(self) -> str:
        return (
            f"BuildIndices(version='{self.version}', "
            f"indices=<{len(self.indices)} tiles>)"
        )


def item_to_build_indices(item: Dict[str, Any]) -> BuildIndices:
    if not {GLOBAL_VAR_KEY_ATTRIBUTE, GLOBAL_VAR_VALUE_ATTRIBUTE}.issubset(item):
        raise ValueError("Item is missing required keys")
    name = item[GLOBAL_VAR_KEY_ATTRIBUTE]["S"]
    if not name.startswith(BUILD_INDICES_NAME_PREFIX):
        raise ValueError(f"Item '{name}' is not a build index")
    try:
        indices = json.loads(item[GLOBAL_VAR_VALUE_ATTRIBUTE]["S"])
    except json.JSONDecodeError as exc:
        raise ValueError(f"Item '{name}' does not hold a JSON array") from exc
    if not isinstance(indices, list):
        raise ValueError(f"Item '{name}' does not hold a JSON array")
    return BuildIndices(
        version=name[len(BUILD_INDICES_NAME_PREFIX) :],
        indices=indices,
    )
