from build_usher.entities.build_event import BuildEvent
from build_usher.entities.build_indices import (
    BuildIndices,
    item_to_build_indices,
)
from build_usher.entities.build_record import (
    BuildRecord,
    item_to_build_record,
)

__all__ = [
    "BuildEvent",
    "BuildIndices",
    "BuildRecord",
    "item_to_build_indices",
    "item_to_build_record",
]
