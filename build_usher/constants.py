"""
Constants shared by the build usher: accepted schema versions, tile bounds
and the DynamoDB attribute names used by existing readers of the tables.
"""

from enum import Enum


class SchemaVersion(str, Enum):
    """Geometry schema versions accepted by the geometry service."""

    V0_9 = "0.9"
    V1_0 = "1.0"
    V1_1 = "1.1"
    V1_2 = "1.2"


SUPPORTED_VERSIONS = frozenset(v.value for v in SchemaVersion)

MAX_TILE_INDEX = 1088

# Compressed builds longer than this are stored across two records
DEFAULT_SPLIT_THRESHOLD = 300_000

SECOND_PART_SUFFIX = "_2"

# Builds table
BUILD_KEY_ATTRIBUTE = "tileIndexAndVersion"

# Global vars table
GLOBAL_VAR_KEY_ATTRIBUTE = "name"
GLOBAL_VAR_VALUE_ATTRIBUTE = "value"
BUILD_INDICES_NAME_PREFIX = "buildIndicesV"
