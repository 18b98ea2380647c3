"""Stores Etheria tile builds generated from on-chain hex strings."""

__version__ = "0.1.0"

from build_usher.compression import (
    compress_build,
    decompress_build,
    split_payload,
)
from build_usher.config import UsherConfig, get_config
from build_usher.data.dynamo_client import DynamoClient
from build_usher.entities import BuildEvent, BuildIndices, BuildRecord
from build_usher.geometry import GeometryClient
from build_usher.usher import BuildUsher
from build_usher.validation import is_numeric, validate_event

__all__ = [
    "BuildEvent",
    "BuildIndices",
    "BuildRecord",
    "BuildUsher",
    "DynamoClient",
    "GeometryClient",
    "UsherConfig",
    "compress_build",
    "decompress_build",
    "get_config",
    "is_numeric",
    "split_payload",
    "validate_event",
]
