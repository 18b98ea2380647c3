"""
Compression of geometry documents for storage.

Builds are stored as zlib-deflated JSON in a *binary string*: every byte of
the compressed stream becomes one character (latin-1). This is the same
representation the map explorer inflates on the client, so the payload can
be split and re-joined on character boundaries without corrupting it.
"""

import json
import logging
import zlib
from typing import Any, Dict, List

from build_usher.constants import DEFAULT_SPLIT_THRESHOLD

logger = logging.getLogger(__name__)

_BINARY_STRING_ENCODING = "latin-1"


def compress_build(document: Any) -> str:
    """Serialize ``document`` to compact JSON and deflate it.

    Returns:
        str: The compressed stream as a binary string.
    """
    serialized = json.dumps(document, separators=(",", ":"))
    compressed = zlib.compress(serialized.encode("utf-8"))
    return compressed.decode(_BINARY_STRING_ENCODING)


def decompress_build(payload: str) -> Dict[str, Any]:
    """Inflate a binary string produced by :func:`compress_build`."""
    raw = zlib.decompress(payload.encode(_BINARY_STRING_ENCODING))
    return json.loads(raw.decode("utf-8"))


def split_payload(
    compressed: str, threshold: int = DEFAULT_SPLIT_THRESHOLD
) -> List[str]:
    """Split a compressed build into the parts stored as separate records.

    A payload no longer than ``threshold`` is returned whole. Anything longer
    is cut once: the first ``threshold`` characters, then the remainder.

    Raises:
        ValueError: If ``threshold`` is not positive.
    """
    if threshold < 1:
        raise ValueError("threshold must be a positive integer")
    if len(compressed) <= threshold:
        return [compressed]

    head, tail = compressed[:threshold], compressed[threshold:]
    if len(tail) > threshold:
        logger.warning(
            "Second build part is %d characters, over the %d threshold",
            len(tail),
            threshold,
        )
    return [head, tail]
