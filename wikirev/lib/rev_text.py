"""Codec for revision text blobs.

A blob is a raw DEFLATE stream of a JSON object that maps revision ids to the
content recorded by that revision. Several revisions may share one blob, so
readers always select their own entry by id.
"""

from __future__ import annotations

import json
import zlib
from collections.abc import Mapping
from typing import Any

# Negative window bits: raw deflate stream, no zlib header
_WBITS = -zlib.MAX_WBITS


def serialize(record: Mapping[int | str, Any]) -> bytes:
    """Encode a ``{revision_id: content}`` mapping into a blob."""
    payload = json.dumps(
        {str(rev_id): content for rev_id, content in record.items()},
        ensure_ascii=False,
        separators=(",", ":"),
    ).encode("utf-8")
    compressor = zlib.compressobj(zlib.Z_DEFAULT_COMPRESSION, zlib.DEFLATED, _WBITS)
    return compressor.compress(payload) + compressor.flush()


def deserialize(blob: bytes) -> dict[str, Any]:
    """Decode a blob back into a mapping keyed by ``str(revision_id)``."""
    payload = zlib.decompress(blob, _WBITS)
    record = json.loads(payload.decode("utf-8"))
    if not isinstance(record, dict):
        raise ValueError("revision text must decode to an object")
    return record


def select(record: Mapping[str, Any], revision_id: int) -> Any | None:
    """Pick the content stored for ``revision_id``, or ``None``."""
    return record.get(str(revision_id))
