"""
zeroid.tier1_codec.metadata
────────────────────────────
Embeds a JSON value inside an identifier as a length-prefixed base62 block:

    <3-char base62 body length><body>

The value is serialized to compact JSON, encoded as UTF-8, and every byte
becomes two base62 characters (``byte // 62`` then ``byte % 62``).
"""
from __future__ import annotations

import json
from typing import Any, NamedTuple

from zeroid.tier0_core.errors import MetadataError
from zeroid.tier1_codec import base62
from zeroid.tier1_codec.base62 import ALPHABET, BASE, CHAR_TO_INT

LENGTH_PREFIX_WIDTH = 3
MAX_BODY_LENGTH = BASE ** LENGTH_PREFIX_WIDTH - 1


class DecodedMetadata(NamedTuple):
    value: Any
    consumed: int


def serialize(value: Any) -> str:
    """Canonical compact JSON text for *value*."""
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise MetadataError(
            user_message="Metadata must be JSON-serializable.",
            detail=f"Cannot serialize metadata: {exc}",
        ) from exc


def encode(value: Any) -> str:
    payload = serialize(value).encode("utf-8")
    body = "".join(ALPHABET[b // BASE] + ALPHABET[b % BASE] for b in payload)
    if len(body) > MAX_BODY_LENGTH:
        raise MetadataError(
            user_message="Metadata is too large to embed in an identifier.",
            detail=f"Encoded metadata is {len(body)} chars; limit is {MAX_BODY_LENGTH}.",
            size=len(body),
        )
    return base62.encode(len(body), LENGTH_PREFIX_WIDTH) + body


def decode(tail: str) -> DecodedMetadata | None:
    """
    Decode a metadata block at the start of *tail*.

    Returns the value and the number of characters consumed, or None when
    *tail* does not start with a well-formed block.
    """
    if len(tail) < LENGTH_PREFIX_WIDTH:
        return None
    length = base62.decode(tail[:LENGTH_PREFIX_WIDTH])
    if length is None or len(tail) < LENGTH_PREFIX_WIDTH + length:
        return None
    if length % 2:
        return None

    body = tail[LENGTH_PREFIX_WIDTH:LENGTH_PREFIX_WIDTH + length]
    payload = bytearray()
    for i in range(0, length, 2):
        high = CHAR_TO_INT.get(body[i])
        low = CHAR_TO_INT.get(body[i + 1])
        if high is None or low is None:
            return None
        byte = high * BASE + low
        if byte > 0xFF:
            return None
        payload.append(byte)

    try:
        value = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return None
    return DecodedMetadata(value, LENGTH_PREFIX_WIDTH + length)


__all__ = [
    "LENGTH_PREFIX_WIDTH",
    "MAX_BODY_LENGTH",
    "DecodedMetadata",
    "serialize",
    "encode",
    "decode",
]
