"""
zeroid.tier1_codec.convert
───────────────────────────
Alternative representations of a zeroId body (the part after the prefix).

Bytes: each character's alphabet index (0-61) fits in 6 bits; indices are
packed MSB-first, so every 4 characters take 3 bytes. The last byte is
padded with 1-bits, and an all-ones 6-bit group (63) marks the end.

UUID: each character's index is written as two hex digits, padded or
truncated to 32 digits and laid out as 8-4-4-4-12. This is cosmetic and
one-way: from_uuid maps each hex byte through ``% 62`` and does not invert
to_uuid.
"""
from __future__ import annotations

import uuid

from zeroid.tier1_codec import base62
from zeroid.tier1_codec.base62 import ALPHABET, CHAR_TO_INT
from zeroid.tier1_codec.ids import strip_prefix

_BITS = 6
_GROUP_MASK = (1 << _BITS) - 1
_END_MARKER = _GROUP_MASK
_UUID_HEX_LENGTH = 32


# ── Bytes ──────────────────────────────────────────────────────────────────

def to_bytes(value: str, prefix: str = "") -> bytes | None:
    """Pack the id body into bytes, or None if it is not base62 or lacks *prefix*."""
    body = strip_prefix(value, prefix)
    if body is None or not base62.is_base62(body):
        return None

    out = bytearray()
    bits = 0
    nbits = 0
    for char in body:
        bits = (bits << _BITS) | CHAR_TO_INT[char]
        nbits += _BITS
        while nbits >= 8:
            nbits -= 8
            out.append((bits >> nbits) & 0xFF)
        bits &= (1 << nbits) - 1
    if nbits:
        pad = 8 - nbits
        out.append(((bits << pad) | ((1 << pad) - 1)) & 0xFF)
    return bytes(out)


def from_bytes(data: bytes | bytearray | memoryview, prefix: str = "") -> str | None:
    """Unpack bytes produced by to_bytes, or None if they hold a non-alphabet index."""
    chars: list[str] = []
    bits = 0
    nbits = 0
    for byte in bytes(data):
        bits = (bits << 8) | byte
        nbits += 8
        while nbits >= _BITS:
            nbits -= _BITS
            index = (bits >> nbits) & _GROUP_MASK
            if index == _END_MARKER:
                return prefix + "".join(chars)
            if index >= len(ALPHABET):
                return None
            chars.append(ALPHABET[index])
        bits &= (1 << nbits) - 1
    return prefix + "".join(chars)


# ── UUID ───────────────────────────────────────────────────────────────────

def to_uuid(value: str, prefix: str = "") -> str | None:
    body = strip_prefix(value, prefix)
    if body is None or not base62.is_base62(body):
        return None
    hex_digits = "".join(f"{CHAR_TO_INT[char]:02x}" for char in body)
    hex_digits = hex_digits[:_UUID_HEX_LENGTH].ljust(_UUID_HEX_LENGTH, "0")
    return str(uuid.UUID(hex=hex_digits))


def from_uuid(value: str | uuid.UUID, prefix: str = "") -> str | None:
    """Map a UUID to a 16-character base62 body. Not the inverse of to_uuid."""
    try:
        hex_digits = value.hex if isinstance(value, uuid.UUID) else uuid.UUID(value).hex
    except (TypeError, ValueError, AttributeError):
        return None
    body = "".join(
        ALPHABET[int(hex_digits[i:i + 2], 16) % len(ALPHABET)]
        for i in range(0, _UUID_HEX_LENGTH, 2)
    )
    return prefix + body


__all__ = ["to_bytes", "from_bytes", "to_uuid", "from_uuid"]
