"""
zeroid.tier1_codec.base62
──────────────────────────
Fixed-width base62 over the ASCII-ordered alphabet ``0-9A-Za-z``. Because
the alphabet is in ASCII order, equal-width encodings sort as strings in the
same order as the integers they encode.
"""
from __future__ import annotations

import re
import string

ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase
BASE = len(ALPHABET)

# Mapping of base62 characters to their integer values
CHAR_TO_INT: dict[str, int] = {char: i for i, char in enumerate(ALPHABET)}

_BASE62_RE = re.compile(r"[0-9A-Za-z]+")


def encode(value: int, width: int) -> str:
    """
    Encode a non-negative integer as exactly *width* base62 digits,
    most-significant first and zero-padded on the left.

    Digits beyond *width* are dropped: callers must keep value < 62**width.
    """
    if value < 0:
        raise ValueError(f"base62 value must be non-negative, got {value}")
    chars = []
    for _ in range(width):
        value, remainder = divmod(value, BASE)
        chars.append(ALPHABET[remainder])
    return "".join(reversed(chars))


def decode(encoded: str) -> int | None:
    """Decode a base62 string, or return None if any character is outside the alphabet."""
    value = 0
    for char in encoded:
        digit = CHAR_TO_INT.get(char)
        if digit is None:
            return None
        value = value * BASE + digit
    return value


def is_base62(value: str) -> bool:
    """True for a non-empty string made only of alphabet characters."""
    return _BASE62_RE.fullmatch(value) is not None


__all__ = ["ALPHABET", "BASE", "CHAR_TO_INT", "encode", "decode", "is_base62"]
