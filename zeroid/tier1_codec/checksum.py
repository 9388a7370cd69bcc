"""
zeroid.tier1_codec.checksum
────────────────────────────
Two-character integrity suffix: the sum of each core character's base62
value times its 1-based position, mod 62**2. Catches single-character
corruption and most transpositions. Not a security control.
"""
from __future__ import annotations

from zeroid.tier1_codec import base62
from zeroid.tier1_codec.base62 import BASE, CHAR_TO_INT

CHECKSUM_LENGTH = 2
_MODULUS = BASE ** CHECKSUM_LENGTH


def compute(core: str) -> str:
    total = 0
    for position, char in enumerate(core):
        digit = CHAR_TO_INT.get(char)
        if digit is None:
            raise ValueError(f"Cannot checksum non-base62 character {char!r}")
        total += digit * (position + 1)
    return base62.encode(total % _MODULUS, CHECKSUM_LENGTH)


def verify(value: str) -> bool:
    """True if the last two characters of *value* checksum the rest."""
    if len(value) < CHECKSUM_LENGTH or not base62.is_base62(value):
        return False
    core, claimed = value[:-CHECKSUM_LENGTH], value[-CHECKSUM_LENGTH:]
    return compute(core) == claimed


__all__ = ["CHECKSUM_LENGTH", "compute", "verify"]
