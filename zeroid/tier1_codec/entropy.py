"""
zeroid.tier1_codec.entropy
───────────────────────────
Uniform random base62 characters by rejection sampling. Bytes >= 248 (the
largest multiple of 62 below 256) are discarded so ``byte % 62`` has no
modulo bias.

The byte source is pluggable: anything with ``token_bytes(n) -> bytes``.
"""
from __future__ import annotations

import random
import secrets
from typing import Protocol

from zeroid.tier1_codec.base62 import ALPHABET, BASE

REJECT_THRESHOLD = 256 - (256 % BASE)


class RandomSource(Protocol):
    def token_bytes(self, n: int) -> bytes: ...


class SystemRandomSource:
    """Cryptographically secure bytes from the OS (default)."""

    def token_bytes(self, n: int) -> bytes:
        return secrets.token_bytes(n)


class SeededRandomSource:
    """Reproducible bytes for tests and fixtures. Not secure."""

    def __init__(self, seed: int | str | bytes) -> None:
        self._rng = random.Random(seed)

    def token_bytes(self, n: int) -> bytes:
        return self._rng.randbytes(n)


_default_source: RandomSource = SystemRandomSource()


def random_chars(length: int, source: RandomSource | None = None) -> str:
    """Return exactly *length* random base62 characters."""
    if length <= 0:
        return ""
    src = source or _default_source
    chars: list[str] = []
    while len(chars) < length:
        for byte in src.token_bytes(length - len(chars)):
            if byte >= REJECT_THRESHOLD:
                continue
            chars.append(ALPHABET[byte % BASE])
    return "".join(chars[:length])


__all__ = [
    "RandomSource",
    "SystemRandomSource",
    "SeededRandomSource",
    "REJECT_THRESHOLD",
    "random_chars",
]
