"""
zeroid.tier1_codec.ids
───────────────────────
Assembles and decodes zeroIds:

    [prefix] timestamp(9) [metadata] random(N) [checksum(2)]

The timestamp field is ``timestamp_ms * 1000 + sequence`` in fixed-width
base62, so identifiers created in the same millisecond still sort in
creation order. Everything after the prefix and before the checksum is the
"core".

Decoding never raises: malformed input yields None. ``compare`` is the one
exception and raises InvalidFormatError, since a made-up ordering would
silently corrupt sorts.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr

from zeroid.tier0_core.clock import (
    SEQUENCE_MODULUS,
    ClockSequence,
    datetime_to_ms,
    ms_to_datetime,
)
from zeroid.tier0_core.config import get_config
from zeroid.tier0_core.errors import InvalidFormatError, ValidationError
from zeroid.tier0_core.logging import get_logger
from zeroid.tier0_core.validate import validate_input
from zeroid.tier1_codec import base62, metadata
from zeroid.tier1_codec.checksum import CHECKSUM_LENGTH
from zeroid.tier1_codec.checksum import compute as compute_checksum
from zeroid.tier1_codec.checksum import verify as verify_checksum
from zeroid.tier1_codec.entropy import RandomSource, random_chars

TIMESTAMP_LENGTH = 9
DEFAULT_RANDOM_LENGTH = 7
MIN_BODY_LENGTH = TIMESTAMP_LENGTH + 1

# 2000-01-01T00:00:00Z and 3000-01-01T00:00:00Z
MIN_TIMESTAMP = 946_684_800_000
MAX_TIMESTAMP = 32_503_680_000_000

logger = get_logger(__name__)


# ── Models ─────────────────────────────────────────────────────────────────

class GenerateOptions(BaseModel):
    """Options accepted by every generate call. Unset fields fall back to config."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    prefix: StrictStr = ""
    random_length: StrictInt = Field(
        default_factory=lambda: get_config().default_random_length, ge=1
    )
    metadata: Any = None
    checksum: StrictBool = Field(default_factory=lambda: get_config().default_checksum)


@dataclass(frozen=True)
class DecodedId:
    timestamp: int
    created_at: datetime
    sequence: int = 0
    metadata: Any = None


@dataclass(frozen=True)
class _Constants:
    TIMESTAMP_LENGTH: int = TIMESTAMP_LENGTH
    DEFAULT_RANDOM_LENGTH: int = DEFAULT_RANDOM_LENGTH
    CHECKSUM_LENGTH: int = CHECKSUM_LENGTH
    BASE62_CHARS: str = base62.ALPHABET
    MIN_TIMESTAMP: int = MIN_TIMESTAMP
    MAX_TIMESTAMP: int = MAX_TIMESTAMP


constants = _Constants()


def _options(options: dict[str, Any]) -> GenerateOptions:
    # None means "use the default"
    return validate_input(
        GenerateOptions, {k: v for k, v in options.items() if v is not None}
    )


def _to_ms(timestamp: int | datetime) -> int:
    if isinstance(timestamp, datetime):
        return datetime_to_ms(timestamp)
    if isinstance(timestamp, bool) or not isinstance(timestamp, int):
        raise ValidationError(
            user_message="timestamp must be epoch milliseconds or a datetime.",
            fields={"timestamp": f"unsupported type {type(timestamp).__name__}"},
        )
    return timestamp


def strip_prefix(value: Any, prefix: str) -> str | None:
    """The id body after *prefix*, or None for non-strings and prefix mismatches."""
    if not isinstance(value, str):
        return None
    if prefix:
        if not value.startswith(prefix):
            return None
        return value[len(prefix):]
    return value


# ── Generation ─────────────────────────────────────────────────────────────

class ZeroIdGenerator:
    """
    Generates zeroIds from its own clock sequence and random source.

    Independent generators never share sequence state. The module-level
    functions use a default instance (see get_generator()).
    """

    def __init__(
        self,
        sequence: ClockSequence | None = None,
        random_source: RandomSource | None = None,
    ) -> None:
        self.sequence = sequence or ClockSequence()
        self.random_source = random_source

    def generate(self, **options: Any) -> str:
        """
        Generate a new zeroId for the current time.

        Usage:
            generator.generate(prefix="user_", metadata={"role": "admin"})
        """
        opts = _options(options)
        tick = self.sequence.next()
        return self._assemble(tick.timestamp_ms, tick.sequence, opts)

    def generate_at(self, timestamp: int | datetime, **options: Any) -> str:
        """Generate a zeroId for an explicit time. The sequence is always 0."""
        opts = _options(options)
        timestamp_ms = _to_ms(timestamp)
        if timestamp_ms < 0:
            raise ValidationError(
                user_message="timestamp must not be before the Unix epoch.",
                fields={"timestamp": f"{timestamp_ms} < 0"},
            )
        return self._assemble(timestamp_ms, 0, opts)

    def generate_batch(self, count: int, **options: Any) -> list[str]:
        if count < 0:
            raise ValidationError(
                user_message="count must be non-negative.",
                fields={"count": f"{count} < 0"},
            )
        return [self.generate(**options) for _ in range(count)]

    def reset(self) -> None:
        """Reset the sequence state. Intended for test isolation."""
        self.sequence.reset()

    def _assemble(self, timestamp_ms: int, sequence: int, opts: GenerateOptions) -> str:
        parts = [base62.encode(timestamp_ms * SEQUENCE_MODULUS + sequence, TIMESTAMP_LENGTH)]
        if opts.metadata is not None:
            parts.append(metadata.encode(opts.metadata))
        parts.append(random_chars(opts.random_length, self.random_source))
        core = "".join(parts)
        if opts.checksum:
            core += compute_checksum(core)
        logger.debug(
            "zeroid.generated",
            timestamp_ms=timestamp_ms,
            sequence=sequence,
            has_metadata=opts.metadata is not None,
            checksum=opts.checksum,
        )
        return opts.prefix + core


# ── Decoding ───────────────────────────────────────────────────────────────

def _reject(reason: str) -> None:
    logger.debug("zeroid.decode_rejected", reason=reason)
    return None


def _decode_timestamp(field: str) -> tuple[int, int] | None:
    """(timestamp_ms, sequence) for a 9-char timestamp field, if in range."""
    encoded = base62.decode(field)
    if encoded is None:
        return _reject("bad_alphabet")
    timestamp_ms, sequence = divmod(encoded, SEQUENCE_MODULUS)
    if not MIN_TIMESTAMP <= timestamp_ms <= MAX_TIMESTAMP:
        return _reject("timestamp_out_of_range")
    return timestamp_ms, sequence


def decode(value: str, prefix: str = "", *, checksum: bool = False) -> DecodedId | None:
    """
    Decode a zeroId, or return None if it is malformed.

    A tail that does not parse as a metadata block is treated as "no
    metadata" rather than an invalid identifier.
    """
    body = strip_prefix(value, prefix)
    if body is None:
        return _reject("prefix_mismatch")
    if checksum:
        if not verify_checksum(body):
            return _reject("checksum_mismatch")
        body = body[:-CHECKSUM_LENGTH]
    if len(body) < MIN_BODY_LENGTH:
        return _reject("too_short")
    if not base62.is_base62(body):
        return _reject("bad_alphabet")

    decoded = _decode_timestamp(body[:TIMESTAMP_LENGTH])
    if decoded is None:
        return None
    timestamp_ms, sequence = decoded

    block = metadata.decode(body[TIMESTAMP_LENGTH:])
    return DecodedId(
        timestamp=timestamp_ms,
        created_at=ms_to_datetime(timestamp_ms),
        sequence=sequence,
        metadata=block.value if block is not None else None,
    )


def is_valid(value: str, prefix: str = "", *, checksum: bool = False) -> bool:
    return decode(value, prefix, checksum=checksum) is not None


def extract_timestamp(value: str, prefix: str = "") -> int | None:
    """Timestamp in epoch ms without decoding metadata or checking a checksum."""
    body = strip_prefix(value, prefix)
    if body is None or len(body) < MIN_BODY_LENGTH:
        return None
    decoded = _decode_timestamp(body[:TIMESTAMP_LENGTH])
    return decoded[0] if decoded is not None else None


def compare(a: str, b: str, prefix: str = "") -> int:
    """
    Order two zeroIds by timestamp field: -1, 0 or 1.

    The fields are compared as strings, which matches numeric order for
    equal-width base62. Raises InvalidFormatError if either id is not a
    string or is too short to hold a timestamp field.
    """
    if not isinstance(a, str) or not isinstance(b, str):
        raise InvalidFormatError(detail=f"Invalid zeroId format: {a!r} vs {b!r}")
    field_a = a.removeprefix(prefix)[:TIMESTAMP_LENGTH]
    field_b = b.removeprefix(prefix)[:TIMESTAMP_LENGTH]
    if len(field_a) < TIMESTAMP_LENGTH or len(field_b) < TIMESTAMP_LENGTH:
        raise InvalidFormatError(detail=f"Invalid zeroId format: {a!r} vs {b!r}")
    if field_a < field_b:
        return -1
    if field_a > field_b:
        return 1
    return 0


# ── Module-level singleton ─────────────────────────────────────────────────

_generator = ZeroIdGenerator()


def get_generator() -> ZeroIdGenerator:
    """Return the default generator used by the module-level functions."""
    return _generator


def set_generator(generator: ZeroIdGenerator) -> None:
    """Replace the default generator (use in tests)."""
    global _generator
    _generator = generator


def reset_counter() -> None:
    """Reset the default generator's sequence state. Intended for tests."""
    _generator.reset()


def generate(**options: Any) -> str:
    """
    Generate a zeroId.

    Options: prefix (str), random_length (int >= 1), metadata (any
    JSON-serializable value), checksum (bool).
    """
    return _generator.generate(**options)


def generate_at(timestamp: int | datetime, **options: Any) -> str:
    return _generator.generate_at(timestamp, **options)


def generate_batch(count: int, **options: Any) -> list[str]:
    return _generator.generate_batch(count, **options)


zero_id = generate


__all__ = [
    "TIMESTAMP_LENGTH",
    "DEFAULT_RANDOM_LENGTH",
    "MIN_TIMESTAMP",
    "MAX_TIMESTAMP",
    "MIN_BODY_LENGTH",
    "constants",
    "GenerateOptions",
    "DecodedId",
    "ZeroIdGenerator",
    "decode",
    "is_valid",
    "extract_timestamp",
    "compare",
    "strip_prefix",
    "get_generator",
    "set_generator",
    "reset_counter",
    "generate",
    "generate_at",
    "generate_batch",
    "zero_id",
]
