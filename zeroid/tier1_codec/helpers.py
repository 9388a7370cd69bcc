"""
zeroid.tier1_codec.helpers
───────────────────────────
Conveniences built on extract_timestamp: prefix detection, age and
before/after checks, and the timestamp range of a collection of ids.
Invalid ids never raise here; they yield None (or False for the
before/after predicates).
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Sequence

from zeroid.tier0_core.clock import datetime_to_ms, get_clock, ms_to_datetime
from zeroid.tier1_codec.ids import MIN_BODY_LENGTH, extract_timestamp

PREFIX_DELIMITER = "_"


@dataclass(frozen=True)
class TimestampRange:
    oldest: int
    newest: int
    span: int
    oldest_date: datetime
    newest_date: datetime


def _reference_ms(reference: int | datetime) -> int:
    if isinstance(reference, datetime):
        return datetime_to_ms(reference)
    return int(reference)


def extract_prefix(value: str, known_prefixes: Sequence[str] | None = None) -> str | None:
    """
    Find the prefix of *value*.

    With known_prefixes, the first entry *value* starts with wins. Otherwise
    the text up to and including the first "_" is taken, provided it is not
    at position 0 and leaves a full id body behind it.
    """
    if known_prefixes is not None:
        return next((p for p in known_prefixes if value.startswith(p)), None)

    index = value.find(PREFIX_DELIMITER)
    if index <= 0:
        return None
    prefix = value[:index + 1]
    if len(value) - len(prefix) < MIN_BODY_LENGTH:
        return None
    return prefix


def get_age(value: str, prefix: str = "", *, now: int | datetime | None = None) -> int | None:
    """Milliseconds between the id's timestamp and *now* (default: clock time)."""
    timestamp = extract_timestamp(value, prefix)
    if timestamp is None:
        return None
    current = get_clock().timestamp_ms() if now is None else _reference_ms(now)
    return current - timestamp


def is_before(value: str, reference: int | datetime, prefix: str = "") -> bool:
    timestamp = extract_timestamp(value, prefix)
    return timestamp is not None and timestamp < _reference_ms(reference)


def is_after(value: str, reference: int | datetime, prefix: str = "") -> bool:
    timestamp = extract_timestamp(value, prefix)
    return timestamp is not None and timestamp > _reference_ms(reference)


def get_timestamp_range(values: Iterable[str], prefix: str = "") -> TimestampRange | None:
    """Oldest/newest timestamps across *values*, skipping invalid ids."""
    timestamps = [
        ts for ts in (extract_timestamp(v, prefix) for v in values) if ts is not None
    ]
    if not timestamps:
        return None
    oldest, newest = min(timestamps), max(timestamps)
    return TimestampRange(
        oldest=oldest,
        newest=newest,
        span=newest - oldest,
        oldest_date=ms_to_datetime(oldest),
        newest_date=ms_to_datetime(newest),
    )


__all__ = [
    "TimestampRange",
    "extract_prefix",
    "get_age",
    "is_before",
    "is_after",
    "get_timestamp_range",
]
