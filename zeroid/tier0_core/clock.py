"""
zeroid.tier0_core.clock
────────────────────────
Mockable wall clock plus the monotonic (timestamp, sequence) source used to
order identifiers generated within the same millisecond.

The sequence state is process-local and never persisted. Each ClockSequence
is an independent state object, so separate generators (and tests) do not
interfere with each other.
"""
from __future__ import annotations

import threading
import time
from datetime import datetime, timedelta, timezone
from typing import Callable, NamedTuple

from zeroid.tier0_core.logging import get_logger

SEQUENCE_MODULUS = 1000

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)

logger = get_logger(__name__)


# ── Clock implementation ───────────────────────────────────────────────────

class Clock:
    """Mockable clock. Pass now_fn to control time in tests."""

    def __init__(self, now_fn: Callable[[], datetime] | None = None) -> None:
        self._now_fn = now_fn

    def now(self) -> datetime:
        """Return the current UTC datetime."""
        if self._now_fn is None:
            return datetime.now(tz=timezone.utc)
        return self._now_fn()

    def timestamp_ms(self) -> int:
        """Return the current Unix timestamp in milliseconds."""
        if self._now_fn is None:
            return time.time_ns() // 1_000_000
        return datetime_to_ms(self._now_fn())

    def freeze(self, dt: datetime) -> "Clock":
        """Return a new Clock frozen at the given datetime."""
        return Clock(now_fn=lambda: dt)


# ── Conversions ────────────────────────────────────────────────────────────

def datetime_to_ms(dt: datetime) -> int:
    """Exact epoch milliseconds for *dt*. Naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - _EPOCH) // _ONE_MS


def ms_to_datetime(ms: int) -> datetime:
    """UTC datetime for epoch milliseconds *ms*."""
    return _EPOCH + timedelta(milliseconds=ms)


# ── Module-level singleton ─────────────────────────────────────────────────

_clock = Clock()


def get_clock() -> Clock:
    """Return the global clock instance."""
    return _clock


def set_clock(clock: Clock) -> None:
    """Replace the global clock (use in tests)."""
    global _clock
    _clock = clock


# ── Monotonic sequence ─────────────────────────────────────────────────────

class Tick(NamedTuple):
    timestamp_ms: int
    sequence: int


class ClockSequence:
    """
    Produces (timestamp_ms, sequence) pairs. Within one millisecond the
    sequence counts up from 0 and wraps after 999; a new millisecond resets
    it to 0.

    When no clock is given, the global clock is read on every call, so
    set_clock() affects sequences created before it.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._last_timestamp_ms = 0
        self._counter = 0

    @property
    def state(self) -> Tick:
        return Tick(self._last_timestamp_ms, self._counter)

    def next(self) -> Tick:
        clock = self._clock or get_clock()
        with self._lock:
            current = clock.timestamp_ms()
            if current == self._last_timestamp_ms:
                self._counter = (self._counter + 1) % SEQUENCE_MODULUS
                if self._counter == 0:
                    logger.debug("zeroid.sequence_wrapped", timestamp_ms=current)
            else:
                self._last_timestamp_ms = current
                self._counter = 0
            return Tick(self._last_timestamp_ms, self._counter)

    def reset(self) -> None:
        """Return to the initial (0, 0) state. Intended for test isolation."""
        with self._lock:
            self._last_timestamp_ms = 0
            self._counter = 0


__all__ = [
    "Clock",
    "ClockSequence",
    "Tick",
    "SEQUENCE_MODULUS",
    "get_clock",
    "set_clock",
    "datetime_to_ms",
    "ms_to_datetime",
]
