"""
zeroid test configuration.

Tests run against the process-wide defaults (generator, clock, config),
which are reset around every test so no state bleeds between them.
"""
from __future__ import annotations

import os

import pytest

# ── Force test settings ────────────────────────────────────────────────────
# These must be set before any zeroid modules are imported.

os.environ.setdefault("ZEROID_LOG_LEVEL", "WARNING")
os.environ.setdefault("ZEROID_LOG_FORMAT", "json")


# ── Fixtures ───────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def reset_module_singletons():
    """
    Reset the default generator's sequence, the global clock and the config
    cache between tests.
    """
    import zeroid.tier0_core.clock as _clock
    import zeroid.tier0_core.config as _config
    import zeroid.tier1_codec.ids as _ids

    orig_clock = _clock._clock
    orig_generator = _ids._generator
    _ids.reset_counter()

    yield

    _clock._clock = orig_clock
    _ids._generator = orig_generator
    _ids.reset_counter()
    _config._reset_config()


class FixedBytesSource:
    """Random source that replays a fixed byte pattern forever."""

    def __init__(self, pattern: bytes) -> None:
        self._pattern = pattern
        self._pos = 0
        self.requests: list[int] = []

    def token_bytes(self, n: int) -> bytes:
        self.requests.append(n)
        out = bytearray()
        for _ in range(n):
            out.append(self._pattern[self._pos % len(self._pattern)])
            self._pos += 1
        return bytes(out)


@pytest.fixture
def fixed_source():
    """Factory for deterministic random sources."""
    return FixedBytesSource


@pytest.fixture
def frozen_clock():
    """A Clock frozen at 2023-11-14T22:13:20Z (1700000000000 ms)."""
    from datetime import datetime, timezone

    from zeroid.tier0_core.clock import Clock

    return Clock().freeze(datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc))
