"""Tests for prefix/age/range helpers and the bytes/UUID representations."""
from __future__ import annotations

import re
import uuid
from datetime import datetime, timezone

from zeroid import (
    from_bytes,
    from_uuid,
    generate,
    generate_at,
    get_age,
    get_timestamp_range,
    extract_prefix,
    is_after,
    is_before,
    set_clock,
    to_bytes,
    to_uuid,
)

_UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")
_BASE62_RE = re.compile(r"^[0-9A-Za-z]+$")


# ── extract_prefix ─────────────────────────────────────────────────────────

class TestExtractPrefix:
    def test_underscore_delimited(self):
        assert extract_prefix("user_abc123def456") == "user_"
        assert extract_prefix("order_abc123def456") == "order_"
        assert extract_prefix("long_prefix_abc123def456") == "long_"

    def test_no_prefix(self):
        assert extract_prefix("abc123def456ghi") is None
        assert extract_prefix("_abc123def456") is None

    def test_remainder_too_short(self):
        assert extract_prefix("user_abc123") is None

    def test_known_prefixes(self):
        known = ["user_", "order_", "product_"]
        assert extract_prefix("user_abc123", known) == "user_"
        assert extract_prefix("order_abc123", known) == "order_"
        assert extract_prefix("unknown_abc123", known) is None

    def test_generated_id(self):
        assert extract_prefix(generate(prefix="acct_")) == "acct_"


# ── age / before / after ───────────────────────────────────────────────────

class TestAge:
    def test_against_global_clock(self, frozen_clock):
        set_clock(frozen_clock)
        assert get_age(generate_at(1_700_000_000_000 - 50)) == 50

    def test_explicit_now(self):
        value = generate_at(1_700_000_000_000, prefix="test_")
        assert get_age(value, "test_", now=1_700_000_000_250) == 250
        moment = datetime(2023, 11, 14, 22, 13, 21, tzinfo=timezone.utc)
        assert get_age(value, "test_", now=moment) == 1000

    def test_fresh_id(self):
        age = get_age(generate(prefix="test_"), "test_")
        assert age is not None
        assert 0 <= age < 1000

    def test_invalid(self):
        assert get_age("invalid") is None


class TestBeforeAfter:
    def test_datetime_reference(self, frozen_clock):
        past = generate_at(1_700_000_000_000 - 10_000)
        future = generate_at(1_700_000_000_000 + 10_000)
        reference = frozen_clock.now()
        assert is_before(past, reference)
        assert not is_before(future, reference)
        assert not is_after(past, reference)
        assert is_after(future, reference)

    def test_millisecond_reference(self):
        value = generate_at(1_700_000_000_000)
        assert is_before(value, 1_700_000_000_001)
        assert not is_before(value, 1_699_999_999_999)
        assert is_after(value, 1_699_999_999_999)
        assert not is_after(value, 1_700_000_000_001)

    def test_equal_is_neither(self):
        value = generate_at(1_700_000_000_000)
        assert not is_before(value, 1_700_000_000_000)
        assert not is_after(value, 1_700_000_000_000)

    def test_prefix(self):
        value = generate_at(1_700_000_000_000, prefix="test_")
        assert is_before(value, 1_800_000_000_000, "test_")
        assert is_after(value, 1_600_000_000_000, "test_")

    def test_invalid(self):
        now = datetime.now(tz=timezone.utc)
        assert is_before("invalid", now) is False
        assert is_after("invalid", now) is False


# ── get_timestamp_range ────────────────────────────────────────────────────

class TestTimestampRange:
    def test_range(self):
        ids = [
            generate_at(1_700_001_000_000),
            generate_at(1_700_000_000_000),
            generate_at(1_700_002_000_000),
        ]
        result = get_timestamp_range(ids)
        assert result.oldest == 1_700_000_000_000
        assert result.newest == 1_700_002_000_000
        assert result.span == 2_000_000
        assert result.oldest_date == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)
        assert result.newest_date == datetime(2023, 11, 14, 22, 46, 40, tzinfo=timezone.utc)

    def test_prefix(self):
        ids = [
            generate_at(1_700_000_000_000, prefix="test_"),
            generate_at(1_700_005_000_000, prefix="test_"),
        ]
        assert get_timestamp_range(ids, "test_").span == 5_000_000

    def test_empty(self):
        assert get_timestamp_range([]) is None

    def test_all_invalid(self):
        assert get_timestamp_range(["invalid", "also_invalid"]) is None

    def test_skips_invalid(self):
        ids = [generate_at(1_700_000_000_000), "invalid", generate_at(1_700_001_000_000)]
        result = get_timestamp_range(ids)
        assert result.oldest == 1_700_000_000_000
        assert result.newest == 1_700_001_000_000

    def test_accepts_generators(self):
        result = get_timestamp_range(generate_at(ts) for ts in (1_700_000_000_000, 1_700_000_000_001))
        assert result.span == 1


# ── bytes ──────────────────────────────────────────────────────────────────

class TestBytes:
    def test_roundtrip_default_id(self):
        value = generate()
        packed = to_bytes(value)
        assert len(packed) == 12
        assert len(packed) < len(value)
        assert from_bytes(packed) == value

    def test_prefix(self):
        value = generate(prefix="test_")
        restored = from_bytes(to_bytes(value, "test_"), "test_")
        assert restored == value

    def test_padding_for_every_tail_length(self):
        body = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
        for length in range(1, 9):
            assert from_bytes(to_bytes(body[-length:])) == body[-length:]

    def test_bit_layout(self):
        # indices 1, 2, 3, 4 -> 000001 000010 000011 000100
        assert to_bytes("1234") == bytes([0b00000100, 0b00100000, 0b11000100])
        # index 61 -> 111101, padded with 11
        assert to_bytes("z") == bytes([0b11110111])

    def test_wrong_prefix(self):
        value = generate(prefix="user_")
        assert to_bytes(value, "order_") is None
        assert to_bytes(value.removeprefix("user_"), "user_") is None
        assert to_bytes(None) is None

    def test_invalid_input(self):
        assert to_bytes("bad!") is None
        assert to_bytes("") is None
        # group 111110 is index 62, outside the alphabet
        assert from_bytes(bytes([0b11111000])) is None

    def test_end_marker(self):
        assert from_bytes(b"\xff") == ""
        assert from_bytes(b"") == ""

    def test_accepts_bytearray(self):
        value = generate()
        assert from_bytes(bytearray(to_bytes(value))) == value


# ── uuid ───────────────────────────────────────────────────────────────────

class TestUUID:
    def test_format(self):
        assert _UUID_RE.match(to_uuid(generate()))

    def test_prefix(self):
        assert _UUID_RE.match(to_uuid(generate(prefix="test_"), "test_"))

    def test_hex_layout(self):
        assert to_uuid("0000000000000000") == "00000000-0000-0000-0000-000000000000"
        assert to_uuid("z") == "3d000000-0000-0000-0000-000000000000"
        # longer bodies are truncated to 16 characters
        assert to_uuid("1" * 20) == "01010101-0101-0101-0101-010101010101"

    def test_wrong_prefix(self):
        value = generate(prefix="user_")
        assert to_uuid(value, "order_") is None
        assert to_uuid(value.removeprefix("user_"), "user_") is None

    def test_invalid_input(self):
        assert to_uuid("not valid!") is None
        assert from_uuid("not-a-uuid") is None

    def test_from_uuid(self):
        value = from_uuid("550e8400-e29b-41d4-a716-446655440000")
        assert value == "NE80eV3QhM6eN600"
        assert _BASE62_RE.match(value)

    def test_from_uuid_object_and_case(self):
        raw = "550E8400-E29B-41D4-A716-446655440000"
        assert from_uuid(uuid.UUID(raw)) == from_uuid(raw) == "NE80eV3QhM6eN600"

    def test_from_uuid_prefix(self):
        assert from_uuid("550e8400-e29b-41d4-a716-446655440000", "test_").startswith("test_")

    def test_high_bytes_collapse(self):
        # 0xfb (251 % 62 == 3) and 0x03 are distinct bytes with the same character
        assert from_uuid("fb000000-0000-0000-0000-000000000000")[0] == "3"
        assert from_uuid("03000000-0000-0000-0000-000000000000")[0] == "3"

    def test_default_length_ids_survive(self):
        value = generate()
        assert from_uuid(to_uuid(value)) == value
