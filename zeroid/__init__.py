"""
zeroid
──────
Stable top-level exports. Import from here, not from sub-modules directly.
Every name exported here is part of the public API and subject to semver.
"""
from zeroid.tier0_core.logging import get_logger
from zeroid.tier0_core.errors import (
    ZeroIdError,
    ValidationError,
    InvalidFormatError,
    MetadataError,
    ConfigurationError,
)
from zeroid.tier0_core.config import get_config, ZeroIdConfig
from zeroid.tier0_core.clock import Clock, ClockSequence, get_clock, set_clock

from zeroid.tier1_codec.base62 import ALPHABET
from zeroid.tier1_codec.checksum import CHECKSUM_LENGTH
from zeroid.tier1_codec.entropy import RandomSource, SystemRandomSource, SeededRandomSource
from zeroid.tier1_codec.ids import (
    TIMESTAMP_LENGTH,
    DEFAULT_RANDOM_LENGTH,
    MIN_TIMESTAMP,
    MAX_TIMESTAMP,
    constants,
    GenerateOptions,
    DecodedId,
    ZeroIdGenerator,
    generate,
    generate_at,
    generate_batch,
    zero_id,
    decode,
    is_valid,
    compare,
    extract_timestamp,
    reset_counter,
    get_generator,
    set_generator,
)
from zeroid.tier1_codec.helpers import (
    TimestampRange,
    extract_prefix,
    get_age,
    is_before,
    is_after,
    get_timestamp_range,
)
from zeroid.tier1_codec.convert import to_bytes, from_bytes, to_uuid, from_uuid

__version__ = "0.1.0"
__all__ = [
    # logging
    "get_logger",
    # errors
    "ZeroIdError", "ValidationError", "InvalidFormatError",
    "MetadataError", "ConfigurationError",
    # config
    "get_config", "ZeroIdConfig",
    # clock
    "Clock", "ClockSequence", "get_clock", "set_clock",
    # entropy
    "RandomSource", "SystemRandomSource", "SeededRandomSource",
    # constants
    "ALPHABET", "CHECKSUM_LENGTH", "TIMESTAMP_LENGTH", "DEFAULT_RANDOM_LENGTH",
    "MIN_TIMESTAMP", "MAX_TIMESTAMP", "constants",
    # ids
    "GenerateOptions", "DecodedId", "ZeroIdGenerator",
    "generate", "generate_at", "generate_batch", "zero_id",
    "decode", "is_valid", "compare", "extract_timestamp",
    "reset_counter", "get_generator", "set_generator",
    # helpers
    "TimestampRange", "extract_prefix", "get_age", "is_before", "is_after",
    "get_timestamp_range",
    # convert
    "to_bytes", "from_bytes", "to_uuid", "from_uuid",
]
