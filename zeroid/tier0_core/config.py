"""
zeroid.tier0_core.config
─────────────────────────
Typed configuration with env layering. Reads from .env → environment
variables. All fields are typed via Pydantic; invalid values raise
ConfigurationError the first time the config is loaded.

Configure via: ZEROID_DEFAULT_RANDOM_LENGTH, ZEROID_DEFAULT_CHECKSUM,
               ZEROID_LOG_LEVEL, ZEROID_LOG_FORMAT=json|console
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from zeroid.tier0_core.errors import ConfigurationError

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
_LOG_FORMATS = frozenset({"json", "console"})


class ZeroIdConfig(BaseSettings):
    """
    Library-wide defaults. Explicit generation options always win over
    these values.
    """

    model_config = SettingsConfigDict(
        env_prefix="ZEROID_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Generation ────────────────────────────────────────────────────────────
    default_random_length: int = Field(default=7, ge=1)
    default_checksum: bool = False

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {v!r}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in _LOG_FORMATS:
            raise ValueError(f"log_format must be one of {sorted(_LOG_FORMATS)}, got {v!r}")
        return v.lower()


@lru_cache(maxsize=1)
def get_config() -> ZeroIdConfig:
    """
    Return the singleton zeroid config. Cached after first call.
    Call _reset_config() in tests to pick up new env vars.
    """
    try:
        return ZeroIdConfig()
    except PydanticValidationError as exc:
        fields = {
            ".".join(str(loc) for loc in err["loc"]): err["msg"]
            for err in exc.errors()
        }
        raise ConfigurationError(
            user_message="Invalid zeroid configuration.",
            detail=f"Invalid zeroid configuration: {fields}",
            fields=fields,
        ) from exc


def _reset_config() -> None:
    """For tests: clear the config cache."""
    get_config.cache_clear()


__all__ = ["ZeroIdConfig", "get_config"]
