"""
zeroid.tier0_core.errors
─────────────────────────
Error taxonomy for the zeroid codec. Decoding malformed identifiers never
raises (callers get ``None``); these errors cover caller mistakes on the
generation side, misconfiguration, and the one hard failure of ``compare``.
"""
from __future__ import annotations

from typing import Any


# ── Base error ────────────────────────────────────────────────────────────────

class ZeroIdError(Exception):
    """
    Base class for all zeroid errors. Every error has:
    - code: stable machine-readable string (snake_case)
    - user_message: safe to surface to end users
    - detail: internal context, never shown to users
    """

    code: str = "zeroid_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "An unexpected zeroid error occurred.",
        detail: str | None = None,
        **metadata: Any,
    ) -> None:
        self.code = code or self.__class__.code
        self.user_message = user_message
        self.detail = detail or user_message
        self.metadata = metadata
        super().__init__(self.detail)


# ── Typed error classes ───────────────────────────────────────────────────────

class ValidationError(ZeroIdError, ValueError):
    """Generation options failed validation."""
    code = "validation_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "Validation failed.",
        fields: dict | None = None,
        **metadata: Any,
    ) -> None:
        self.fields = fields or {}
        super().__init__(code, user_message, **metadata)


class InvalidFormatError(ZeroIdError, ValueError):
    """An identifier is not a string or is too short to carry a timestamp field."""
    code = "invalid_format"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "Invalid zeroId format",
        **metadata: Any,
    ) -> None:
        super().__init__(code, user_message, **metadata)


class MetadataError(ZeroIdError, ValueError):
    """Metadata cannot be serialized or does not fit in the length prefix."""
    code = "metadata_error"


class ConfigurationError(ZeroIdError):
    """Misconfiguration detected while loading settings."""
    code = "configuration_error"


__all__ = [
    "ZeroIdError",
    "ValidationError",
    "InvalidFormatError",
    "MetadataError",
    "ConfigurationError",
]
