"""
zeroid.tier0_core.logging
──────────────────────────
Structured logs for the codec. zeroid only emits DEBUG events (generation,
sequence wrap, decode rejections) and never logs metadata payloads.

Minimal stack: structlog (stdout JSON or console)
Configure via: ZEROID_LOG_LEVEL, ZEROID_LOG_FORMAT=json|console
"""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from zeroid.tier0_core.config import get_config

_LOGGER_NAME = "zeroid"


# ── Configuration ─────────────────────────────────────────────────────────────

def _configure_structlog() -> None:
    """
    Set up structlog and the ``zeroid`` stdlib handler, leaving anything the
    host application already configured in place.
    """
    config = get_config()
    log_level = getattr(logging, config.log_level, logging.INFO)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _redact_processor,
    ]

    if config.log_format == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    if not structlog.is_configured():
        structlog.configure(
            processors=shared_processors + [
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

    package_logger = logging.getLogger(_LOGGER_NAME)
    if package_logger.handlers:
        return

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    package_logger.addHandler(handler)
    package_logger.setLevel(log_level)


# ── Redaction processor ───────────────────────────────────────────────────────

_REDACT_KEYS = frozenset({"metadata", "payload", "secret", "token", "password"})

_REDACTED = "[REDACTED]"


def _redact_processor(
    logger: Any, method: str, event_dict: dict
) -> dict:
    """Strip metadata payloads and secrets from log records before output."""
    for key in list(event_dict.keys()):
        if key.lower() in _REDACT_KEYS:
            event_dict[key] = _REDACTED
    return event_dict


# ── Public API ────────────────────────────────────────────────────────────────

_configured = False


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Return a structured logger bound to the given name.

    Usage:
        log = get_logger(__name__)
        log.debug("zeroid.decode_rejected", reason="bad_alphabet")
    """
    global _configured
    if not _configured:
        _configure_structlog()
        _configured = True
    return structlog.get_logger(name or _LOGGER_NAME)


__all__ = ["get_logger"]
