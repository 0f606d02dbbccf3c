"""Structured logging configuration with structlog.

Learners are children: contact details are masked and secrets dropped from
every event before it is rendered.
"""

import logging
from collections.abc import MutableMapping
from typing import Any

import structlog

from roboquest.config import Settings

_MASKED_FIELDS = frozenset({"email", "parent_email"})
_DROPPED_FIELDS = frozenset({"password", "password_hash", "access_token", "user_code", "birth_date"})


def mask_email(value: str) -> str:
    """``ada@example.com`` -> ``a***@example.com``."""
    local, sep, domain = value.partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"


def scrub_learner_data(
    _logger: Any,  # noqa: ANN401
    _method: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """structlog processor: mask emails, drop passwords, tokens, code and birth dates."""
    for key in [k for k in _DROPPED_FIELDS if k in event_dict]:
        del event_dict[key]
    for key in [k for k in _MASKED_FIELDS if k in event_dict]:
        if isinstance(event_dict[key], str):
            event_dict[key] = mask_email(event_dict[key])
    return event_dict


def setup_logging(settings: Settings) -> None:
    """Configure structlog to render JSON (production) or console output (local)."""
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if settings.log_format == "json" else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            scrub_learner_data,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(message)s")
    # uvicorn's per-request access lines duplicate the request-id-bound app logs
    logging.getLogger("uvicorn.access").setLevel(max(level, logging.WARNING))
