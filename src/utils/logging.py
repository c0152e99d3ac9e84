"""Structured logging configuration for the storyboarder.

Everything goes through structlog: stdlib records from `logging.getLogger(__name__)`
are rendered by the same processor chain, tagged with the session they belong to.
"""

import logging
import re
import sys
from contextvars import ContextVar

import structlog

current_session_id: ContextVar[str | None] = ContextVar("current_session_id", default=None)

# Loggers that report every HTTP round-trip to Gemini
QUIET_LOGGERS = ("httpx", "httpcore", "google_genai", "google_genai.models", "websockets")

# Base64 image payloads longer than this are shortened in log output
MAX_INLINE_DATA = 64
_DATA_URI = re.compile(r"(data:[\w.+/-]+;base64,)([A-Za-z0-9+/=]+)")


def add_session_id(_logger, _method_name, event_dict):
    """Structlog processor tagging events with the active storyboard session."""
    session_id = current_session_id.get()
    if session_id:
        event_dict.setdefault("session_id", session_id)
    return event_dict


def _shorten_match(match: re.Match) -> str:
    prefix, payload = match.groups()
    if len(payload) <= MAX_INLINE_DATA:
        return match.group(0)
    return f"{prefix}{payload[:16]}... ({len(payload)} chars)"


def shorten_image_data(_logger, _method_name, event_dict):
    """Structlog processor shortening base64 `data:` URIs found in any string value."""
    for key, value in event_dict.items():
        if isinstance(value, str) and "data:" in value:
            event_dict[key] = _DATA_URI.sub(_shorten_match, value)
    return event_dict


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_session_id,
        shorten_image_data,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def setup_logging(log_level: str = "INFO", json_output: bool = False) -> None:
    """Configure structured logging for the API process.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_output: JSON lines when True, colored console output otherwise.
    """
    shared = _shared_processors()
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def set_session_context(session_id: str) -> None:
    """Tag subsequent log lines in this task with a session id."""
    current_session_id.set(session_id)
