"""Structured logging for the facts service (structlog over stdlib logging)."""

import logging
import re
import sys
from typing import Any

import structlog

from config_models import LoggingConfig

SERVICE_NAME = "facts-today"

# Libraries whose per-request INFO lines would drown the store.* events.
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")

# The anon key is a JWT and travels as both `apikey` and a bearer token.
_REDACT_PATTERNS = [
    (re.compile(r"(eyJ[a-zA-Z0-9_-]{4})[a-zA-Z0-9_-]*\.[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+"), r"\1...REDACTED"),
    (re.compile(r"(Bearer\s+)[a-zA-Z0-9_.-]{20,}"), r"\1REDACTED"),
    (re.compile(r"(api[_-]?key['\"]?\s*[:=]\s*['\"]?)[a-zA-Z0-9_.-]{10,}"), r"\1REDACTED"),
]
_SECRET_KEYS = {"apikey", "api_key", "authorization"}


def _scrub(value: Any) -> Any:
    if isinstance(value, str):
        for pattern, replacement in _REDACT_PATTERNS:
            value = pattern.sub(replacement, value)
        return value
    if isinstance(value, dict):
        return {
            k: "REDACTED" if str(k).lower() in _SECRET_KEYS else _scrub(v) for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return type(value)(_scrub(v) for v in value)
    return value


def _redact_sensitive(_, __, event_dict: dict) -> dict:
    """Structlog processor: mask store keys and tokens, including in nested headers/params."""
    for key, value in event_dict.items():
        event_dict[key] = "REDACTED" if key.lower() in _SECRET_KEYS else _scrub(value)
    return event_dict


def _add_service(_, __, event_dict: dict) -> dict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _renderer(json_mode: bool) -> structlog.types.Processor:
    if json_mode:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def setup_logging(json_mode: bool = False, level: str = "INFO") -> None:
    """Configure structlog and route stdlib logging through the same renderer.

    Args:
        json_mode: One JSON object per line (for log shipping) instead of the
                   colored console output used in local development.
        level: Root log level name. Noisy HTTP library loggers are held at
               WARNING unless DEBUG is requested.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            [
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_service,
        _redact_sensitive,
    ]

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # foreign_pre_chain lets uvicorn/httpx records get timestamps and redaction too
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(json_mode),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)

    quiet_level = log_level if log_level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)


def setup_logging_from_config(config: LoggingConfig) -> None:
    setup_logging(json_mode=config.json_mode, level=config.level)
