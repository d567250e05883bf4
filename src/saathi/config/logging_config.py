"""
Saathi Logging Configuration

structlog on top of the stdlib logging module. Every entry carries the
service name, version, environment and, inside a request, the
correlation id.

PRIVACY: Transcripts are sensitive health disclosures. Keys that
carry transcript text are dropped before rendering, and credential
keys are masked. Log lengths, scores and labels instead.
"""

import logging
import sys
from typing import Any, Callable

import structlog

from saathi import __version__
from saathi.config.settings import Settings

EventDict = dict[str, Any]
Processor = Callable[[Any, str, EventDict], EventDict]

# Substrings of keys whose values are masked
SECRET_KEY_MARKERS: frozenset[str] = frozenset({
    "api_key",
    "apikey",
    "authorization",
    "bearer",
    "credential",
    "password",
    "secret",
    "token",
})

# Keys removed outright; transcript text must not reach any sink
TRANSCRIPT_KEYS: frozenset[str] = frozenset({
    "transcript",
    "transcript_text",
    "user_message",
    "prompt",
})

QUIET_LOGGERS: tuple[str, ...] = (
    "uvicorn.access",
    "httpx",
    "httpcore",
    "openai",
    "google",
)


def _mask(key: str, value: Any) -> Any:
    lowered = key.lower()
    if any(marker in lowered for marker in SECRET_KEY_MARKERS):
        return "[REDACTED]"
    if isinstance(value, dict):
        return {k: _mask(k, v) for k, v in value.items()}
    if isinstance(value, list):
        return [_mask(key, item) for item in value]
    return value


def drop_transcript_text(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Remove transcript-bearing keys from the event."""
    for key in TRANSCRIPT_KEYS.intersection(event_dict):
        del event_dict[key]
    return event_dict


def mask_secrets(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask credential-like keys, recursing into nested values."""
    return {key: _mask(key, value) for key, value in event_dict.items()}


def service_context(env: str) -> Processor:
    """Processor stamping service, version and environment."""
    def _stamp(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", "saathi-risk-classifier")
        event_dict.setdefault("version", __version__)
        event_dict.setdefault("env", env)
        return event_dict
    return _stamp


def build_processors(settings: Settings) -> list[Processor]:
    """
    Processor chain for the configured environment.

    Development renders coloured console lines; every other
    environment renders one JSON object per line.
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        drop_transcript_text,
        mask_secrets,
        service_context(settings.env),
    ]

    if settings.env == "development":
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    else:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())

    return processors


def configure_logging(settings: Settings) -> None:
    """Configure structlog and the root logger once at startup."""
    level = getattr(logging, settings.log_level.upper())

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=build_processors(settings),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_correlation_id(correlation_id: str) -> None:
    """Attach a request correlation id to every entry in this context."""
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
