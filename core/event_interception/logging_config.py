"""
Logging helpers for applications using event interception.

The package logs through module loggers under ``event_interception``
(registration and discovery at DEBUG, duplicate registrations and dropped
re-entrant interceptions at WARNING). configure_logging() gives that logger
tree its own handler without touching the root logger, and
log_intercepted_events() turns an interceptor into an audit trail.

Environment Variables:
    EVENT_INTERCEPTOR_LOG_LEVEL: Level used when none is passed (default: WARNING)

Example:
    from event_interception import EventInterceptor, configure_logging, log_intercepted_events

    configure_logging("DEBUG")
    interceptor = EventInterceptor()
    log_intercepted_events(interceptor)
    interceptor.initialize(document)
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from event_interception.exceptions import ConfigurationError

if TYPE_CHECKING:
    from event_interception.events import InterceptionEvent
    from event_interception.interceptor import EventInterceptor

PACKAGE_LOGGER = "event_interception"
AUDIT_LOGGER = f"{PACKAGE_LOGGER}.audit"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Marks handlers installed by configure_logging so a second call replaces them.
_HANDLER_FLAG = "_event_interception_handler"


def resolve_level(level: str | int | None) -> int:
    """Turn a level name or number into a logging level.

    None reads EVENT_INTERCEPTOR_LOG_LEVEL, defaulting to WARNING.

    Raises:
        ConfigurationError: If the name is not a logging level
    """
    if level is None:
        level = os.environ.get("EVENT_INTERCEPTOR_LOG_LEVEL", "WARNING")
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric, int):
        raise ConfigurationError(f"Unknown log level: {level!r}", details={"level": level})
    return numeric


def configure_logging(
    level: str | int | None = None,
    log_file: Path | None = None,
    format_string: str = DEFAULT_FORMAT,
) -> list[logging.Handler]:
    """Attach handlers to the package logger.

    Handlers from an earlier call are closed and replaced, so calling this
    repeatedly never duplicates output. Records still propagate to the root
    logger; the application's own logging setup is left alone.

    Args:
        level: Level name or number, see resolve_level()
        log_file: Also write to this file, creating parent directories
        format_string: Format for every installed handler

    Returns:
        The handlers that were installed
    """
    numeric_level = resolve_level(level)
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in list(package_logger.handlers):
        if getattr(handler, _HANDLER_FLAG, False):
            package_logger.removeHandler(handler)
            handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    formatter = logging.Formatter(format_string)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(numeric_level)
        setattr(handler, _HANDLER_FLAG, True)
        package_logger.addHandler(handler)

    package_logger.setLevel(numeric_level)
    return handlers


def disable_logging() -> None:
    """Silence every package logger, including the audit logger."""
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.CRITICAL + 1)


def log_intercepted_events(
    interceptor: EventInterceptor,
    level: str | int = logging.INFO,
    logger: logging.Logger | None = None,
) -> Callable[[InterceptionEvent], None]:
    """Log one line for every event the interceptor reports.

    Args:
        interceptor: Interceptor to listen to
        level: Level of the audit records
        logger: Destination, defaults to the ``event_interception.audit`` logger

    Returns:
        The attached handler, for detach_event_handler()
    """
    numeric_level = resolve_level(level)
    audit_logger = logger or logging.getLogger(AUDIT_LOGGER)

    def audit(event: InterceptionEvent) -> None:
        source = getattr(event.intercepted_event, "sender", None)
        audit_logger.log(
            numeric_level,
            "Intercepted %s from %s",
            event.intercepted_event_name,
            type(source).__name__ if source is not None else "unknown sender",
        )

    interceptor.attach_event_handler(interceptor.INTERCEPTED_EVENT, audit)
    return audit
