"""Structured logging for retry decisions.

The engine logs through structlog loggers named under "parameterized_retry".
configure_logging() attaches one handler to that logger only, so a host test
runner keeps its own root logging setup.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from parameterized_retry.config import settings

PACKAGE_LOGGER = "parameterized_retry"


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag every event with the package name and version."""
    event_dict["app"] = "parameterized-retry"
    event_dict.setdefault("app_version", settings.APP_VERSION)
    return event_dict


def _renderer(environment: str) -> Processor:
    if environment.lower() == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def _shared_processors(environment: str) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
    ]
    if environment.lower() == "production":
        processors.append(structlog.processors.format_exc_info)
    return processors


def configure_logging(log_level: str | None = None, environment: str | None = None) -> None:
    """Route engine events through a single handler on the package logger.

    Args:
        log_level: Logging level name (default: settings.LOG_LEVEL); unknown
            names fall back to INFO
        environment: "production" renders JSON lines, anything else renders
            console output (default: settings.ENVIRONMENT)

    Calling it again replaces the handler instead of adding a second one.
    """
    log_level = log_level or settings.LOG_LEVEL
    environment = environment or settings.ENVIRONMENT
    level = getattr(logging, log_level.upper(), logging.INFO)
    processors = _shared_processors(environment)

    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_renderer(environment),
            foreign_pre_chain=processors,
        )
    )
    handler.setLevel(level)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=log_level,
        environment=environment,
    )
