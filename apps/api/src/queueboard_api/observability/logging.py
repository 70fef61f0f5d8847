"""Structured logging configuration using structlog.

Every module logs through the standard library; structlog renders those
records (console in debug, JSON lines otherwise) and merges the queue
context bound with :func:`bind_queue_context` into each one.
"""

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from queueboard_api.config import Settings
    from queueboard_api.domain.enums import EngineVersion

_NOISY_LOGGERS = ("asyncio", "redis", "bullmq")


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _renderer(debug: bool) -> structlog.types.Processor:
    if debug:
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def configure_logging(settings: "Settings") -> None:
    """Route stdlib logging through structlog at ``settings.log_level``."""
    structlog.configure(
        processors=[
            *_pre_chain(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    processors: list[structlog.types.Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
    ]
    if not settings.debug:
        processors.append(structlog.processors.format_exc_info)
    processors.append(_renderer(settings.debug))

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=processors,
        foreign_pre_chain=_pre_chain(),
    )

    log_level = getattr(logging, settings.log_level.upper())
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_queue_context(*, prefix: str, engine: "EngineVersion") -> None:
    """Attach the scanned prefix and engine family to every later log line."""
    structlog.contextvars.bind_contextvars(prefix=prefix, engine=engine.value)
