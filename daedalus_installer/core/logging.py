"""
Structured logging for the installer builder.

structlog events are handed to the standard library ``daedalus_installer``
logger and rendered by one handler on it: Rich on an interactive terminal,
JSON lines elsewhere (CI, where the installer is normally built). The root
logger is left alone.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from .config import Config

LOGGER_NAME = "daedalus_installer"

# Shown by RichHandler in its own columns.
_RICH_FIELDS = ("timestamp", "level")


def _drop_rich_fields(
    logger: logging.Logger, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    for key in _RICH_FIELDS:
        event_dict.pop(key, None)
    return event_dict


def _build_handler(
    log_level: str, interactive: bool
) -> tuple[logging.Handler, list[structlog.types.Processor]]:
    if interactive:
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
            tracebacks_show_locals=log_level == "DEBUG",
        )
        renderer: list[structlog.types.Processor] = [
            _drop_rich_fields,
            structlog.dev.ConsoleRenderer(colors=False),
        ]
    else:
        handler = logging.StreamHandler(sys.stderr)
        renderer = [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    return handler, renderer


def setup_logging(config: Config | None = None) -> None:
    """Configure structured logging for the application.

    Replaces the handler a previous call installed, so calling this twice
    does not duplicate output.

    Args:
        config: Optional configuration. If None, uses INFO level.
    """
    log_level = config.log_level if config else "INFO"
    level = getattr(logging, log_level, logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    handler, renderer = _build_handler(log_level, sys.stderr.isatty())
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderer],
        )
    )

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.handlers = [handler]
    package_logger.setLevel(level)
    package_logger.propagate = False

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_context(**kwargs: object) -> None:
    """Bind context variables to all subsequent log entries of this build."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
