"""Structured logging configuration for textblocks."""

from __future__ import annotations

import logging
import sys
import typing

import structlog

_HANDLER_NAME = "textblocks"


def configure_logging(
    level: int | str = logging.WARNING,
    json_format: bool = False,
) -> None:
    """Configure structured logging for command-line use.

    The library itself only emits records through ``logging.getLogger``;
    this is called by the CLI (or by applications that want the same
    output). Logs go to stderr so command output on stdout stays parseable.

    Args:
        level: Logging level (e.g., logging.DEBUG, "INFO").
        json_format: Whether to output logs in JSON format.
            If False, uses ConsoleRenderer for pretty colored output.
    """
    if isinstance(level, str):
        level = level.upper()

    shared_processors: list[typing.Callable] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    renderer = (
        structlog.processors.JSONRenderer()
        if json_format
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=shared_processors + [renderer],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Records from logging.getLogger() in the library pass through the same chain
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    # A repeated call replaces the handler added by the previous one
    for existing in list(root_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
