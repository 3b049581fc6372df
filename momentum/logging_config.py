"""
Structured logging for Momentum, using structlog wrapping stdlib.

Every module logs through ``logging.getLogger(__name__)``; this module
routes those records through structlog so the API server, the CLI and the
tool ``main()`` entry points all print the same way: readable console
lines while developing, one JSON object per line when
``MOMENTUM_LOG_FORMAT=json``.

Settings come from ``momentum.logging`` in args/momentum.yaml, with the
environment taking precedence.

Usage:
    from momentum.logging_config import setup_logging
    setup_logging()                   # config / env defaults
    setup_logging(level="WARNING")    # CLI keeps output quiet
"""

from __future__ import annotations

import logging
import os
import sys

import structlog

from .config import get_section

DEFAULT_QUIET_LOGGERS = ("httpx", "httpcore", "anthropic", "uvicorn.access")


def _resolve_settings(level: str | None, json_output: bool | None) -> tuple[int, bool, list[str]]:
    log_config = get_section("logging")

    if level is None:
        level = os.environ.get("MOMENTUM_LOG_LEVEL") or log_config.get("level", "INFO")

    if json_output is None:
        log_format = os.environ.get("MOMENTUM_LOG_FORMAT") or log_config.get("format", "console")
        json_output = str(log_format).lower() == "json"

    quiet = log_config.get("quiet", list(DEFAULT_QUIET_LOGGERS)) or []
    return getattr(logging, str(level).upper(), logging.INFO), json_output, list(quiet)


def setup_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """
    Install the structlog formatter on the root logger.

    Args:
        level: Log level name; defaults to MOMENTUM_LOG_LEVEL, then config
        json_output: Render JSON lines; defaults to MOMENTUM_LOG_FORMAT, then config
    """
    numeric_level, json_output, quiet = _resolve_settings(level, json_output)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(numeric_level)

    for name in quiet:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))


__all__ = ["setup_logging"]
