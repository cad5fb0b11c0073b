"""structlog configuration for shapecheck.

Two output modes:
- Human (default): console-formatted output to stderr
- JSON (``log_json``): structured JSON lines to stderr

Engine modules log through stdlib ``logging.getLogger(__name__)``; the
ProcessorFormatter installed here gives those records the same
structured fields as native structlog loggers.
"""

from __future__ import annotations

import logging
import sys

import structlog

from shapecheck.config.settings import ShapecheckSettings, get_settings


def configure_logging(
    *,
    verbose: bool | None = None,
    log_json: bool | None = None,
    settings: ShapecheckSettings | None = None,
) -> None:
    """Configure structlog processors and output routing.

    Explicit keyword arguments win over *settings* (default:
    :func:`get_settings`).

    Args:
        verbose: Enable DEBUG-level shapecheck output. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
        settings: Source of defaults for the two flags above.
    """
    settings = settings or get_settings()
    verbose = settings.verbose if verbose is None else verbose
    log_json = settings.log_json if log_json is None else log_json
    level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
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
        cache_logger_on_first_use=False,
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

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("shapecheck").setLevel(level)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
