"""Structured log output for dynamic_forms.

Sections and forms log through ordinary ``logging.getLogger(__name__)``
loggers and stay silent until an application opts in. ``configure_logging``
renders those records with structlog, as console lines or JSON lines.
"""

import logging
import sys
from typing import List, Optional, TextIO

import structlog

PACKAGE_LOGGER = "dynamic_forms"


def _record_processors() -> List[structlog.types.Processor]:
    """Processors applied to every record, ours or a third party's"""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _build_handler(stream: TextIO, log_json: bool) -> logging.Handler:
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    handler = logging.StreamHandler(stream)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_record_processors(),
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    ))
    return handler


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """Route dynamic_forms records through structlog.

    Args:
        verbose: Show DEBUG records for every section and form mutation.
            Otherwise only WARNING and above get through.
        log_json: One JSON object per line instead of console formatting.
        stream: Where to write. Defaults to stderr.

    Calling it again replaces the previous handler instead of adding one.
    """
    structlog.configure(
        processors=[*_record_processors(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_build_handler(stream or sys.stderr, log_json))
    root.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
