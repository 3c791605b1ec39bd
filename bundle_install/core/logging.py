"""Structured logging via structlog.

Configures structlog once at CLI startup. All subsequent calls to
`structlog.get_logger()` (or `logging.getLogger()` via the stdlib bridge)
will use this configuration.

Renderer selection:
  debug=True : `ConsoleRenderer` for local runs.
  debug=False: `JSONRenderer` for machine-parseable logs in CI.

Level defaults to INFO, so a normal detect run prints nothing but the
fallback warning.

Logs go to stderr. stdout is reserved for the build plan when no plan path
is given.
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_structlog(debug: bool = True, level: str | int = logging.INFO) -> None:
    """Configure structlog for the process lifetime.

    level filters both structlog and stdlib records; parser diagnostics are
    logged at DEBUG and only appear when level is DEBUG.

    Calling multiple times is safe; structlog is idempotent.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    shared_processors: list = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if debug:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    # Bridge stdlib logging so the parser modules' loggers reach stderr too.
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )


def get_logger(name: str = "bundle_install"):
    return structlog.get_logger(name)
