"""Logging setup for tars.

Modules log through ``logging.getLogger(__name__)``; this module decides how
those records are rendered. With structlog installed they go through its
``ProcessorFormatter`` (JSON or console), so ``extra=`` fields such as token
counts become keys of the event.
"""

from __future__ import annotations

import logging
from typing import Any

LOGGER_NAME = "tars"

_CONFIGURED = False

# ── Optional structlog import ───────────────────────────────────
try:
    import structlog
    from structlog.contextvars import merge_contextvars

    HAS_STRUCTLOG = True
except ImportError:
    HAS_STRUCTLOG = False


def configure_logging(
    level: str = "INFO",
    fmt: str = "json",
) -> None:
    """Attach a handler to the ``tars`` logger. Only the first call has effect.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR). Unknown names mean INFO.
        fmt: "json" or "console"; ignored without structlog.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return
    _CONFIGURED = True

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    handler = logging.StreamHandler()
    if HAS_STRUCTLOG:
        handler.setFormatter(_structlog_formatter(fmt))
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(numeric_level)
    package_logger.propagate = False


def _structlog_formatter(fmt: str) -> logging.Formatter:
    pre_chain: list[Any] = [
        merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if fmt == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=pre_chain,
    )


def get_logger(name: str) -> Any:
    """Return a structlog BoundLogger when available, otherwise a stdlib logger."""
    if HAS_STRUCTLOG:
        return structlog.get_logger(name)
    return logging.getLogger(name)
