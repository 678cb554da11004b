"""Observability sub-package: tracing and logging."""

from tars.observability.logging import configure_logging, get_logger
from tars.observability.tracing import (
    configure_tracing,
    disable_tracing,
    get_tracer,
    traced_llm_call,
)

__all__ = [
    "configure_logging",
    "configure_tracing",
    "disable_tracing",
    "get_logger",
    "get_tracer",
    "traced_llm_call",
]
