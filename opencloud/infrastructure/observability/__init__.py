"""Observability and logging facades."""

from .logging import (
    configure_logging,
    get_logger,
    log_context,
    log_exception,
)
from .tracing import (
    configure_tracing,
    get_trace_context,
    is_tracing_enabled,
    trace_span,
    traced,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "log_context",
    "log_exception",
    # Tracing
    "configure_tracing",
    "get_trace_context",
    "is_tracing_enabled",
    "trace_span",
    "traced",
]
