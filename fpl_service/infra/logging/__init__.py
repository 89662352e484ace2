"""Logging infrastructure.

Structured JSON Lines logs with request context injection and
OpenTelemetry trace correlation.

Usage:
    import logging
    from fpl_service.infra.logging import set_log_context

    logger = logging.getLogger(__name__)
    set_log_context(request_id="abc-123")
    logger.info("Resolving teams")  # includes request_id
"""

from fpl_service.infra.logging.config import configure_logging, setup_logging, shutdown
from fpl_service.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)
from fpl_service.infra.logging.formatters import JSONFormatter

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "clear_log_context",
    "configure_logging",
    "get_log_context",
    "remove_from_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
