"""Request-scoped logging context.

Fields stored here (request_id, operation name, ...) are copied onto every
log record by ContextInjectingFilter, so call sites never pass them
explicitly. Storage is a ContextVar, which keeps concurrent requests apart.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any

_log_context: ContextVar[dict[str, Any] | None] = ContextVar("log_context", default=None)


def set_log_context(**kwargs: Any) -> None:
    """Add fields to the logging context of the current task.

    Example:
        set_log_context(request_id="abc-123")
        logger.info("Resolving players")  # record carries request_id
    """
    current = dict(_log_context.get() or {})
    current.update(kwargs)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Return a copy of the current logging context."""
    return dict(_log_context.get() or {})


def clear_log_context() -> None:
    """Drop every field from the current logging context."""
    _log_context.set(None)


def remove_from_log_context(*keys: str) -> None:
    """Remove the given keys from the current logging context."""
    current = dict(_log_context.get() or {})
    for key in keys:
        current.pop(key, None)
    _log_context.set(current)


class ContextInjectingFilter(logging.Filter):
    """Copy the current logging context onto each record.

    Attached to the root logger by configure_logging(). Attributes already
    present on the record (for example passed via ``extra=``) win.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in (_log_context.get() or {}).items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
