"""Database repository exceptions.

Custom exceptions for store operations that provide better error
messages and typing than raw psycopg or pydantic exceptions.
"""
from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """Base exception for store operations.

    Carries a message plus a details mapping that is rendered into
    ``str(error)`` and forwarded to structured logs.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize repository error.

        Args:
            message: Error description
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Format error message with details."""
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class DataSourceError(RepositoryError):
    """The underlying store query failed or no connection could be acquired.

    Every caller waiting on the failed query (for example every pending
    DataLoader ``load`` in one batch) receives the same instance.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """Initialize data source error.

        Args:
            message: Error description
            operation: Name of the store operation that failed
            details: Additional context about the error
        """
        self.operation = operation
        merged = {"operation": operation} if operation else {}
        merged.update(details or {})
        super().__init__(message, details=merged)


class MalformedRowError(RepositoryError):
    """A fetched row violates the shape the domain layer relies on.

    Raised instead of silently dropping or mis-ordering data, e.g. when a
    match date cannot be parsed.

    Attributes:
        source: Name of the view or table the row came from
        row_index: Position of the offending row in the fetched row set
    """

    def __init__(
        self,
        source: str,
        row_index: int | None = None,
        reason: str | None = None,
    ):
        """Initialize malformed row error.

        Args:
            source: View/table (or logical row kind) that produced the row
            row_index: Index of the row in the result set, when known
            reason: Short description of what failed validation
        """
        self.source = source
        self.row_index = row_index
        self.reason = reason

        details: dict[str, Any] = {"source": source}
        if row_index is not None:
            details["row_index"] = row_index
        if reason:
            details["reason"] = reason
        super().__init__(f"Malformed row in {source}", details=details)


__all__ = [
    "DataSourceError",
    "MalformedRowError",
    "RepositoryError",
]
