"""Store-facing error types shared by the executor, repository and aggregator."""

from __future__ import annotations

from .exceptions import DataSourceError, MalformedRowError, RepositoryError

__all__ = ["DataSourceError", "MalformedRowError", "RepositoryError"]
