from __future__ import annotations

from fpl_service.utils.retry.decorator import retry
from fpl_service.utils.retry.exceptions import RetryError, RetryStatistics
from fpl_service.utils.retry.strategies import RetryStrategy

__all__ = ["RetryError", "RetryStatistics", "RetryStrategy", "retry"]
