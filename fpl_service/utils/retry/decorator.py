"""Async retry decorator used for startup-time connection attempts."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from .exceptions import RetryError, RetryStatistics
from .strategies import RetryStrategy

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def retry(
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 30.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
    exceptions: tuple[type[BaseException], ...] = (Exception,),
    retry_if: Callable[[Exception], bool] | None = None,
    stop_after_delay: float | None = None,
    on_retry: Callable[[Exception, int], None] | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Retry an async callable with exponential backoff.

    Exceptions that the strategy does not consider retryable propagate
    unchanged. When attempts (or ``stop_after_delay`` seconds) run out a
    RetryError chained to the last exception is raised.

    Example:
        @retry(max_attempts=5, exceptions=(PoolTimeout,))
        async def open_pool() -> AsyncConnectionPool: ...
    """
    strategy = RetryStrategy(
        max_attempts=max_attempts,
        initial_delay=initial_delay,
        max_delay=max_delay,
        exponential_base=exponential_base,
        jitter=jitter,
        exceptions=exceptions,
        retry_if=retry_if,
        stop_after_delay=stop_after_delay,
    )

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            stats = RetryStatistics(start_time=time.monotonic())

            for attempt in range(strategy.max_attempts):
                try:
                    return await func(*args, **kwargs)
                except Exception as exc:
                    if not strategy.should_retry(exc):
                        raise

                    stats.exceptions.append(type(exc).__name__)
                    elapsed = time.monotonic() - stats.start_time
                    out_of_time = (
                        strategy.stop_after_delay is not None
                        and elapsed >= strategy.stop_after_delay
                    )
                    if out_of_time or attempt == strategy.max_attempts - 1:
                        stats.end_time = time.monotonic()
                        logger.error(
                            "Retries exhausted for %s",
                            func.__name__,
                            extra={
                                "function": func.__name__,
                                "attempts": attempt + 1,
                                "total_delay": stats.total_delay,
                                "last_exception": str(exc),
                            },
                        )
                        raise RetryError(exc, attempt + 1, stats) from exc

                    delay = strategy.calculate_delay(attempt)
                    stats.attempts += 1
                    stats.total_delay += delay
                    logger.warning(
                        "Retrying %s in %.2fs (attempt %d/%d)",
                        func.__name__,
                        delay,
                        attempt + 1,
                        strategy.max_attempts,
                        extra={"function": func.__name__, "exception": str(exc)},
                    )
                    if on_retry is not None:
                        on_retry(exc, attempt + 1)
                    await asyncio.sleep(delay)

            msg = "retry loop exited without a result"
            raise RuntimeError(msg)

        return wrapper

    return decorator
