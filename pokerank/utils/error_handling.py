"""
Retry helpers for dataset access.
"""

import asyncio
import random
from typing import Awaitable, Callable, TypeVar

from loguru import logger

T = TypeVar("T")


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 0.5,
        max_delay: float = 10.0,
        exponential_base: float = 2.0,
        jitter: bool = True,
    ):
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base
        self.jitter = jitter

    def delay_for(self, attempt: int) -> float:
        delay = min(
            self.base_delay * (self.exponential_base**attempt),
            self.max_delay,
        )
        if self.jitter:
            delay *= 0.5 + random.random() * 0.5  # 50-100% of calculated delay
        return delay


async def retry_with_backoff(
    func: Callable[[], Awaitable[T]],
    config: RetryConfig | None = None,
    exception_types: tuple = (Exception,),
    operation_name: str = "operation",
) -> T:
    """Retry a function with exponential backoff and jitter.

    Only exceptions listed in ``exception_types`` are retried; anything else
    propagates on the first occurrence. The last retryable exception is
    re-raised once ``max_attempts`` is exhausted.
    """
    config = config or RetryConfig()

    for attempt in range(config.max_attempts):
        try:
            return await func()
        except exception_types as e:
            if attempt == config.max_attempts - 1:
                logger.warning(
                    f"Failed {operation_name} after {config.max_attempts} attempts: {e}"
                )
                raise

            delay = config.delay_for(attempt)
            logger.debug(
                f"Attempt {attempt + 1} failed for {operation_name}, retrying in {delay:.2f}s: {e}"
            )
            await asyncio.sleep(delay)

    raise RuntimeError(f"Retry logic failed for {operation_name}")
