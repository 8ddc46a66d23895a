from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Generic, Hashable, TypeVar

from loguru import logger

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class InflightCache(Generic[K, V]):
    """
    Memoize async results per key, sharing the in-flight task between callers.

    The first caller for a key starts ``factory()`` as a task; callers arriving
    while it runs await that same task. Finished values are kept when
    ``should_cache(value)`` holds, otherwise the key is forgotten so the next
    call starts over. Exceptions are not cached.
    """

    def __init__(
        self,
        name: str,
        should_cache: Callable[[V], bool] | None = None,
    ) -> None:
        self.name = name
        self._should_cache = should_cache or (lambda _value: True)
        self._values: dict[K, V] = {}
        self._tasks: dict[K, asyncio.Task] = {}

    def __contains__(self, key: K) -> bool:
        return key in self._values

    def peek(self, key: K) -> V | None:
        return self._values.get(key)

    async def get(self, key: K, factory: Callable[[], Awaitable[V]]) -> V:
        if key in self._values:
            return self._values[key]

        task = self._tasks.get(key)
        if task is None:
            logger.trace(f"[InflightCache:{self.name}] miss {key!r}")
            task = asyncio.ensure_future(factory())
            self._tasks[key] = task
            task.add_done_callback(lambda t, k=key: self._settle(k, t))
        else:
            logger.trace(f"[InflightCache:{self.name}] joining in-flight {key!r}")

        # shield: one cancelled waiter must not cancel the shared task
        return await asyncio.shield(task)

    def _settle(self, key: K, task: asyncio.Task) -> None:
        if self._tasks.get(key) is task:
            del self._tasks[key]
        if task.cancelled() or task.exception() is not None:
            return
        value = task.result()
        if self._should_cache(value):
            self._values[key] = value
