"""In-memory TTL cache with single-flight loading, scoped to its owner.

One instance lives as long as the object that created it (for the
authorization gate: one HTTP request). Nothing is shared across scopes
and nothing is persisted.

Concurrent get_or_load calls for the same key share one in-flight future
(insert-if-absent per key); different keys never wait on each other.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Hashable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class ScopedTTLCache(Generic[K, V]):
    """TTL cache for non-None values with per-key single-flight loads."""

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize an empty cache.

        Args:
            ttl_seconds: Lifetime of each entry from the moment it is stored.
            clock: Monotonic time source (injectable for tests).
        """
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[K, tuple[float, V]] = {}
        self._inflight: dict[K, asyncio.Future[V]] = {}

    def get(self, key: K) -> V | None:
        """Return the cached value, evicting it first if expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: K, value: V) -> None:
        self._entries[key] = (self._clock() + self.ttl_seconds, value)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    async def get_or_load(self, key: K, loader: Callable[[], Awaitable[V]]) -> V:
        """Return the cached value or run loader once for every concurrent caller.

        The first caller to miss registers a future for the key and runs
        loader; later callers await that future. If the loading caller is
        cancelled, waiters start their own load instead of failing. An
        exception from loader is passed to every waiter and nothing is cached.
        """
        while True:
            value = self.get(key)
            if value is not None:
                return value
            pending = self._inflight.get(key)
            if pending is None:
                break
            try:
                return await asyncio.shield(pending)
            except asyncio.CancelledError:
                task = asyncio.current_task()
                if pending.cancelled() and (task is None or not task.cancelling()):
                    logger.debug("Loader for %r was cancelled; reloading", key)
                    continue
                raise

        future: asyncio.Future[V] = asyncio.get_running_loop().create_future()
        self._inflight[key] = future
        try:
            value = await loader()
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as e:
            future.set_exception(e)
            # Mark retrieved so an unawaited future does not log a warning.
            future.exception()
            raise
        else:
            self.set(key, value)
            future.set_result(value)
            return value
        finally:
            if self._inflight.get(key) is future:
                del self._inflight[key]
