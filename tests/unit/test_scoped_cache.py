"""Tests for ScopedTTLCache (TTL expiry and single-flight loading)."""

import asyncio

import pytest

from app.infrastructure.cache import ScopedTTLCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_entry_expires_after_ttl() -> None:
    clock = FakeClock()
    cache: ScopedTTLCache[str, int] = ScopedTTLCache(10, clock=clock)
    cache.set("a", 1)
    clock.now = 9.9
    assert cache.get("a") == 1
    clock.now = 10.0
    assert cache.get("a") is None
    assert len(cache) == 0


def test_ttl_must_be_positive() -> None:
    with pytest.raises(ValueError):
        ScopedTTLCache(0)


async def test_get_or_load_caches_value() -> None:
    cache: ScopedTTLCache[str, int] = ScopedTTLCache(10)
    calls = 0

    async def loader() -> int:
        nonlocal calls
        calls += 1
        return 5

    assert await cache.get_or_load("k", loader) == 5
    assert await cache.get_or_load("k", loader) == 5
    assert calls == 1


async def test_reload_after_expiry() -> None:
    clock = FakeClock()
    cache: ScopedTTLCache[str, int] = ScopedTTLCache(1, clock=clock)
    values = iter([1, 2])

    async def loader() -> int:
        return next(values)

    assert await cache.get_or_load("k", loader) == 1
    clock.now = 5
    assert await cache.get_or_load("k", loader) == 2


async def test_concurrent_callers_share_one_load() -> None:
    """N concurrent misses for one key run the loader exactly once."""
    cache: ScopedTTLCache[str, int] = ScopedTTLCache(10)
    release = asyncio.Event()
    calls = 0

    async def loader() -> int:
        nonlocal calls
        calls += 1
        await release.wait()
        return 42

    tasks = [asyncio.create_task(cache.get_or_load("k", loader)) for _ in range(10)]
    await asyncio.sleep(0)
    release.set()
    assert await asyncio.gather(*tasks) == [42] * 10
    assert calls == 1


async def test_distinct_keys_load_independently() -> None:
    """A slow key does not block a different key."""
    cache: ScopedTTLCache[str, str] = ScopedTTLCache(10)
    slow_release = asyncio.Event()

    async def slow() -> str:
        await slow_release.wait()
        return "slow"

    async def fast() -> str:
        return "fast"

    slow_task = asyncio.create_task(cache.get_or_load("a", slow))
    await asyncio.sleep(0)
    assert await cache.get_or_load("b", fast) == "fast"
    assert not slow_task.done()
    slow_release.set()
    assert await slow_task == "slow"


async def test_loader_error_reaches_waiters_and_is_not_cached() -> None:
    cache: ScopedTTLCache[str, int] = ScopedTTLCache(10)
    release = asyncio.Event()

    async def failing() -> int:
        await release.wait()
        raise RuntimeError("boom")

    tasks = [asyncio.create_task(cache.get_or_load("k", failing)) for _ in range(3)]
    await asyncio.sleep(0)
    release.set()
    results = await asyncio.gather(*tasks, return_exceptions=True)
    assert all(isinstance(r, RuntimeError) for r in results)
    assert cache.get("k") is None

    async def ok() -> int:
        return 1

    assert await cache.get_or_load("k", ok) == 1


async def test_cancelled_leader_lets_waiter_reload() -> None:
    """Cancelling the loading caller does not fail the other callers."""
    cache: ScopedTTLCache[str, int] = ScopedTTLCache(10)
    never = asyncio.Event()

    async def hangs() -> int:
        await never.wait()
        return 0

    async def works() -> int:
        return 7

    leader = asyncio.create_task(cache.get_or_load("k", hangs))
    await asyncio.sleep(0)
    waiter = asyncio.create_task(cache.get_or_load("k", works))
    await asyncio.sleep(0)
    leader.cancel()
    with pytest.raises(asyncio.CancelledError):
        await leader
    assert await waiter == 7


async def test_cancelled_waiter_propagates_cancellation() -> None:
    cache: ScopedTTLCache[str, int] = ScopedTTLCache(10)
    release = asyncio.Event()

    async def loader() -> int:
        await release.wait()
        return 3

    leader = asyncio.create_task(cache.get_or_load("k", loader))
    await asyncio.sleep(0)
    waiter = asyncio.create_task(cache.get_or_load("k", loader))
    await asyncio.sleep(0)
    waiter.cancel()
    with pytest.raises(asyncio.CancelledError):
        await waiter
    release.set()
    assert await leader == 3
