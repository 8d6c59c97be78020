from __future__ import annotations

import asyncio

import pytest

from infrastructure.cache import ResultCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class CountingProducer:
    def __init__(self, value="v") -> None:
        self.value = value
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        return f"{self.value}{self.calls}"


def test_value_is_reused_within_ttl() -> None:
    clock = FakeClock()
    cache = ResultCache(clock=clock)
    producer = CountingProducer()

    async def run():
        first = await cache.get_or_compute("k", 10, producer)
        clock.now = 9.9
        second = await cache.get_or_compute("k", 10, producer)
        return first, second

    first, second = asyncio.run(run())

    assert first == second == "v1"
    assert producer.calls == 1


def test_expired_entry_is_recomputed() -> None:
    clock = FakeClock()
    cache = ResultCache(clock=clock)
    producer = CountingProducer()

    async def run():
        await cache.get_or_compute("k", 10, producer)
        clock.now = 10.0
        return await cache.get_or_compute("k", 10, producer)

    assert asyncio.run(run()) == "v2"
    assert producer.calls == 2


def test_keys_are_independent() -> None:
    cache = ResultCache(clock=FakeClock())
    a, b = CountingProducer("a"), CountingProducer("b")

    async def run():
        return (
            await cache.get_or_compute("m:1:30:any:any", 60, a),
            await cache.get_or_compute("m:1:30:23:any", 60, b),
        )

    assert asyncio.run(run()) == ("a1", "b1")
    assert sorted(cache.keys()) == ["m:1:30:23:any", "m:1:30:any:any"]


def test_failed_producer_stores_nothing() -> None:
    cache = ResultCache(clock=FakeClock())

    async def boom():
        raise RuntimeError("upstream down")

    with pytest.raises(RuntimeError):
        asyncio.run(cache.get_or_compute("k", 10, boom))

    assert len(cache) == 0
    assert cache.entry_info("k") is None


def test_concurrent_misses_both_compute() -> None:
    cache = ResultCache(clock=FakeClock())
    calls = {"n": 0}

    async def slow():
        calls["n"] += 1
        await asyncio.sleep(0.01)
        return calls["n"]

    async def run():
        return await asyncio.gather(
            cache.get_or_compute("k", 10, slow),
            cache.get_or_compute("k", 10, slow),
        )

    asyncio.run(run())

    assert calls["n"] == 2
    assert len(cache) == 1


def test_invalidate_and_entry_info() -> None:
    clock = FakeClock()
    cache = ResultCache(clock=clock)
    producer = CountingProducer()

    asyncio.run(cache.get_or_compute("k", 10, producer))
    clock.now = 4
    assert cache.entry_info("k") == {"expires_in_seconds": 6.0, "is_fresh": True}

    cache.invalidate("k")
    assert len(cache) == 0

    asyncio.run(cache.get_or_compute("k", 10, producer))
    cache.invalidate()
    assert cache.keys() == []
