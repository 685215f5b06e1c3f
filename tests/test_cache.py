import pytest

from app.core.cache import QueryCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> QueryCache:
    return QueryCache(clock=clock)


def test_entry_goes_stale(cache, clock):
    cache.set(("bookings", "u1", "detail", "b1"), "booking", stale_after=120)
    clock.now = 119
    assert cache.get(("bookings", "u1", "detail", "b1")) == "booking"
    clock.now = 120
    assert cache.get(("bookings", "u1", "detail", "b1")) is None
    assert len(cache) == 0


def test_prefix_invalidation_is_scoped(cache):
    cache.set(("bookings", "u1", "detail", "b1"), 1, 120)
    cache.set(("bookings", "u1", "list", "bookings", 1), 2, 120)
    cache.set(("bookings", "u1", "list", "history", 1), 3, 300)
    cache.set(("bookings", "u2", "detail", "b1"), 4, 120)

    assert cache.invalidate(("bookings", "u1", "list")) == 2
    assert ("bookings", "u1", "detail", "b1") in cache
    assert ("bookings", "u2", "detail", "b1") in cache

    assert cache.invalidate(("bookings", "u1")) == 1
    assert len(cache) == 1


@pytest.mark.asyncio
async def test_fetch_loads_once_while_fresh(cache, clock):
    calls = []

    async def loader():
        calls.append(clock.now)
        return f"value-{len(calls)}"

    assert await cache.fetch(("k",), loader, 300) == "value-1"
    clock.now = 299
    assert await cache.fetch(("k",), loader, 300) == "value-1"
    clock.now = 300
    assert await cache.fetch(("k",), loader, 300) == "value-2"
    assert calls == [0.0, 300]


@pytest.mark.asyncio
async def test_failed_load_caches_nothing(cache):
    async def loader():
        raise RuntimeError("backend down")

    with pytest.raises(RuntimeError):
        await cache.fetch(("k",), loader, 120)
    assert ("k",) not in cache


def test_storing_sweeps_entries_nobody_reads_again(cache, clock):
    cache.set(("bookings", "u1", "list", "bookings", 1), "page 1", 120)
    cache.set(("bookings", "u1", "list", "bookings", 2), "page 2", 120)
    clock.now = 121

    cache.set(("bookings", "u1", "detail", "b1"), "booking", 120)

    assert len(cache) == 1


def test_size_cap_evicts_least_recently_used(clock):
    cache = QueryCache(clock=clock, max_entries=2)
    cache.set(("a",), 1, 120)
    cache.set(("b",), 2, 120)
    assert cache.get(("a",)) == 1

    cache.set(("c",), 3, 120)

    assert len(cache) == 2
    assert ("a",) in cache
    assert ("b",) not in cache
