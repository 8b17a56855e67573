"""Tests for the cache helpers in :mod:`ipv6request.cache`."""

import threading

import pytest

from ipv6request.cache import TTLCache, fetch_from_cache, invalidate_cache


def test_get_before_ttl_returns_value(fake_clock):
    cache = TTLCache(clock=fake_clock)
    cache.set("asn_64500", ("2001:db8::/32",), 3600)

    fake_clock.advance(3599.9)
    assert cache.get("asn_64500") == (("2001:db8::/32",), True)


@pytest.mark.parametrize("elapsed", [3600, 3600.5, 86400])
def test_get_at_or_after_ttl_is_a_miss(fake_clock, elapsed):
    cache = TTLCache(clock=fake_clock)
    cache.set("asn_64500", ("2001:db8::/32",), 3600)

    fake_clock.advance(elapsed)
    assert cache.get("asn_64500") == (None, False)


def test_missing_key_is_a_miss_not_an_error():
    cache = TTLCache()
    assert cache.get("nope") == (None, False)


def test_cached_none_and_empty_values_are_hits(fake_clock):
    cache = TTLCache(clock=fake_clock)
    cache.set("empty", (), 60)
    cache.set("none", None, 60)

    assert cache.get("empty") == ((), True)
    assert cache.get("none") == (None, True)


def test_set_overwrites_value_and_ttl(fake_clock):
    cache = TTLCache(clock=fake_clock)
    cache.set("k", "v1", 10)
    fake_clock.advance(5)
    cache.set("k", "v2", 100)

    # the old entry would have expired here; the new one counts from its own set
    fake_clock.advance(50)
    assert cache.get("k") == ("v2", True)
    fake_clock.advance(55)
    assert cache.get("k") == (None, False)
    assert len(cache) == 1


def test_delete_and_clear(fake_clock):
    cache = TTLCache(clock=fake_clock)
    cache.set("a", 1, 60)
    cache.set("b", 2, 60)

    cache.delete("a")
    cache.delete("missing")
    assert cache.get("a") == (None, False)
    assert cache.get("b") == (2, True)

    cache.clear()
    assert len(cache) == 0


def test_concurrent_readers_and_writers():
    cache = TTLCache()
    errors = []

    def writer(n):
        for i in range(200):
            cache.set(f"k{i % 10}", (n, i), 60)

    def reader():
        for i in range(200):
            value, found = cache.get(f"k{i % 10}")
            if found and not isinstance(value, tuple):
                errors.append(value)

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
    threads += [threading.Thread(target=reader) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert not errors
    assert len(cache) == 10


@pytest.mark.asyncio
async def test_fetch_from_cache_returns_cached_value(fake_clock):
    """Repeated calls should reuse the cached value without recomputing."""

    cache = TTLCache(clock=fake_clock)
    call_count = 0

    async def fetch_value():
        nonlocal call_count
        call_count += 1
        return f"value-{call_count}"

    result_first = await fetch_from_cache(cache, "example", fetch_value, ttl=60)
    assert result_first == "value-1"
    assert call_count == 1

    result_second = await fetch_from_cache(cache, "example", fetch_value, ttl=60)
    assert result_second == "value-1"
    assert call_count == 1, "fetch function should not have been called a second time"


@pytest.mark.asyncio
async def test_fetch_from_cache_recomputes_after_expiry(fake_clock):
    cache = TTLCache(clock=fake_clock)
    values = iter(["first", "second"])

    async def fetch_value():
        return next(values)

    assert await fetch_from_cache(cache, "example", fetch_value, ttl=30) == "first"
    fake_clock.advance(30)
    assert await fetch_from_cache(cache, "example", fetch_value, ttl=30) == "second"


@pytest.mark.asyncio
async def test_fetch_from_cache_refresh_forces_recompute():
    """Setting ``refresh=True`` should bypass the cached value."""

    cache = TTLCache()
    cache.set("example", "stale", 60)

    async def fetch_value():
        return "fresh"

    result = await fetch_from_cache(cache, "example", fetch_value, ttl=60, refresh=True)
    assert result == "fresh"
    assert cache.get("example") == ("fresh", True)


@pytest.mark.asyncio
async def test_fetch_from_cache_does_not_store_failures():
    cache = TTLCache()

    async def broken():
        raise RuntimeError("upstream down")

    with pytest.raises(RuntimeError):
        await fetch_from_cache(cache, "example", broken, ttl=60)
    assert cache.get("example") == (None, False)


def test_invalidate_cache_removes_key():
    """invalidate_cache should remove an existing entry."""

    cache = TTLCache()
    cache.set("example", "value", 60)

    invalidate_cache(cache, "example")
    assert cache.get("example") == (None, False)
