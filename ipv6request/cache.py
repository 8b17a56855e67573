from contextlib import contextmanager
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Generic, Iterator, Optional, Tuple, TypeVar

import logging
import threading
import time

T = TypeVar("T")

Clock = Callable[[], float]


logger = logging.getLogger(__name__)


class ReadWriteLock:
    """Shared lock for readers, exclusive lock for writers.

    Waiting writers block new readers so a steady stream of ``get`` calls
    cannot starve ``set``.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            while self._writer or self._readers:
                self._cond.wait()
            self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    value: T
    stored_at: float
    ttl: float

    def is_fresh(self, now: float) -> bool:
        return now - self.stored_at < self.ttl


class TTLCache(Generic[T]):
    """In-memory key/value store where every entry carries its own TTL.

    Expired entries are reported as misses on read and stay in the mapping
    until the key is written again. There is no size bound.
    """

    def __init__(self, *, clock: Clock = time.monotonic, name: str = "cache") -> None:
        self._data: Dict[str, CacheEntry[T]] = {}
        self._lock = ReadWriteLock()
        self._clock = clock
        self.name = name

    def get(self, key: str) -> Tuple[Optional[T], bool]:
        with self._lock.read_locked():
            entry = self._data.get(key)
        if entry is None or not entry.is_fresh(self._clock()):
            return None, False
        return entry.value, True

    def set(self, key: str, value: T, ttl: float) -> None:
        entry = CacheEntry(value=value, stored_at=self._clock(), ttl=ttl)
        with self._lock.write_locked():
            self._data[key] = entry

    def delete(self, key: str) -> None:
        with self._lock.write_locked():
            self._data.pop(key, None)

    def clear(self) -> None:
        with self._lock.write_locked():
            self._data.clear()

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._data)


async def fetch_from_cache(
    cache: TTLCache[T],
    key: str,
    fetch_func: Callable[[], Awaitable[T]],
    *,
    ttl: float,
    refresh: bool = False,
) -> T:
    """Retrieve ``key`` from ``cache`` or compute it with ``fetch_func``.

    Parameters
    ----------
    cache:
        Typed cache holding values of the kind ``fetch_func`` produces.
    key:
        Cache key to look up.
    fetch_func:
        Zero-argument coroutine that computes the value when there is a
        cache miss. Exceptions propagate and nothing is stored.
    ttl:
        Time-to-live for the cached value in seconds.
    refresh:
        When ``True`` the value is recomputed and replaces any existing
        entry.
    """

    if not refresh:
        cached, found = cache.get(key)
        if found:
            logger.debug("%s hit for %s", cache.name, key)
            return cached  # type: ignore[return-value]

    value = await fetch_func()
    cache.set(key, value, ttl)
    return value


def invalidate_cache(cache: TTLCache, key: str) -> None:
    """Remove ``key`` from ``cache`` if it exists."""

    cache.delete(key)
