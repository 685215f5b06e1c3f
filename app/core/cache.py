"""In-process read cache for backend query results.

Entries are keyed by tuples so a whole family can be dropped by prefix, e.g.
``("bookings", user_id)`` clears every list and detail entry for one user.
The portal runs on a single event loop, so no locking is needed.

Stale entries are swept whenever a new one is stored, and the cache never
holds more than ``max_entries``; the least recently used entry goes first.
"""

import time
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

CacheKey = tuple[Any, ...]


@dataclass
class _Entry:
    value: Any
    stored_at: float
    stale_after: float


class QueryCache:
    """Tuple-keyed cache with per-entry stale time and prefix invalidation."""

    MAX_ENTRIES = 5000

    def __init__(self, clock: Callable[[], float] = time.monotonic, max_entries: int = MAX_ENTRIES) -> None:
        self._entries: OrderedDict[CacheKey, _Entry] = OrderedDict()
        self._clock = clock
        self.max_entries = max_entries

    def _is_stale(self, entry: _Entry, now: float) -> bool:
        return now - entry.stored_at >= entry.stale_after

    def get(self, key: CacheKey) -> Any | None:
        """Fresh cached value for ``key`` or None."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._is_stale(entry, self._clock()):
            del self._entries[key]
            return None
        self._entries.move_to_end(key)
        return entry.value

    def set(self, key: CacheKey, value: Any, stale_after: float) -> None:
        now = self._clock()
        self.sweep(now)
        self._entries[key] = _Entry(value=value, stored_at=now, stale_after=stale_after)
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def sweep(self, now: float | None = None) -> int:
        """Drop every stale entry; returns how many."""
        now = self._clock() if now is None else now
        stale = [key for key, entry in self._entries.items() if self._is_stale(entry, now)]
        for key in stale:
            del self._entries[key]
        return len(stale)

    async def fetch(
        self,
        key: CacheKey,
        loader: Callable[[], Awaitable[Any]],
        stale_after: float,
    ) -> Any:
        """Return the cached value or load, store and return it."""
        cached = self.get(key)
        if cached is not None:
            return cached
        value = await loader()
        self.set(key, value, stale_after)
        return value

    def invalidate(self, prefix: CacheKey) -> int:
        """Drop every entry whose key starts with ``prefix``; returns how many."""
        size = len(prefix)
        doomed = [key for key in self._entries if key[:size] == prefix]
        for key in doomed:
            del self._entries[key]
        return len(doomed)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: CacheKey) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
