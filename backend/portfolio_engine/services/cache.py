from __future__ import annotations

import copy
import logging
import time
from typing import Any, Callable, Hashable

logger = logging.getLogger(__name__)

MAX_CACHE_ITEMS = 512


def make_cache_key(namespace: str, *parts: Any) -> tuple[Hashable, ...]:
    """Stable composite key: list/set parts are sorted so argument order does not matter."""
    normalized: list[Hashable] = [namespace]
    for part in parts:
        if isinstance(part, (list, tuple, set, frozenset)):
            normalized.append(tuple(sorted(str(item) for item in part)))
        else:
            normalized.append(str(part))
    return tuple(normalized)


class TTLCache:
    """Time-boxed memoization of computed results.

    Entries are deep-copied on write and on read, so callers can never mutate
    a cached snapshot.  Only successful, complete results should be stored.
    """

    def __init__(
        self,
        ttl_seconds: float,
        *,
        max_items: int = MAX_CACHE_ITEMS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_items = max_items
        self._clock = clock
        self._entries: dict[Hashable, tuple[float, Any]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: Hashable) -> Any | None:
        cached = self._entries.get(key)
        if cached is None:
            return None
        ts, value = cached
        if self._clock() - ts >= self.ttl_seconds:
            self._entries.pop(key, None)
            return None
        logger.debug("Cache hit for %s", key)
        return copy.deepcopy(value)

    def set(self, key: Hashable, value: Any) -> None:
        if self.ttl_seconds <= 0:
            return
        if key not in self._entries and len(self._entries) >= self.max_items:
            # Evict oldest entry.
            oldest_key = min(self._entries.items(), key=lambda item: item[1][0])[0]
            self._entries.pop(oldest_key, None)
        self._entries[key] = (self._clock(), copy.deepcopy(value))

    def invalidate(self, key: Hashable) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()
