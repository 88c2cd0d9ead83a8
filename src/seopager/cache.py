# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Remembered total-page counts, keyed by content id.

The rewriter learns a listing's total page count while processing its markup;
the head-link emitter runs earlier on later renders and has no markup to read.
The total is parked in a short-lived key-value store between the two.

The store is injected: anything satisfying ``TotalPagesCache`` (a host
transient API, Redis, ...) works. ``InMemoryTotalsCache`` is the default.

NOTE: InMemoryTotalsCache is NOT thread-safe. Concurrent renders of the same
content id race benignly (last writer wins, TTL bounds staleness).
"""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .config import DEFAULT_CACHE_KEY_PREFIX

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 1024


def total_pages_key(content_id: str | int, prefix: str = DEFAULT_CACHE_KEY_PREFIX) -> str:
    """Cache key for a content id, e.g. ``pagination_total_42``."""
    return f"{prefix}{content_id}"


@runtime_checkable
class TotalPagesCache(Protocol):
    """get / set-with-TTL capability for remembered totals."""

    def get(self, key: str) -> int | None: ...

    def set(self, key: str, value: int, ttl: float) -> None: ...


# ---------------------------------------------------------------------------
# In-memory implementation
# ---------------------------------------------------------------------------


@dataclass
class _Entry:
    value: int
    expires_at: float


@dataclass
class TotalsCacheStats:
    """Counters for cache behaviour."""

    hits: int = 0
    misses: int = 0
    stores: int = 0
    expirations: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class InMemoryTotalsCache:
    """OrderedDict LRU with per-entry TTL.

    ``clock`` defaults to ``time.monotonic`` and is injectable for tests.
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self._max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, _Entry] = OrderedDict()
        self._stats = TotalsCacheStats()

    def get(self, key: str) -> int | None:
        """Return the stored total, or None if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            self._stats.misses += 1
            return None
        if self._clock() >= entry.expires_at:
            del self._entries[key]
            self._stats.expirations += 1
            self._stats.misses += 1
            logger.debug("Totals cache TTL expired: %s", key)
            return None
        self._entries.move_to_end(key)
        self._stats.hits += 1
        return entry.value

    def set(self, key: str, value: int, ttl: float) -> None:
        """Store (or overwrite) a total. Evicts the least recently used entry when full."""
        self._entries[key] = _Entry(value=int(value), expires_at=self._clock() + ttl)
        self._entries.move_to_end(key)
        self._stats.stores += 1

        while len(self._entries) > self._max_entries:
            evicted_key, _ = self._entries.popitem(last=False)
            self._stats.evictions += 1
            logger.debug("Totals cache eviction: %s", evicted_key)

    def clear(self) -> None:
        self._entries.clear()

    @property
    def stats(self) -> TotalsCacheStats:
        return self._stats

    def __len__(self) -> int:
        return len(self._entries)
