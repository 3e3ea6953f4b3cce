"""Bounded most-recently-used cache of weather snapshots.

All operations are pure: they take a WeatherCache value and return a new one,
leaving the input untouched. Staleness is decided separately by is_valid() so
lookups never depend on the clock.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from weather_data import CacheEntry, WeatherSnapshot

MAX_SIZE = 10
CACHE_TTL_SECONDS = 600  # 10 minutes


def is_valid(entry: CacheEntry, now: float, ttl: float = CACHE_TTL_SECONDS) -> bool:
    """True while the entry is younger than ttl seconds."""
    return now - entry.fetched_at < ttl


@dataclass(frozen=True)
class WeatherCache:
    """
    Snapshots keyed by place key plus their recency order.

    `order` holds every key of `entries` exactly once, most recently touched
    first, and never more than the cache's size bound. `entries` is a
    read-only view; only the functions below produce new caches.
    """
    entries: Mapping[str, CacheEntry] = field(default_factory=lambda: MappingProxyType({}))
    order: Tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.order)

    def __contains__(self, key: str) -> bool:
        return key in self.entries


def lookup(cache: WeatherCache, key: str) -> Optional[CacheEntry]:
    return cache.entries.get(key)


def upsert(
    cache: WeatherCache,
    key: str,
    snapshot: WeatherSnapshot,
    now: float,
    max_size: int = MAX_SIZE,
) -> WeatherCache:
    """
    Store a snapshot under key and make key the most recently used.

    Keys beyond max_size at the tail of the order (least recently used) are
    dropped from both structures.
    """
    entries = dict(cache.entries)
    entries[key] = CacheEntry(snapshot=snapshot, fetched_at=now)
    order = (key,) + tuple(k for k in cache.order if k != key)

    for evicted in order[max_size:]:
        entries.pop(evicted, None)
    order = order[:max_size]

    return WeatherCache(entries=MappingProxyType(entries), order=order)


def remove(cache: WeatherCache, key: str) -> WeatherCache:
    if key not in cache.entries:
        return cache
    entries = {k: v for k, v in cache.entries.items() if k != key}
    order = tuple(k for k in cache.order if k != key)
    return WeatherCache(entries=MappingProxyType(entries), order=order)


def clear() -> WeatherCache:
    return WeatherCache()


def recent(cache: WeatherCache, limit: Optional[int] = None) -> List[CacheEntry]:
    """Entries in most-recently-used order, optionally truncated to limit."""
    keys = cache.order if limit is None else cache.order[:limit]
    return [cache.entries[key] for key in keys]
