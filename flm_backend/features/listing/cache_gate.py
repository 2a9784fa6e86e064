"""Optional memoization of enriched records."""
from __future__ import annotations

from typing import Callable, Optional, TypeVar

from ...adapters.cache import CacheStore

T = TypeVar("T")


def get_or_compute(cache: Optional[CacheStore], entry_id: str, ttl: float, compute: Callable[[], T]) -> T:
    """
    Cached value for `entry_id` when a TTL is configured, else a fresh compute.

    Keys are entry ids only: an id already encodes disk, name and mtime.
    """
    if cache is None or not ttl or ttl <= 0:
        return compute()
    return cache.remember(entry_id, ttl, compute)
