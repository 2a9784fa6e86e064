"""
Cache adapters.
"""
from __future__ import annotations

from typing import Callable, Protocol, TypeVar, runtime_checkable

from .memory import TTLCache

T = TypeVar("T")


@runtime_checkable
class CacheStore(Protocol):
    def remember(self, key: str, ttl: float, compute: Callable[[], T]) -> T:
        ...


__all__ = ["CacheStore", "TTLCache"]
