"""In-process TTL cache implementing the `remember` contract."""
from __future__ import annotations

import threading
import time
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")


class TTLCache:
    """
    Key/value store where each entry expires `ttl` seconds after it was written.

    `remember` does not store None, so absent results are recomputed on the
    next call. Concurrent misses on the same key may compute twice.
    """

    def __init__(self, max_entries: int = 10_000, clock: Callable[[], float] = time.monotonic):
        self._max_entries = max(1, int(max_entries))
        self._clock = clock
        self._lock = threading.Lock()
        self._store: dict[str, tuple[float, Any]] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            item = self._store.get(key)
            if item is None:
                return None
            expires_at, value = item
            if self._clock() >= expires_at:
                self._store.pop(key, None)
                return None
            return value

    def put(self, key: str, value: Any, ttl: float) -> None:
        if ttl <= 0:
            return
        with self._lock:
            if key not in self._store and len(self._store) >= self._max_entries:
                self._prune_locked()
                if len(self._store) >= self._max_entries:
                    # Still full: drop the entry closest to expiry.
                    oldest = min(self._store, key=lambda k: self._store[k][0])
                    self._store.pop(oldest, None)
            self._store[key] = (self._clock() + float(ttl), value)

    def remember(self, key: str, ttl: float, compute: Callable[[], T]) -> T:
        cached = self.get(key)
        if cached is not None:
            return cached
        value = compute()
        if value is not None:
            self.put(key, value, ttl)
        return value

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def prune_expired(self) -> int:
        with self._lock:
            return self._prune_locked()

    def _prune_locked(self) -> int:
        now = self._clock()
        expired = [k for k, (expires_at, _) in self._store.items() if now >= expires_at]
        for k in expired:
            self._store.pop(k, None)
        return len(expired)
