from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Optional, Protocol, Tuple


class CacheStore(Protocol):
    """Key/value backend with per-entry expiry."""

    def get(self, key: str) -> Optional[dict]:
        """Return the stored value, or None when missing or expired."""
        ...

    def set(self, key: str, value: dict, ttl_seconds: int) -> bool:
        """Store ``value`` for ``ttl_seconds``. Returns False if the write failed."""
        ...


class InMemoryCacheStore:
    """Process-local store. Concurrent writers to one key: last write wins."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[dict]:
        with self._lock:
            hit = self._entries.get(key)
            if hit is None:
                return None
            expires_at, value = hit
            if self._clock() >= expires_at:
                self._entries.pop(key, None)
                return None
            return value

    def set(self, key: str, value: dict, ttl_seconds: int) -> bool:
        with self._lock:
            now = self._clock()
            expired = [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]
            for stale_key in expired:
                del self._entries[stale_key]
            self._entries[key] = (now + ttl_seconds, value)
        return True

    def __len__(self) -> int:
        return len(self._entries)
