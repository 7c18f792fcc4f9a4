from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from .config import DEFAULT_CACHE_CONFIG

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    key: str
    value: Any
    expires_at: float


class CacheStore:
    """TTL key/value store shared by concurrent request flows.

    Expiry is enforced on read: ``get`` and ``has`` treat an entry whose
    ``expires_at`` has passed as absent and remove it. ``sweep_expired`` is
    only an optimisation for entries nobody reads again.
    """

    def __init__(
        self,
        default_ttl: int = DEFAULT_CACHE_CONFIG.default_ttl,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def _live_entry(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() > entry.expires_at:
            del self._entries[key]
            logger.debug("Cache entry expired: %s", key)
            return None
        return entry

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._live_entry(key)
            if entry is None:
                self._misses += 1
                logger.debug("Cache MISS for key: %s", key)
                return None
            self._hits += 1
            logger.debug("Cache HIT for key: %s", key)
            return entry.value

    def set(self, key: str, value: Any, ttl_seconds: int | None = None) -> bool:
        ttl = ttl_seconds if ttl_seconds is not None else self.default_ttl
        with self._lock:
            self._entries[key] = CacheEntry(
                key=key, value=value, expires_at=self._clock() + ttl
            )
        logger.debug("Cache SET for key: %s (TTL: %ss)", key, ttl)
        return True

    def delete(self, keys: str | Iterable[str]) -> int:
        if isinstance(keys, str):
            keys = [keys]
        removed = 0
        with self._lock:
            for key in keys:
                if self._entries.pop(key, None) is not None:
                    removed += 1
        logger.debug("Cache DEL removed %d key(s)", removed)
        return removed

    def has(self, key: str) -> bool:
        with self._lock:
            return self._live_entry(key) is not None

    def flush(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
        logger.debug("Cache FLUSHED")

    def list_keys(self) -> list[str]:
        with self._lock:
            return list(self._entries)

    def sweep_expired(self) -> int:
        """Remove every expired entry and return how many were dropped."""
        now = self._clock()
        with self._lock:
            expired = [k for k, e in self._entries.items() if now > e.expires_at]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug("Cache sweep removed %d expired key(s)", len(expired))
        return len(expired)

    def stats(self) -> dict:
        with self._lock:
            total = self._hits + self._misses
            return {
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / total * 100, 1) if total > 0 else 0.0,
            }
