"""
Short-lived storage for computed analytics.
Keyed by (operation, tenant, window). Entries expire after a fixed TTL,
which bounds how stale a dashboard can be. A TTL of 0 disables caching.
"""
from datetime import datetime, timedelta
from threading import Lock
from typing import Any, Callable, Hashable, Optional

import structlog

logger = structlog.get_logger(__name__)


class AnalyticsCache:
    """In-memory TTL cache for analytics results."""

    def __init__(self, ttl_seconds: int = 0):
        self.ttl = timedelta(seconds=ttl_seconds)
        self._entries: dict[Hashable, tuple[datetime, Any]] = {}
        self._lock = Lock()

    @property
    def enabled(self) -> bool:
        return self.ttl.total_seconds() > 0

    def get(self, key: Hashable) -> Optional[Any]:
        """Return the cached value, or None if missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if datetime.now() > expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: Hashable, value: Any) -> None:
        with self._lock:
            self._entries[key] = (datetime.now() + self.ttl, value)
            self._cleanup_expired()

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        """
        Return a cached value or compute and store it.

        Failures inside compute are never cached.
        """
        if not self.enabled:
            return compute()

        value = self.get(key)
        if value is not None:
            logger.debug("analytics_cache_hit", key=str(key))
            return value

        value = compute()
        self.set(key, value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _cleanup_expired(self) -> None:
        """Remove all expired entries. Caller holds the lock."""
        now = datetime.now()
        expired = [k for k, (exp, _) in self._entries.items() if now > exp]
        for k in expired:
            del self._entries[k]


def cached(cache: Optional[AnalyticsCache], key: Hashable, compute: Callable[[], Any]) -> Any:
    """Run compute through the cache when one is configured."""
    if cache is None:
        return compute()
    return cache.get_or_compute(key, compute)
