"""In-process read cache with per-entry TTL and tag invalidation."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from campus_delivery.core.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

VERIFIED_RESTAURANTS_TAG = "verified-restaurants"
ADMIN_SETTINGS_TAG = "admin-settings"


def restaurant_menu_tag(restaurant_id: int) -> str:
    return f"restaurant-menu-{restaurant_id}"


class TaggedTTLCache:
    """Key/value cache whose entries expire after ``ttl_seconds``.

    Values must be plain snapshots (Pydantic models, tuples, dicts); never
    store ORM instances bound to a session.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, Any, frozenset[str]]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value, _ = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any, tags: Iterable[str] = ()) -> None:
        with self._lock:
            self._entries[key] = (self._clock() + self.ttl_seconds, value, frozenset(tags))

    def get_or_set(self, key: str, tags: Iterable[str], factory: Callable[[], T]) -> T:
        cached = self.get(key)
        if cached is not None:
            return cached
        value = factory()
        self.set(key, value, tags)
        return value

    def invalidate_tag(self, tag: str) -> int:
        """Evict every entry carrying ``tag``; returns the number evicted."""
        with self._lock:
            doomed = [key for key, (_, _, tags) in self._entries.items() if tag in tags]
            for key in doomed:
                del self._entries[key]
        if doomed:
            logger.debug("Cache tag '%s' invalidated (%s entries).", tag, len(doomed))
        return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


read_cache = TaggedTTLCache(ttl_seconds=settings.cache_ttl_seconds)
