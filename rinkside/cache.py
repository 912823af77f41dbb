"""Per-entity response caches in front of a ``DataProvider``.

Each entity gets a bounded cache whose entries expire after a fixed
lifespan.  Only successful responses are stored; a provider exception
passes straight through and the next call retries.
"""
from __future__ import annotations

import logging
import time
from collections import OrderedDict
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass
from datetime import date
from threading import RLock
from typing import Any

from rinkside.metrics import get_metrics
from rinkside.provider import DataProvider

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True, slots=True)
class CachePolicy:
    max_size: int
    ttl: float  # seconds


# entity -> (max entries, lifespan)
DEFAULT_POLICIES: dict[str, CachePolicy] = {
    "standings": CachePolicy(1, 60),
    "schedule": CachePolicy(7, 60),
    "game": CachePolicy(50, 30),
    "boxscore": CachePolicy(20, 1800),
    "team": CachePolicy(32, 3600),
    "player": CachePolicy(100, 86400),
}


class TimedSizedCache:
    """Insertion-ordered cache bounded by size and entry age."""

    def __init__(self, max_size: int, ttl: float, clock: Clock = time.monotonic):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self.ttl = ttl
        self._clock = clock
        self._entries: OrderedDict[Hashable, tuple[float, Any]] = OrderedDict()
        self._lock = RLock()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def get(self, key: Hashable) -> tuple[bool, Any]:
        """``(True, value)`` for a live entry, ``(False, None)`` otherwise."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                stored_at, value = entry
                if self._clock() - stored_at < self.ttl:
                    self.hits += 1
                    return True, value
                del self._entries[key]
            self.misses += 1
            return False, None

    def put(self, key: Hashable, value: Any) -> None:
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = (self._clock(), value)
            while len(self._entries) > self.max_size:
                self._entries.popitem(last=False)
                self.evictions += 1

    def remove(self, key: Hashable) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def stats(self) -> dict[str, Any]:
        with self._lock:
            return {
                "size": len(self._entries),
                "capacity": self.max_size,
                "hits": self.hits,
                "misses": self.misses,
                "evictions": self.evictions,
            }


class CachingDataProvider:
    """``DataProvider`` wrapper that memoizes each entity in its own cache."""

    def __init__(
        self,
        inner: DataProvider,
        policies: dict[str, CachePolicy] | None = None,
        clock: Clock = time.monotonic,
    ):
        self.inner = inner
        policies = {**DEFAULT_POLICIES, **(policies or {})}
        self.caches = {name: TimedSizedCache(p.max_size, p.ttl, clock) for name, p in policies.items()}

    async def _cached(self, entity: str, key: Hashable, fetch: Callable[[], Awaitable[Any]]) -> Any:
        cache = self.caches[entity]
        hit, value = cache.get(key)
        get_metrics().cache_requests.labels(entity=entity, result="hit" if hit else "miss").inc()
        if hit:
            logger.debug("Cache hit %s %r", entity, key)
            return value
        value = await fetch()
        cache.put(key, value)
        return value

    async def standings(self) -> list[dict[str, Any]]:
        return await self._cached("standings", (), self.inner.standings)

    async def schedule(self, day: date) -> dict[str, Any]:
        return await self._cached("schedule", day.isoformat(), lambda: self.inner.schedule(day))

    async def game_landing(self, game_id: int) -> dict[str, Any]:
        return await self._cached("game", game_id, lambda: self.inner.game_landing(game_id))

    async def boxscore(self, game_id: int) -> dict[str, Any]:
        return await self._cached("boxscore", game_id, lambda: self.inner.boxscore(game_id))

    async def team_roster(self, abbrev: str) -> dict[str, Any]:
        return await self._cached("team", abbrev, lambda: self.inner.team_roster(abbrev))

    async def player_landing(self, player_id: int) -> dict[str, Any]:
        return await self._cached("player", player_id, lambda: self.inner.player_landing(player_id))

    def invalidate(self, entity: str, key: Hashable | None = None) -> None:
        cache = self.caches[entity]
        if key is None:
            cache.clear()
        else:
            cache.remove(key)

    def clear(self) -> None:
        for cache in self.caches.values():
            cache.clear()
        logger.info("Cleared all provider caches")

    def stats(self) -> dict[str, int]:
        """Entry count per entity."""
        return {name: len(cache) for name, cache in self.caches.items()}

    async def aclose(self) -> None:
        aclose = getattr(self.inner, "aclose", None)
        if aclose is not None:
            await aclose()


__all__ = ["CachePolicy", "CachingDataProvider", "DEFAULT_POLICIES", "TimedSizedCache"]
