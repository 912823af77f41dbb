import asyncio
from datetime import date

import pytest

from rinkside import fixtures
from rinkside.cache import DEFAULT_POLICIES, CachePolicy, CachingDataProvider, TimedSizedCache
from rinkside.metrics import get_metrics
from rinkside.provider import FixtureDataProvider
from rinkside.utils.exceptions import APIError

DAY = date(2024, 1, 15)


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_entries_expire_after_lifespan():
    clock = FakeClock()
    cache = TimedSizedCache(4, ttl=30, clock=clock)
    cache.put("a", 1)
    clock.now += 29
    assert cache.get("a") == (True, 1)
    clock.now += 1
    assert cache.get("a") == (False, None)
    assert len(cache) == 0
    assert cache.stats()["hits"] == 1 and cache.stats()["misses"] == 1


def test_oldest_entry_evicted_when_full():
    cache = TimedSizedCache(2, ttl=60, clock=FakeClock())
    cache.put("a", 1)
    cache.put("b", 2)
    cache.put("a", 10)  # re-insert refreshes position
    cache.put("c", 3)
    assert cache.get("b") == (False, None)
    assert cache.get("a") == (True, 10)
    assert cache.stats()["evictions"] == 1
    with pytest.raises(ValueError):
        TimedSizedCache(0, ttl=1)


def test_default_policies_cover_every_entity():
    assert DEFAULT_POLICIES["standings"] == CachePolicy(1, 60)
    assert DEFAULT_POLICIES["schedule"] == CachePolicy(7, 60)
    assert DEFAULT_POLICIES["game"] == CachePolicy(50, 30)
    assert DEFAULT_POLICIES["boxscore"] == CachePolicy(20, 1800)
    assert DEFAULT_POLICIES["team"] == CachePolicy(32, 3600)
    assert DEFAULT_POLICIES["player"] == CachePolicy(100, 86400)


def test_caching_provider_serves_repeat_calls_from_cache():
    clock = FakeClock()
    inner = FixtureDataProvider(fixtures.sample_data(DAY))
    provider = CachingDataProvider(inner, clock=clock)
    hits_before = get_metrics().value("rinkside_cache_requests_total", {"entity": "standings", "result": "hit"})

    async def scenario():
        first = await provider.standings()
        second = await provider.standings()
        await provider.schedule(DAY)
        await provider.schedule(DAY)
        await provider.team_roster("TOR")
        clock.now += 61
        await provider.standings()
        await provider.team_roster("TOR")
        return first, second

    first, second = asyncio.run(scenario())
    assert first is second
    assert inner.calls == ["standings", f"schedule:{DAY.isoformat()}", "team:TOR", "standings"]
    assert provider.stats()["team"] == 1
    hits_after = get_metrics().value("rinkside_cache_requests_total", {"entity": "standings", "result": "hit"})
    assert hits_after == hits_before + 1


def test_failures_are_not_cached():
    inner = FixtureDataProvider(fixtures.sample_data(DAY), failures={"player:8478402": "boom"})
    provider = CachingDataProvider(inner, clock=FakeClock())

    async def scenario():
        with pytest.raises(APIError):
            await provider.player_landing(8478402)
        inner.failures.clear()
        return await provider.player_landing(8478402)

    player = asyncio.run(scenario())
    assert player["name"] == "Connor McDavid"
    assert inner.calls == ["player:8478402", "player:8478402"]
    assert provider.stats()["player"] == 1


def test_invalidate_and_clear():
    inner = FixtureDataProvider(fixtures.sample_data(DAY))
    provider = CachingDataProvider(inner, policies={"game": CachePolicy(1, 30)}, clock=FakeClock())
    game_ids = [g["id"] for g in fixtures.schedule_for(DAY)["games"]]

    async def scenario():
        await provider.game_landing(game_ids[0])
        await provider.game_landing(game_ids[1])
        await provider.game_landing(game_ids[1])
        provider.invalidate("game", game_ids[1])
        await provider.game_landing(game_ids[1])
        await provider.standings()
        provider.clear()
        await provider.standings()
        await provider.aclose()

    asyncio.run(scenario())
    assert inner.calls == [f"game:{game_ids[0]}", f"game:{game_ids[1]}", f"game:{game_ids[1]}",
                           "standings", "standings"]
    assert provider.caches["game"].max_size == 1
