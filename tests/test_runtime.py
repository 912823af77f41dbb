import asyncio
from dataclasses import replace
from datetime import timedelta

import pytest

from rinkside import fixtures
from rinkside.actions import (
    Action,
    Batch,
    Dispatch,
    Error,
    NavigateTabRight,
    RefreshData,
    RefreshSchedule,
    RunAsync,
    SetStatusMessage,
)
from rinkside.effects import DataEffects
from rinkside.metrics import RinksideMetrics
from rinkside.provider import FixtureDataProvider
from rinkside.runtime import Runtime
from rinkside.state import GameDetailsKey, ScheduleKey, StandingsKey, Tab


def test_out_of_order_schedule_results_keep_selected_day(state, today):
    tomorrow = today + timedelta(days=1)
    provider = FixtureDataProvider(
        fixtures.sample_data(today),
        delays={f"schedule:{today.isoformat()}": 0.05},
    )
    runtime = Runtime(state, DataEffects(provider), metrics=RinksideMetrics())

    async def scenario():
        runtime.dispatch(RefreshSchedule(today))
        runtime.dispatch(RefreshSchedule(tomorrow))
        await runtime.wait_idle(timeout=5)

    asyncio.run(scenario())
    final = runtime.state
    assert provider.calls[:2] == [f"schedule:{today.isoformat()}", f"schedule:{tomorrow.isoformat()}"]
    assert final.ui.scores.game_date == tomorrow
    assert final.data.schedule["date"] == tomorrow.isoformat()
    assert ScheduleKey(today) not in final.data.loading
    assert ScheduleKey(tomorrow) not in final.data.loading
    assert runtime.pending_tasks == 0


def test_fetch_failure_flows_back_as_error(state):
    metrics = RinksideMetrics()
    provider = FixtureDataProvider(fixtures.sample_data(), failures={"standings": "timeout"})
    runtime = Runtime(state, DataEffects(provider), metrics=metrics)

    async def scenario():
        runtime.dispatch(RefreshData())
        assert metrics.value("rinkside_inflight_tasks") == 2
        await runtime.wait_idle(timeout=5)

    asyncio.run(scenario())
    assert runtime.state.data.errors["standings"] == "timeout"
    assert StandingsKey() not in runtime.state.data.loading
    assert metrics.value("rinkside_fetch_failures_total", {"key": "StandingsLoaded"}) == 1
    assert metrics.value("rinkside_inflight_tasks") == 0


def test_dispatch_effect_recurses_synchronously(state, effects):
    seen = []

    def reducer(s, action, fx):
        seen.append(type(action).__name__)
        if isinstance(action, NavigateTabRight):
            return s, Batch((Dispatch(SetStatusMessage("one")), Dispatch(SetStatusMessage("two"))))
        return s, Batch(())

    runtime = Runtime(state, effects, reducer=reducer, metrics=RinksideMetrics())
    runtime.dispatch(NavigateTabRight())
    assert seen == ["NavigateTabRight", "SetStatusMessage", "SetStatusMessage"]


def test_reducer_runs_once_per_dispatch(state, effects):
    runtime = Runtime(state, effects, metrics=RinksideMetrics())
    runtime.dispatch(NavigateTabRight())
    assert runtime.state.navigation.current_tab is Tab.STANDINGS
    assert runtime.metrics.value("rinkside_actions_total", {"action": "NavigateTabRight"}) == 1


def test_crashing_task_becomes_error_action(state, effects):
    async def boom() -> Action:
        raise RuntimeError("kaput")

    def reducer(s, action, fx):
        from rinkside.reducer import reduce
        if isinstance(action, NavigateTabRight):
            return s, RunAsync(boom, label="boom")
        return reduce(s, action, fx)

    runtime = Runtime(state, effects, reducer=reducer, metrics=RinksideMetrics())

    async def scenario():
        runtime.dispatch(NavigateTabRight())
        await runtime.wait_idle(timeout=5)

    asyncio.run(scenario())
    assert runtime.state.system.status_is_error
    assert "kaput" in runtime.state.system.status_message


def test_action_sender_queues_until_processed(state, effects):
    runtime = Runtime(state, effects, metrics=RinksideMetrics())
    send = runtime.action_sender()
    send(NavigateTabRight())
    send(Error("late"))
    assert runtime.state.navigation.current_tab is Tab.SCORES
    assert runtime.process_actions() == 2
    assert runtime.state.navigation.current_tab is Tab.STANDINGS
    assert runtime.process_actions() == 0


def test_unknown_effect_is_rejected(state, effects):
    runtime = Runtime(state, effects, metrics=RinksideMetrics())
    with pytest.raises(TypeError):
        runtime.execute(object())


def test_refresh_fetches_each_started_game_once(state, today):
    schedule = fixtures.schedule_for(today)
    state = replace(state, data=replace(state.data, schedule=schedule))
    provider = FixtureDataProvider(fixtures.sample_data(today), delays={"schedule": 0.05})
    runtime = Runtime(state, DataEffects(provider), metrics=RinksideMetrics())

    async def scenario():
        runtime.dispatch(RefreshData())
        await runtime.wait_idle(timeout=5)

    asyncio.run(scenario())
    detail_calls = [c for c in provider.calls if c.startswith("game:")]
    assert len(detail_calls) == len(schedule["games"]) == 4
    assert len(set(detail_calls)) == 4
    assert set(runtime.state.data.game_info) == {g["id"] for g in schedule["games"]}
    assert not any(isinstance(k, GameDetailsKey) for k in runtime.state.data.loading)
