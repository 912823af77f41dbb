"""Action dispatch loop.

The runtime owns the current ``AppState``.  ``dispatch`` runs the reducer
exactly once and then executes the returned effect: ``Dispatch`` recurses
synchronously, ``Batch`` members run in order, and ``RunAsync`` work is
started as a task whose resulting action lands on the queue.  Completion
order of async work is arbitrary; the reducer decides what a late result
means.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from rinkside.actions import (
    Action,
    Batch,
    Dispatch,
    Effect,
    Err,
    Error,
    NoEffect,
    RunAsync,
    action_name,
    should_render,
)
from rinkside.effects import DataEffects
from rinkside.error_handling import ErrorCategory, ErrorSeverity, get_error_handler
from rinkside.metrics import RinksideMetrics, get_metrics
from rinkside.reducer import reduce
from rinkside.state import AppState

logger = logging.getLogger(__name__)

Reducer = Callable[[AppState, Action, DataEffects], tuple[AppState, Effect]]


class Runtime:
    def __init__(
        self,
        initial_state: AppState,
        data_effects: DataEffects,
        reducer: Reducer = reduce,
        metrics: RinksideMetrics | None = None,
    ):
        self._state = initial_state
        self.effects = data_effects
        self.reducer = reducer
        self.metrics = metrics or get_metrics()
        self._queue: asyncio.Queue[Action] = asyncio.Queue()
        self._tasks: set[asyncio.Task] = set()
        self.dirty = True

    @property
    def state(self) -> AppState:
        return self._state

    def snapshot(self) -> AppState:
        """The current state; values are immutable so no copy is needed."""
        return self._state

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    def dispatch(self, action: Action) -> None:
        name = action_name(action)
        self.metrics.actions.labels(action=name).inc()
        result = getattr(action, "result", None)
        if isinstance(result, Err):
            self.metrics.fetch_failures.labels(key=name).inc()
        self._state, effect = self.reducer(self._state, action, self.effects)
        if should_render(action):
            self.dirty = True
        self.execute(effect)

    def execute(self, effect: Effect) -> None:
        if isinstance(effect, NoEffect):
            return
        self.metrics.effects.labels(kind=type(effect).__name__).inc()
        if isinstance(effect, Dispatch):
            self.dispatch(effect.action)
        elif isinstance(effect, Batch):
            for inner in effect.effects:
                self.execute(inner)
        elif isinstance(effect, RunAsync):
            self._spawn(effect)
        else:
            raise TypeError(f"Unknown effect {effect!r}")

    def _spawn(self, effect: RunAsync) -> None:
        task = asyncio.get_running_loop().create_task(self._run(effect), name=effect.label or None)
        self._tasks.add(task)
        self.metrics.inflight.inc()
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        self.metrics.inflight.dec()

    async def _run(self, effect: RunAsync) -> None:
        try:
            action = await effect.factory()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            get_error_handler().handle_error(
                e,
                category=ErrorCategory.UNKNOWN,
                severity=ErrorSeverity.HIGH,
                component="runtime",
                context={"label": effect.label},
            )
            action = Error(f"{effect.label or 'task'} failed: {e}")
        self._queue.put_nowait(action)

    def action_sender(self) -> Callable[[Action], None]:
        """Thread-unsafe sender for code running on the runtime's loop."""
        return self._queue.put_nowait

    def process_actions(self) -> int:
        """Dispatch every queued action; returns how many were handled."""
        count = 0
        while True:
            try:
                action = self._queue.get_nowait()
            except asyncio.QueueEmpty:
                break
            self.dispatch(action)
            count += 1
        return count

    async def wait_idle(self, timeout: float | None = None) -> None:
        """Run until no task is in flight and the queue is drained."""
        async def drain() -> None:
            while True:
                self.process_actions()
                if not self._tasks:
                    if self._queue.empty():
                        return
                    continue
                await asyncio.wait(set(self._tasks))
        await asyncio.wait_for(drain(), timeout)

    async def shutdown(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        logger.debug("Runtime stopped")


__all__ = ["Runtime", "Reducer"]
