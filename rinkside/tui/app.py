"""Textual shell around the runtime.

Textual owns the event loop and the terminal.  Every key press is turned
into an action by ``key_to_action`` and dispatched; queued async results
are drained on a short timer; the whole frame is re-rendered from state
whenever something changed.  While the command palette is open it takes
all key input.
"""
from __future__ import annotations

import logging
from datetime import datetime

from textual import events
from textual.app import App, ComposeResult
from textual.widgets import Static

from rinkside.actions import Action, RefreshData, Resize, SetStatusMessage
from rinkside.effects import DataEffects
from rinkside.error_handling import handle_ui_error
from rinkside.keys import key_to_action
from rinkside.palette import CommandPalette
from rinkside.runtime import Runtime
from rinkside.state import AppState
from rinkside.tui.chrome import render_frame
from rinkside.tui.nav_keys import KeyEvent

logger = logging.getLogger(__name__)

DRAIN_INTERVAL = 0.05
PALETTE_KEY = "slash"


class FrameView(Static, can_focus=True):
    """Single widget showing the composed frame; it keeps focus and owns key input."""

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self.app.handle_key(event.key)


class RinksideApp(App):
    CSS = """
    FrameView {
        width: 100%;
        height: 100%;
    }
    """

    def __init__(self, initial_state: AppState, data_effects: DataEffects, **kwargs):
        super().__init__(**kwargs)
        self.initial_state = initial_state
        self.data_effects = data_effects
        self.runtime: Runtime | None = None
        self.palette: CommandPalette | None = None

    def compose(self) -> ComposeResult:
        yield FrameView(id="frame")

    def on_mount(self) -> None:
        self.runtime = Runtime(self.initial_state, self.data_effects)
        self.palette = CommandPalette(self.runtime.snapshot, self.send_action)
        self.query_one(FrameView).focus()
        self.send_action(Resize(self.size.width, self.size.height))
        self.send_action(RefreshData(at=datetime.now()))
        self.set_interval(DRAIN_INTERVAL, self.drain)
        interval = self.runtime.state.system.config.refresh_interval
        self.set_interval(interval, self.auto_refresh)
        logger.info("Dashboard started; refreshing every %ss", interval)

    def send_action(self, action: Action) -> None:
        if self.runtime is None:
            return
        try:
            self.runtime.dispatch(action)
        except Exception as e:
            info = handle_ui_error(e, component="app", context={"action": type(action).__name__})
            self.runtime.dispatch(SetStatusMessage(f"{type(action).__name__} failed: {info.message}", is_error=True))
        self.after_dispatch()

    def handle_key(self, key: str) -> None:
        if self.runtime is None:
            return
        event = KeyEvent(key)
        palette = self.palette
        if palette is not None and (palette.visible or key == PALETTE_KEY):
            if palette.visible:
                palette.handle_key(event)
            else:
                palette.open()
            self.redraw()
            return
        action = key_to_action(event, self.runtime.state)
        if action is not None:
            self.send_action(action)

    def auto_refresh(self) -> None:
        self.send_action(RefreshData(at=datetime.now()))

    def drain(self) -> None:
        if self.runtime is None:
            return
        if self.runtime.process_actions():
            self.after_dispatch()

    def after_dispatch(self) -> None:
        runtime = self.runtime
        if runtime.state.system.should_quit:
            self.exit()
            return
        if runtime.dirty:
            runtime.dirty = False
            self.redraw()

    def redraw(self) -> None:
        size = self.size
        try:
            frame = render_frame(self.runtime.state, size.width, size.height, palette=self.palette)
        except Exception as e:
            # keep whatever frame is already on screen
            handle_ui_error(e, component="app", context={"size": f"{size.width}x{size.height}"})
            return
        self.query_one(FrameView).update(frame.to_text())

    def on_resize(self, event: events.Resize) -> None:
        self.send_action(Resize(event.size.width, event.size.height))

    async def on_unmount(self) -> None:
        if self.runtime is not None:
            await self.runtime.shutdown()
        aclose = getattr(self.data_effects.provider, "aclose", None)
        if aclose is not None:
            await aclose()


__all__ = ["FrameView", "RinksideApp"]
