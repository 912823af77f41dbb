import asyncio

from rinkside import fixtures
from rinkside.actions import Ok, PushDocument, Resize, TeamRosterLoaded
from rinkside.palette import CommandPalette
from rinkside.panels import PlayerPanel
from rinkside.reducer import reduce
from rinkside.runtime import Runtime
from rinkside.tui.app import RinksideApp


def _app(state, effects, reducer=reduce):
    app = RinksideApp(state, effects)
    app.runtime = Runtime(state, effects, reducer=reducer)
    app.palette = CommandPalette(app.runtime.snapshot, app.send_action)
    frames = []
    app.redraw = lambda: frames.append(app.runtime.state)
    return app, frames


def test_failing_dispatch_reports_instead_of_raising(state, effects):
    def reducer(s, action, fx):
        if isinstance(action, Resize):
            raise ValueError("bad size")
        return reduce(s, action, fx)

    app, frames = _app(state, effects, reducer)
    app.send_action(Resize(80, 24))
    system = app.runtime.state.system
    assert system.status_is_error
    assert system.status_message == "Resize failed: bad size"
    assert frames


def test_slash_opens_palette_and_enter_pushes_result(state, effects):
    state, _ = reduce(state, TeamRosterLoaded("EDM", Ok(fixtures.roster_for("EDM"))), effects)

    async def scenario():
        app, frames = _app(state, effects)
        app.handle_key("slash")
        assert app.palette.visible
        for key in ("m", "c", "d"):
            app.handle_key(key)
        # keys go to the palette, not to tab switching or quitting
        app.handle_key("q")
        app.handle_key("backspace")
        assert app.palette.query == "mcd"
        app.handle_key("enter")
        stack = app.runtime.state.navigation.document_stack
        await app.runtime.shutdown()
        return app, stack

    app, stack = asyncio.run(scenario())
    assert not app.palette.visible
    assert [e.panel for e in stack] == [PlayerPanel(8478402)]
    assert app.runtime.state.system.should_quit is False
