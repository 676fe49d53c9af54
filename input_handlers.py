from __future__ import annotations

from typing import Optional, TYPE_CHECKING

import tcod.event

if TYPE_CHECKING:
    from engine import Engine


class BaseEventHandler(tcod.event.EventDispatch[None]):
    def handle_events(self, event: tcod.event.Event) -> BaseEventHandler:
        # handles events and returns next active handler
        state = self.dispatch(event)
        if isinstance(state, BaseEventHandler):
            return state
        return self

    def on_render(self, console: tcod.console.Console) -> None:
        raise NotImplementedError()

    def ev_quit(self, event: tcod.event.Quit) -> Optional[BaseEventHandler]:
        raise SystemExit()


class MainHandler(BaseEventHandler):
    """Shows the running engine. Closing the window is the only input."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def on_render(self, console: tcod.console.Console) -> None:
        self.engine.render(console)
