"""
prompt_toolkit runtime for the interactive menu.

Key presses and terminal resizes become controller events; the controller's
commands are carried out here. The invocation runs on a daemon thread and its
result is posted back onto the event loop, so controller state is only ever
touched from the loop.
"""

import asyncio
import logging
import threading
from typing import Callable, Optional

from prompt_toolkit import Application
from prompt_toolkit.formatted_text import ANSI
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.key_binding.key_processor import KeyPressEvent
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl

from playtools.invoker import RemoteInvoker
from playtools.models import InvocationResult
from playtools.tui.controller import Controller
from playtools.tui.render import render_frame
from playtools.tui.state import (
    Command,
    Event,
    InvocationComplete,
    KeyPress,
    Quit,
    Resize,
    ScheduleTick,
    SpinnerTick,
    StartInvocation,
)

logger = logging.getLogger(__name__)

KEY_NAMES = {
    Keys.Up: "up",
    Keys.Down: "down",
    Keys.Left: "left",
    Keys.Right: "right",
    Keys.Enter: "enter",
    Keys.Escape: "esc",
    Keys.Backspace: "backspace",
    Keys.PageUp: "pgup",
    Keys.PageDown: "pgdown",
    Keys.Home: "home",
    Keys.End: "end",
    Keys.Tab: "tab",
    Keys.ControlC: "ctrl+c",
    Keys.ControlU: "ctrl+u",
}


def key_name(key: str, data: str) -> Optional[str]:
    """Translate a prompt_toolkit key press into the menu's key vocabulary."""
    if key in KEY_NAMES:
        return KEY_NAMES[key]
    if len(data) == 1 and data.isprintable():
        return data
    return None


class MenuApp:
    """Full-screen terminal application driving a ``Controller``."""

    def __init__(self, invoker: RemoteInvoker, controller: Optional[Controller] = None):
        self.invoker = invoker
        self.controller = controller or Controller()
        self.app = self._build_application()

    def _build_application(self) -> Application:
        bindings = KeyBindings()

        @bindings.add(Keys.Any)
        def _(event: KeyPressEvent) -> None:
            key_press = event.key_sequence[0]
            name = key_name(key_press.key, key_press.data)
            if name is not None:
                self.dispatch(KeyPress(name))

        control = FormattedTextControl(self._get_frame, focusable=True, show_cursor=False)
        return Application(
            layout=Layout(Window(content=control, wrap_lines=False)),
            key_bindings=bindings,
            full_screen=True,
            mouse_support=False,
            before_render=self._sync_size,
        )

    def _get_frame(self) -> ANSI:
        return ANSI(render_frame(self.controller.state))

    def _sync_size(self, app: Application) -> None:
        size = app.output.get_size()
        state = self.controller.state
        if (size.columns, size.rows) != (state.width, state.height):
            self.controller.handle(Resize(size.columns, size.rows))

    def dispatch(self, event: Event) -> None:
        """Apply one event, then carry out the resulting commands and redraw."""
        for command in self.controller.handle(event):
            self._execute(command)
        self.app.invalidate()

    def _execute(self, command: Command) -> None:
        if isinstance(command, Quit):
            if self.app.is_running:
                self.app.exit(result=0)
        elif isinstance(command, ScheduleTick):
            self.app.create_background_task(self._tick_after(command.delay, command.generation))
        elif isinstance(command, StartInvocation):
            self._start_invocation(command)

    async def _tick_after(self, delay: float, generation: int) -> None:
        await asyncio.sleep(delay)
        self.dispatch(SpinnerTick(generation))

    def _start_invocation(self, command: StartInvocation) -> None:
        loop = asyncio.get_running_loop()
        post = self._poster(loop)

        def work() -> None:
            try:
                result = self.invoker.invoke(command.environment, command.payload)
            except Exception as e:
                logger.exception("Invocation raised unexpectedly")
                result = InvocationResult(error=f"unexpected error: {e}")
            post(InvocationComplete(result))

        # daemon: never joined on quit
        threading.Thread(target=work, name="playtools-invoke", daemon=True).start()

    def _poster(self, loop: asyncio.AbstractEventLoop) -> Callable[[Event], None]:
        def post(event: Event) -> None:
            try:
                loop.call_soon_threadsafe(self.dispatch, event)
            except RuntimeError:
                logger.debug("Event loop closed, dropping %r", event)
        return post

    def run(self) -> int:
        return self.app.run() or 0


def run_menu(invoker: RemoteInvoker) -> int:
    """Run the interactive menu until the user quits."""
    return MenuApp(invoker).run()
