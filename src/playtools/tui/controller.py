"""
Screen state machine for the interactive menu.

``Controller.handle`` takes one event at a time, updates ``AppState`` and
returns the commands the runtime should carry out (quit, schedule a spinner
tick, start the background invocation).

Flow:
    environment select -> action select -> parameter prompt -> loading -> result
    result --b--> action select
"""

import logging
from typing import Optional

from playtools.helpers import parse_positive_int
from playtools.models import Action, Environment, InvocationPayload
from playtools.tui import render
from playtools.tui.state import (
    AppState,
    Command,
    Event,
    InvocationComplete,
    KeyPress,
    Quit,
    Resize,
    ScheduleTick,
    Screen,
    SpinnerTick,
    StartInvocation,
)

logger = logging.getLogger(__name__)

QUEST_ID_LABEL = "Please enter sweepstake quest ID"
DURATION_LABEL = "Please enter sweepstake duration in minutes"
INVALID_NUMBER_MESSAGE = "Please enter a valid positive number"


def prompt_label_for(action: Action) -> str:
    return QUEST_ID_LABEL if action.needs_quest_id else DURATION_LABEL


class Controller:
    """Owns the menu state and applies events to it."""

    def __init__(self, state: Optional[AppState] = None):
        self.state = state or AppState()
        self._resize_lists()

    def handle(self, event: Event) -> list[Command]:
        if isinstance(event, KeyPress):
            return self._on_key(event.key)
        if isinstance(event, Resize):
            self.state.width = event.width
            self.state.height = event.height
            self._resize_lists()
            return []
        if isinstance(event, SpinnerTick):
            if self.state.screen is not Screen.LOADING or event.generation != self.state.tick_generation:
                return []
            self.state.spinner.tick()
            return [ScheduleTick(self.state.spinner.interval, event.generation)]
        if isinstance(event, InvocationComplete):
            return self._on_invocation_complete(event)
        logger.debug("Ignoring unknown event %r", event)
        return []

    def _resize_lists(self) -> None:
        width = render.content_width(self.state)
        height = render.content_height(self.state)
        self.state.env_list.set_size(width, height)
        self.state.action_list.set_size(width, height)

    def _typing_filter(self) -> bool:
        if self.state.screen is Screen.ENVIRONMENT_SELECT:
            return self.state.env_list.filtering
        if self.state.screen is Screen.ACTION_SELECT:
            return self.state.action_list.filtering
        return False

    def _on_key(self, key: str) -> list[Command]:
        if key == "ctrl+c":
            return [Quit()]
        if self.state.screen is Screen.LOADING:
            return []
        if key == "q" and not self._typing_filter():
            return [Quit()]

        handlers = {
            Screen.ENVIRONMENT_SELECT: self._on_environment_key,
            Screen.ACTION_SELECT: self._on_action_key,
            Screen.PARAMETER_PROMPT: self._on_prompt_key,
            Screen.RESULT: self._on_result_key,
        }
        return handlers[self.state.screen](key)

    def _on_environment_key(self, key: str) -> list[Command]:
        env_list = self.state.env_list
        if key == "enter" and not env_list.filtering:
            item = env_list.selected_item
            if item is not None:
                self.state.selected_env = Environment(item.value)
                self.state.screen = Screen.ACTION_SELECT
            return []
        env_list.handle_key(key)
        return []

    def _on_action_key(self, key: str) -> list[Command]:
        action_list = self.state.action_list
        if key == "enter" and not action_list.filtering:
            item = action_list.selected_item
            if item is None:
                return []
            action = Action(item.value)
            self.state.selected_action = action
            self.state.prompt_label = prompt_label_for(action)
            self.state.prompt_message = ""
            self.state.prompt_input.reset()
            self.state.screen = Screen.PARAMETER_PROMPT
            return []
        action_list.handle_key(key)
        return []

    def _on_prompt_key(self, key: str) -> list[Command]:
        if key == "esc":
            self._back_to_actions()
            return []
        if key != "enter":
            self.state.prompt_input.handle_key(key)
            return []

        value = parse_positive_int(self.state.prompt_input.value)
        if value is None:
            self.state.prompt_message = INVALID_NUMBER_MESSAGE
            return []

        payload = InvocationPayload.for_action(self.state.selected_action, value)
        self.state.pending_payload = payload
        self.state.prompt_message = ""
        self.state.spinner.frame = 0
        self.state.tick_generation += 1
        self.state.screen = Screen.LOADING
        logger.info("Starting %s invocation in %s", payload.action.value, self.state.selected_env.value)
        return [
            ScheduleTick(self.state.spinner.interval, self.state.tick_generation),
            StartInvocation(self.state.selected_env, payload),
        ]

    def _on_result_key(self, key: str) -> list[Command]:
        if key == "b":
            self._back_to_actions()
            return []

        viewport = render.result_viewport(self.state)
        deltas = {
            "up": -1,
            "k": -1,
            "down": 1,
            "j": 1,
            "pgup": -viewport,
            "pgdown": viewport,
        }
        if key in deltas:
            scroll = self.state.result_scroll + deltas[key]
        elif key in ("home", "g"):
            scroll = 0
        elif key in ("end", "G"):
            scroll = render.max_result_scroll(self.state)
        else:
            return []
        self.state.result_scroll = max(0, min(scroll, render.max_result_scroll(self.state)))
        return []

    def _on_invocation_complete(self, event: InvocationComplete) -> list[Command]:
        if self.state.screen is not Screen.LOADING:
            logger.warning("Dropping invocation result received outside the loading screen")
            return []
        self.state.result = event.result
        self.state.result_scroll = 0
        self.state.screen = Screen.RESULT
        return []

    def _back_to_actions(self) -> None:
        self.state.selected_action = None
        self.state.pending_payload = None
        self.state.result = None
        self.state.result_scroll = 0
        self.state.prompt_label = ""
        self.state.prompt_message = ""
        self.state.prompt_input.reset()
        self.state.screen = Screen.ACTION_SELECT
