"""Unit tests for the interactive menu state machine."""

import pytest

from playtools.models import Action, Environment, InvocationPayload, InvocationResult
from playtools.tui.controller import (
    DURATION_LABEL,
    INVALID_NUMBER_MESSAGE,
    QUEST_ID_LABEL,
    Controller,
)
from playtools.tui.state import (
    InvocationComplete,
    KeyPress,
    Quit,
    Resize,
    ScheduleTick,
    Screen,
    SpinnerTick,
    StartInvocation,
)


def press(controller, *keys):
    commands = []
    for key in keys:
        commands = controller.handle(KeyPress(key))
    return commands


def type_text(controller, text):
    for char in text:
        controller.handle(KeyPress(char))


def at_prompt(env_index=0, action_index=0):
    """Return a controller on the parameter prompt for the chosen list rows."""
    controller = Controller()
    press(controller, *(["down"] * env_index), "enter")
    press(controller, *(["down"] * action_index), "enter")
    assert controller.state.screen is Screen.PARAMETER_PROMPT
    return controller


def test_initial_state():
    controller = Controller()

    assert controller.state.screen is Screen.ENVIRONMENT_SELECT
    assert controller.state.selected_env is None


def test_environment_select_moves_to_actions():
    controller = Controller()

    press(controller, "down", "enter")

    assert controller.state.screen is Screen.ACTION_SELECT
    assert controller.state.selected_env is Environment.PROD


@pytest.mark.parametrize("index, action, label", [
    (0, Action.START, DURATION_LABEL),
    (1, Action.PROCESS, QUEST_ID_LABEL),
    (2, Action.COMPLETE, QUEST_ID_LABEL),
])
def test_action_select_sets_prompt_label(index, action, label):
    controller = at_prompt(action_index=index)

    assert controller.state.selected_action is action
    assert controller.state.prompt_label == label
    assert controller.state.prompt_input.value == ""


def test_start_scenario_builds_duration_payload():
    controller = at_prompt(env_index=0, action_index=0)
    type_text(controller, "30")

    commands = press(controller, "enter")

    assert controller.state.screen is Screen.LOADING
    assert ScheduleTick(controller.state.spinner.interval, controller.state.tick_generation) in commands
    invocation = [c for c in commands if isinstance(c, StartInvocation)]
    assert len(invocation) == 1
    assert invocation[0].environment is Environment.DEV
    assert invocation[0].payload.to_wire() == {"action": "start", "dry_run": False, "duration_minutes": 30}


@pytest.mark.parametrize("action_index", [1, 2])
def test_quest_actions_build_quest_payload(action_index):
    controller = at_prompt(env_index=1, action_index=action_index)
    type_text(controller, "12")

    commands = press(controller, "enter")

    payload = next(c for c in commands if isinstance(c, StartInvocation)).payload
    assert payload.quest_id == 12
    assert payload.duration_minutes is None


@pytest.mark.parametrize("text", ["-5", "0", "abc", "", "1.5"])
def test_invalid_input_stays_on_prompt(text):
    controller = at_prompt(env_index=1, action_index=1)
    type_text(controller, text)

    commands = press(controller, "enter")

    assert commands == []
    assert controller.state.screen is Screen.PARAMETER_PROMPT
    assert controller.state.prompt_message == INVALID_NUMBER_MESSAGE
    assert controller.state.pending_payload is None


def test_prompt_input_respects_char_limit():
    controller = at_prompt()
    type_text(controller, "1234567890123")

    assert controller.state.prompt_input.value == "1234567890"


def test_prompt_escape_returns_to_actions():
    controller = at_prompt()
    type_text(controller, "5")

    press(controller, "esc")

    assert controller.state.screen is Screen.ACTION_SELECT
    assert controller.state.selected_action is None
    assert controller.state.prompt_input.value == ""


def loading_controller():
    controller = at_prompt(env_index=1, action_index=2)
    type_text(controller, "7")
    press(controller, "enter")
    return controller


def test_keys_are_ignored_while_loading():
    controller = loading_controller()

    for key in ("q", "b", "enter", "down", "esc"):
        assert controller.handle(KeyPress(key)) == []
    assert controller.state.screen is Screen.LOADING


def test_interrupt_quits_while_loading():
    controller = loading_controller()

    assert controller.handle(KeyPress("ctrl+c")) == [Quit()]


def test_spinner_ticks_only_while_loading():
    controller = loading_controller()
    frame = controller.state.spinner.frame
    generation = controller.state.tick_generation

    commands = controller.handle(SpinnerTick(generation))

    assert controller.state.spinner.frame == frame + 1
    assert commands == [ScheduleTick(controller.state.spinner.interval, generation)]

    controller.handle(InvocationComplete(InvocationResult()))
    assert controller.handle(SpinnerTick(generation)) == []


def test_stale_spinner_ticks_are_dropped_on_reload():
    """Only the tick chain of the current loading screen keeps running."""
    controller = loading_controller()
    first = controller.state.tick_generation
    controller.handle(InvocationComplete(InvocationResult()))
    press(controller, "b", "enter")
    type_text(controller, "5")
    press(controller, "enter")
    second = controller.state.tick_generation
    frame = controller.state.spinner.frame

    assert second == first + 1
    assert controller.handle(SpinnerTick(first)) == []
    assert controller.state.spinner.frame == frame
    assert controller.handle(SpinnerTick(second)) == [ScheduleTick(controller.state.spinner.interval, second)]
    assert controller.state.spinner.frame == frame + 1


def test_invocation_complete_shows_result():
    controller = loading_controller()
    result = InvocationResult(output_lines=["Environment: prod"], logs="log line")

    controller.handle(InvocationComplete(result))

    assert controller.state.screen is Screen.RESULT
    assert controller.state.result is result


def test_invocation_complete_outside_loading_is_dropped():
    controller = Controller()

    controller.handle(InvocationComplete(InvocationResult(error="late")))

    assert controller.state.screen is Screen.ENVIRONMENT_SELECT
    assert controller.state.result is None


def test_back_from_result_keeps_list_selection():
    controller = loading_controller()
    controller.handle(InvocationComplete(InvocationResult(output_lines=["done"])))

    press(controller, "b")

    state = controller.state
    assert state.screen is Screen.ACTION_SELECT
    assert state.selected_action is None
    assert state.result is None
    assert state.selected_env is Environment.PROD
    assert state.env_list.cursor == 1
    assert state.action_list.cursor == 2


def test_flow_can_repeat_after_back():
    controller = loading_controller()
    controller.handle(InvocationComplete(InvocationResult()))
    press(controller, "b", "up", "up", "enter")
    type_text(controller, "15")

    commands = press(controller, "enter")

    payload = next(c for c in commands if isinstance(c, StartInvocation)).payload
    assert payload == InvocationPayload.for_action(Action.START, 15)


@pytest.mark.parametrize("screen_keys", [[], ["enter"], ["enter", "enter"]])
def test_quit_from_any_interactive_screen(screen_keys):
    controller = Controller()
    press(controller, *screen_keys)

    assert controller.handle(KeyPress("q")) == [Quit()]
    assert controller.handle(KeyPress("ctrl+c")) == [Quit()]


def test_q_is_text_while_filtering():
    controller = Controller()
    press(controller, "/")

    assert controller.handle(KeyPress("q")) == []
    assert controller.state.env_list.filter_text == "q"


def test_filter_narrows_environment_list():
    controller = Controller()
    press(controller, "/")
    type_text(controller, "prod")
    press(controller, "enter")

    assert controller.state.env_list.filtering is False
    assert [item.title for item in controller.state.env_list.visible_items] == ["Production"]

    press(controller, "enter")

    assert controller.state.selected_env is Environment.PROD


def test_enter_on_empty_filter_result_does_nothing():
    controller = Controller()
    press(controller, "/")
    type_text(controller, "zzz")
    press(controller, "enter", "enter")

    assert controller.state.screen is Screen.ENVIRONMENT_SELECT


def test_result_scrolling_is_clamped():
    controller = loading_controller()
    controller.handle(Resize(80, 10))
    lines = [f"line {n}" for n in range(40)]
    controller.handle(InvocationComplete(InvocationResult(output_lines=lines)))

    press(controller, "up")
    assert controller.state.result_scroll == 0

    press(controller, "down", "down")
    assert controller.state.result_scroll == 2

    press(controller, "end")
    maximum = controller.state.result_scroll
    assert maximum > 0
    press(controller, "pgdown")
    assert controller.state.result_scroll == maximum


def test_resize_updates_dimensions_and_list_paging():
    controller = Controller()

    controller.handle(Resize(120, 14))

    assert (controller.state.width, controller.state.height) == (120, 14)
    assert controller.state.env_list.per_page == 1
    assert controller.state.env_list.page_count == 2
