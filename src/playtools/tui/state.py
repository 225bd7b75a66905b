"""
State, events and commands of the interactive menu.

The controller consumes events and emits commands; the runtime turns terminal
input into events and carries out the commands.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from playtools.models import Action, Environment, InvocationPayload, InvocationResult
from playtools.tui.widgets import ListItem, ListWidget, Spinner, TextInput


class Screen(Enum):
    ENVIRONMENT_SELECT = "environment_select"
    ACTION_SELECT = "action_select"
    PARAMETER_PROMPT = "parameter_prompt"
    LOADING = "loading"
    RESULT = "result"


ENVIRONMENT_ITEMS = [
    ListItem("Development", "Use development environment", Environment.DEV.value),
    ListItem("Production", "Use production environment", Environment.PROD.value),
]

ACTION_ITEMS = [
    ListItem("Start Sweepstake", "Play new sweepstake, overriding existing ones", Action.START.value),
    ListItem("Process Sweepstake", "Process sweepstake calculation without distributing rewards", Action.PROCESS.value),
    ListItem("Complete Sweepstake", "Complete sweepstake calculation and distribute rewards", Action.COMPLETE.value),
]


# Events


@dataclass(frozen=True)
class KeyPress:
    key: str


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class SpinnerTick:
    generation: int


@dataclass(frozen=True)
class InvocationComplete:
    result: InvocationResult


Event = Union[KeyPress, Resize, SpinnerTick, InvocationComplete]


# Commands


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class ScheduleTick:
    delay: float
    generation: int


@dataclass(frozen=True)
class StartInvocation:
    environment: Environment
    payload: InvocationPayload


Command = Union[Quit, ScheduleTick, StartInvocation]


@dataclass
class AppState:
    screen: Screen = Screen.ENVIRONMENT_SELECT
    env_list: ListWidget = field(default_factory=lambda: ListWidget("Select Environment", ENVIRONMENT_ITEMS))
    action_list: ListWidget = field(default_factory=lambda: ListWidget("Rewards Tools", ACTION_ITEMS))
    prompt_input: TextInput = field(default_factory=lambda: TextInput(placeholder="Enter answer", char_limit=10))
    spinner: Spinner = field(default_factory=Spinner)
    # ticks from an earlier loading screen carry an older generation and are dropped
    tick_generation: int = 0
    prompt_label: str = ""
    prompt_message: str = ""
    selected_env: Optional[Environment] = None
    selected_action: Optional[Action] = None
    pending_payload: Optional[InvocationPayload] = None
    result: Optional[InvocationResult] = None
    result_scroll: int = 0
    width: int = 80
    height: int = 24
