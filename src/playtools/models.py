"""
PLAYTOOLS data model.

Environments, actions, the request payload sent to the sweepstake rewards
calculator and the result captured from one invocation.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class Action(str, Enum):
    # Starts a new sweepstake quest, overriding existing ones
    START = "start"
    # Calculates a sweepstake quest without distributing rewards
    PROCESS = "process"
    # Completes a sweepstake quest and distributes rewards
    COMPLETE = "complete"

    @property
    def needs_quest_id(self) -> bool:
        return self in (Action.PROCESS, Action.COMPLETE)


class InvocationPayload(BaseModel):
    """Request body for the rewards calculator Lambda.

    ``quest_id`` is set for process/complete, ``duration_minutes`` for start.
    Field aliases are the keys the function reads.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    action: Action
    dry_run: bool = False
    quest_id: Optional[int] = Field(default=None, alias="sweepstake_quest_id", gt=0)
    batch_size: Optional[int] = Field(default=None, gt=0)
    duration_minutes: Optional[int] = Field(default=None, gt=0)
    overrides: Optional[Any] = Field(default=None, alias="sweepstake_overrides")

    @model_validator(mode="after")
    def _check_action_fields(self) -> "InvocationPayload":
        if self.action.needs_quest_id:
            if self.quest_id is None:
                raise ValueError(f"quest_id is required for action '{self.action.value}'")
            if self.duration_minutes is not None:
                raise ValueError(f"duration_minutes is not allowed for action '{self.action.value}'")
        else:
            if self.duration_minutes is None:
                raise ValueError(f"duration_minutes is required for action '{self.action.value}'")
            if self.quest_id is not None:
                raise ValueError(f"quest_id is not allowed for action '{self.action.value}'")
        return self

    @classmethod
    def for_action(cls, action: Action, value: int, **extra: Any) -> "InvocationPayload":
        """Build a payload, routing ``value`` to the field ``action`` requires."""
        action = Action(action)
        if action.needs_quest_id:
            return cls(action=action, quest_id=value, **extra)
        return cls(action=action, duration_minutes=value, **extra)

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-ready dict with unset optional keys omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_wire(), indent=indent)


@dataclass
class InvocationResult:
    """Outcome of one invocation attempt."""

    output_lines: list[str] = field(default_factory=list)
    logs: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
