"""
PLAYTOOLS Single Invocation Command.

This module provides a non-interactive way to run one sweepstake action,
useful in scripts and when no full-screen terminal is available.
"""

import json
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from playtools.config import PlaytoolsConfig, get_config
from playtools.invoker import RemoteInvoker
from playtools.logging_setup import setup_logging
from playtools.models import Action, Environment, InvocationPayload
from playtools.ui import render_invocation_result, render_status

console = Console()


def apply_profile_override(config: PlaytoolsConfig, env: Environment, profile: Optional[str]) -> PlaytoolsConfig:
    """Return ``config`` with ``profile`` mapped to ``env`` when given."""
    if profile is None:
        return config
    return config.model_copy(update={f"{Environment(env).value}_profile": profile})


def build_payload(
    action: Action,
    quest_id: Optional[int],
    duration: Optional[int],
    dry_run: bool,
    batch_size: Optional[int],
    overrides: Optional[str],
) -> InvocationPayload:
    """Build the payload from CLI options.

    Raises:
        ValueError: If the overrides are not valid JSON or the options do not
            fit the action
    """
    parsed_overrides = None
    if overrides is not None:
        try:
            parsed_overrides = json.loads(overrides)
        except json.JSONDecodeError as e:
            raise ValueError(f"--overrides is not valid JSON: {e}") from e

    try:
        return InvocationPayload(
            action=action,
            quest_id=quest_id,
            duration_minutes=duration,
            dry_run=dry_run,
            batch_size=batch_size,
            overrides=parsed_overrides,
        )
    except ValidationError as e:
        raise ValueError("; ".join(error["msg"] for error in e.errors())) from e


def invoke(
    action: Action = typer.Option(..., "--action", "-a", help="Sweepstake action to run"),
    env: Environment = typer.Option(Environment.DEV, "--env", "-e", help="Target environment"),
    quest_id: int = typer.Option(None, "--quest-id", "-q", help="Sweepstake quest ID (process/complete)"),
    duration: int = typer.Option(None, "--duration", "-d", help="Sweepstake duration in minutes (start)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Ask the function not to persist changes"),
    batch_size: int = typer.Option(None, "--batch-size", help="Batch size for processing"),
    overrides: str = typer.Option(None, "--overrides", help="Sweepstake overrides as a JSON document"),
    profile: str = typer.Option(None, "--profile", "-p", help="AWS profile to use"),
    region: str = typer.Option(None, "--region", "-r", help="AWS region to use"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Invoke the sweepstake rewards calculator once and print the result."""
    config = apply_profile_override(get_config(region=region), env, profile)
    setup_logging(interactive=False, log_file=config.log_file, level=config.log_level, verbose=verbose)

    try:
        payload = build_payload(action, quest_id, duration, dry_run, batch_size, overrides)
    except ValueError as e:
        render_status(str(e), level="error")
        raise typer.Exit(1)

    invoker = RemoteInvoker(config)
    with console.status(f"[bold blue]Invoking Lambda in {env.value} environment with action {action.value}..."):
        result = invoker.invoke(env, payload)

    render_invocation_result(result)
    if result.error:
        raise typer.Exit(1)
