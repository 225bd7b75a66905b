"""
PLAYTOOLS Log Tail Command.

This module provides the command that streams the rewards calculator's
CloudWatch logs through the AWS CLI.
"""

import typer

from playtools.aws_utils import ensure_session, tail_function_logs
from playtools.commands.invoke import apply_profile_override
from playtools.config import get_config
from playtools.errors import SessionError
from playtools.logging_setup import setup_logging
from playtools.models import Environment
from playtools.ui import render_status


def logs(
    env: Environment = typer.Option(Environment.DEV, "--env", "-e", help="Environment whose function logs to tail"),
    since: str = typer.Option("10m", "--since", help="How far back to start, e.g. 10m, 1h"),
    follow: bool = typer.Option(False, "--follow", "-f", help="Keep streaming new log events"),
    profile: str = typer.Option(None, "--profile", "-p", help="AWS profile to use"),
    region: str = typer.Option(None, "--region", "-r", help="AWS region to use"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Tail recent CloudWatch logs of the sweepstake rewards calculator."""
    config = apply_profile_override(get_config(region=region), env, profile)
    setup_logging(interactive=False, log_file=config.log_file, level=config.log_level, verbose=verbose)

    aws_profile = config.profile_for(env)
    function_name = config.function_name_for(env)

    try:
        for line in ensure_session(aws_profile, config.aws_cli):
            render_status(line, level="warning")
    except SessionError as e:
        render_status(str(e), level="error")
        raise typer.Exit(1)

    render_status(f"Tailing logs for {function_name} ({aws_profile})")
    try:
        exit_code = tail_function_logs(
            profile=aws_profile,
            function_name=function_name,
            aws_cli=config.aws_cli,
            since=since,
            follow=follow,
            region=config.region,
        )
    except SessionError as e:
        render_status(str(e), level="error")
        raise typer.Exit(1)
    if exit_code != 0:
        render_status(f"aws logs tail exited with status {exit_code}", level="error")
        raise typer.Exit(exit_code)
