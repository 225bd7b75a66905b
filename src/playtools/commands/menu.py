"""
PLAYTOOLS Interactive Menu Command.

This module provides the command that opens the full-screen sweepstake menu.
"""

import typer
from rich.console import Console
from rich.markup import escape

from playtools.config import get_config
from playtools.invoker import RemoteInvoker
from playtools.logging_setup import setup_logging
from playtools.tui.app import run_menu

console = Console(stderr=True)


def menu(
    region: str = typer.Option(None, "--region", "-r", help="AWS region to use (default: from profile)"),
    log_file: str = typer.Option(None, "--log-file", help="Write debug logs to this file"),
):
    """Open the interactive menu: pick an environment, an action and run it."""
    config = get_config(region=region, log_file=log_file)
    setup_logging(interactive=True, log_file=config.log_file, level=config.log_level)

    try:
        exit_code = run_menu(RemoteInvoker(config))
    except Exception as e:
        console.print(f"[red]Error running program: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    raise typer.Exit(exit_code)
