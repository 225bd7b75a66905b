# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
PLAYTOOLS Command Line Interface.

This module provides the main CLI interface for PLAYTOOLS, a tool for running
the rewards sweepstake calculator Lambda. It handles AWS SSO session checks,
Lambda invocation and display of the response and logs.

Main Commands:
    (no command) / menu: Interactive full-screen menu
    invoke: Run a single sweepstake action non-interactively
    logs: Tail the calculator's CloudWatch logs
"""

import typer

from playtools import __version__
from playtools.commands import invoke, logs, menu


app = typer.Typer(help="Rewards sweepstake tools for AWS Lambda.")


def _version_callback(value: bool):
    if value:
        typer.echo(f"playtools {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
):
    """Open the interactive menu when no command is given."""
    if ctx.invoked_subcommand is None:
        menu(region=None, log_file=None)


# Register commands from modules
app.command()(menu)
app.command()(invoke)
app.command()(logs)


if __name__ == "__main__":
    app()
