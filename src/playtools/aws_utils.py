# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
AWS utilities for PLAYTOOLS.

This module wraps the AWS CLI calls PLAYTOOLS depends on: verifying that the
SSO session behind a profile is still valid, re-running the SSO browser login
when it is not, and tailing a Lambda function's CloudWatch log group.

Functions:
    session_is_valid: Check whether the profile's credentials still work
    sso_login: Run the interactive SSO login for a profile
    ensure_session: Check the session and log in again when needed
    tail_function_logs: Stream recent log events of a Lambda function
"""

import logging
import subprocess
from typing import Optional

from playtools.errors import ExecutableNotFoundError, SessionError
from playtools.helpers import decode_output, get_app_path

logger = logging.getLogger(__name__)


def _resolve_cli(aws_cli: str) -> str:
    try:
        return get_app_path(aws_cli)
    except (ExecutableNotFoundError, ValueError) as e:
        raise ExecutableNotFoundError("AWS CLI not found") from e


def _run(cmd: list[str], **kwargs) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(cmd, check=False, **kwargs)
    except OSError as e:
        raise SessionError(f"failed to run AWS CLI: {e}") from e


def session_is_valid(profile: str, aws_cli: str = "aws") -> bool:
    """Return True when ``sts get-caller-identity`` succeeds for ``profile``.

    Only the exit code is inspected.
    """
    cli_path = _resolve_cli(aws_cli)
    result = _run(
        [cli_path, "sts", "get-caller-identity", "--profile", profile],
        capture_output=True
    )
    if result.returncode != 0:
        logger.info("Caller identity check failed for profile %s (exit %s)", profile, result.returncode)
        return False
    return True


def sso_login(profile: str, aws_cli: str = "aws") -> str:
    """Run ``aws sso login`` for ``profile`` and block until it exits.

    The AWS CLI opens a browser window for the login.

    Returns:
        The combined stdout/stderr of the login command

    Raises:
        SessionError: If the login command exits with a non-zero status
    """
    cli_path = _resolve_cli(aws_cli)
    result = _run(
        [cli_path, "sso", "login", "--profile", profile],
        stdout=subprocess.PIPE, stderr=subprocess.STDOUT
    )
    output = decode_output(result.stdout)
    if result.returncode != 0:
        logger.warning("SSO login failed for profile %s (exit %s)", profile, result.returncode)
        raise SessionError(f"SSO login failed: exit status {result.returncode}\nOutput: {output}")
    logger.info("SSO login succeeded for profile %s", profile)
    return output


def ensure_session(profile: str, aws_cli: str = "aws") -> list[str]:
    """Make sure ``profile`` has a usable SSO session.

    Args:
        profile: AWS profile name to check
        aws_cli: AWS CLI executable name or path

    Returns:
        Informational lines describing what happened (empty if the session
        was already valid)

    Raises:
        ExecutableNotFoundError: If the AWS CLI is not installed
        SessionError: If the session was invalid and re-login failed
    """
    lines: list[str] = []
    if session_is_valid(profile, aws_cli):
        return lines

    lines.append("SSO session expired. Logging in...")
    sso_login(profile, aws_cli)
    lines.append("SSO login successful")
    return lines


def log_group_for(function_name: str) -> str:
    return f"/aws/lambda/{function_name}"


def tail_function_logs(
    profile: str,
    function_name: str,
    aws_cli: str = "aws",
    since: Optional[str] = None,
    follow: bool = False,
    region: Optional[str] = None,
) -> int:
    """Stream ``aws logs tail`` output for a Lambda function to the terminal.

    Returns:
        The exit code of the AWS CLI
    """
    cli_path = _resolve_cli(aws_cli)
    cmd = [cli_path, "logs", "tail", log_group_for(function_name), "--profile", profile]
    if since:
        cmd.extend(["--since", since])
    if follow:
        cmd.append("--follow")
    if region:
        cmd.extend(["--region", region])

    logger.debug("Running %s", " ".join(cmd))
    try:
        return _run(cmd).returncode
    except KeyboardInterrupt:
        # --follow only ends on interrupt
        return 0
