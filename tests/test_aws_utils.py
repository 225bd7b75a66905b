"""Unit tests for aws_utils.py."""

import subprocess

import pytest

from playtools.aws_utils import (
    ensure_session,
    log_group_for,
    session_is_valid,
    sso_login,
    tail_function_logs,
)
from playtools.errors import ExecutableNotFoundError, SessionError


def completed(returncode, stdout=b""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout)


@pytest.fixture
def aws_cli(mocker):
    """Pretend the AWS CLI is installed."""
    return mocker.patch("playtools.aws_utils.get_app_path", return_value="/usr/local/bin/aws")


def test_session_is_valid_success(mocker, aws_cli):
    """Test session_is_valid when get-caller-identity succeeds."""
    mock_run = mocker.patch("playtools.aws_utils.subprocess.run", return_value=completed(0))

    assert session_is_valid("platform-nonprod-engineer") is True
    args = mock_run.call_args[0][0]
    assert args == ["/usr/local/bin/aws", "sts", "get-caller-identity", "--profile", "platform-nonprod-engineer"]


def test_session_is_valid_failure(mocker, aws_cli):
    """Test session_is_valid when the caller identity check exits non-zero."""
    mocker.patch("playtools.aws_utils.subprocess.run", return_value=completed(255))

    assert session_is_valid("platform-nonprod-engineer") is False


def test_ensure_session_valid_never_logs_in(mocker, aws_cli):
    """A valid session must not trigger the SSO login."""
    mock_run = mocker.patch("playtools.aws_utils.subprocess.run", return_value=completed(0))

    lines = ensure_session("platform-nonprod-engineer")

    assert lines == []
    assert mock_run.call_count == 1
    assert "sso" not in mock_run.call_args[0][0]


def test_ensure_session_relogin_success(mocker, aws_cli):
    """An expired session followed by a good login lets the caller proceed."""
    mock_run = mocker.patch(
        "playtools.aws_utils.subprocess.run",
        side_effect=[completed(255), completed(0, b"Successfully logged into Start URL")],
    )

    lines = ensure_session("platform-prod-engineer")

    assert lines == ["SSO session expired. Logging in...", "SSO login successful"]
    login_args = mock_run.call_args_list[1][0][0]
    assert login_args == ["/usr/local/bin/aws", "sso", "login", "--profile", "platform-prod-engineer"]
    assert mock_run.call_args_list[1][1]["stderr"] == subprocess.STDOUT


def test_ensure_session_relogin_failure_carries_output(mocker, aws_cli):
    """A failed login raises with the command's captured output."""
    mocker.patch(
        "playtools.aws_utils.subprocess.run",
        side_effect=[completed(255), completed(1, b"Error when retrieving token from sso: Token has expired")],
    )

    with pytest.raises(SessionError) as excinfo:
        ensure_session("platform-prod-engineer")

    assert "SSO login failed" in str(excinfo.value)
    assert "Token has expired" in str(excinfo.value)


def test_ensure_session_missing_cli(mocker):
    """Test ensure_session when the AWS CLI is not on PATH."""
    mocker.patch("playtools.helpers.shutil.which", return_value=None)
    mock_run = mocker.patch("playtools.aws_utils.subprocess.run")

    with pytest.raises(ExecutableNotFoundError, match="AWS CLI not found"):
        ensure_session("platform-nonprod-engineer")

    mock_run.assert_not_called()


def test_ensure_session_cli_not_executable(mocker, aws_cli):
    """Test ensure_session when the configured AWS CLI cannot be run."""
    mocker.patch(
        "playtools.aws_utils.subprocess.run",
        side_effect=PermissionError(13, "Permission denied"),
    )

    with pytest.raises(SessionError, match="failed to run AWS CLI: .*Permission denied"):
        ensure_session("platform-nonprod-engineer")


def test_sso_login_cli_not_executable(mocker, aws_cli):
    """Test sso_login wraps an OS error from launching the AWS CLI."""
    mocker.patch("playtools.aws_utils.subprocess.run", side_effect=OSError(8, "Exec format error"))

    with pytest.raises(SessionError, match="failed to run AWS CLI"):
        sso_login("platform-nonprod-engineer")


def test_sso_login_returns_output(mocker, aws_cli):
    """Test sso_login decodes the combined output."""
    mocker.patch("playtools.aws_utils.subprocess.run", return_value=completed(0, b"Opening browser\n"))

    assert sso_login("platform-nonprod-engineer") == "Opening browser"


def test_tail_function_logs_builds_command(mocker, aws_cli):
    """Test tail_function_logs passes log group, profile and options."""
    mock_run = mocker.patch("playtools.aws_utils.subprocess.run", return_value=completed(0))

    exit_code = tail_function_logs(
        profile="platform-nonprod-engineer",
        function_name="imx-rewards-dev-sweepstake-rewards-calculator",
        since="1h",
        follow=True,
        region="us-east-1",
    )

    assert exit_code == 0
    assert mock_run.call_args[0][0] == [
        "/usr/local/bin/aws", "logs", "tail",
        "/aws/lambda/imx-rewards-dev-sweepstake-rewards-calculator",
        "--profile", "platform-nonprod-engineer",
        "--since", "1h", "--follow", "--region", "us-east-1",
    ]


def test_log_group_for():
    assert log_group_for("fn") == "/aws/lambda/fn"
