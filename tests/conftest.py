"""Shared fixtures for the PLAYTOOLS test suite."""

import os

import pytest
from prompt_toolkit.application import create_app_session
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput


@pytest.fixture(autouse=True)
def clean_playtools_env(monkeypatch):
    """Keep the developer's PLAYTOOLS_* variables out of the tests."""
    for name in list(os.environ):
        if name.startswith("PLAYTOOLS_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def pipe_input():
    """Run prompt_toolkit against a pipe and a dummy output instead of a TTY."""
    with create_pipe_input() as inp:
        with create_app_session(input=inp, output=DummyOutput()):
            yield inp
