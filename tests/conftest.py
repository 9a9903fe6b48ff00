"""Shared fixtures for sandbox tests.

No real docker, podman, or sandbox-exec is ever invoked: the probe, the
command runner, and the exec primitive are all test doubles.
"""

from typing import List
from unittest.mock import MagicMock

import pytest

from cli_sandbox.ui.terminal import RichConsole
from tests.helpers import ExecRecorder


@pytest.fixture
def exec_recorder():
    return ExecRecorder()


@pytest.fixture
def console():
    return MagicMock(spec=RichConsole)


@pytest.fixture
def printed(console):
    """Lines printed through the console mock."""
    def _lines() -> List[str]:
        return [str(call.args[0]) for call in console.print.call_args_list]
    return _lines


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """Remove sandbox-related variables from the real environment."""
    for key in (
        "SANDBOX",
        "GEMINI_SANDBOX",
        "GEMINI_SANDBOX_IMAGE",
        "SEATBELT_PROFILE",
        "CLI_SANDBOX_LOG_LEVEL",
        "CLI_SANDBOX_LOG_FILE",
    ):
        monkeypatch.delenv(key, raising=False)
