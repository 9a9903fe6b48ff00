"""Test doubles for the injected process primitives."""

from typing import Dict, List, Optional

from cli_sandbox.sandbox.process import CommandResult


class ExecRecorder:
    """Stands in for replace_process and records the invocation."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.calls: List[tuple] = []

    def __call__(self, name: str, args: List[str], env: Dict[str, str]) -> None:
        self.calls.append((name, list(args), dict(env)))
        if self.error is not None:
            raise self.error

    @property
    def name(self) -> str:
        return self.calls[-1][0]

    @property
    def args(self) -> List[str]:
        return self.calls[-1][1]

    @property
    def env(self) -> Dict[str, str]:
        return self.calls[-1][2]


class FakeRunner:
    """Stands in for run_command, replaying canned results in order."""

    def __init__(self, *results: CommandResult):
        self.results = list(results)
        self.calls: List[tuple] = []

    def __call__(self, args: List[str], capture: bool = True) -> CommandResult:
        self.calls.append((list(args), capture))
        return self.results.pop(0)


def probe_for(*available: str):
    """Executable probe that only finds the named commands."""
    return lambda cmd: cmd in available


def ok(stdout: str = "") -> CommandResult:
    return CommandResult(exit_code=0, stdout=stdout)


def failed(code: int = 1, stderr: str = "") -> CommandResult:
    return CommandResult(exit_code=code, stderr=stderr)
