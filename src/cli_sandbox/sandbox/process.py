"""
Process Primitives - probing, running, and replacing processes.

The three collaborators every launcher takes as parameters:
- command_exists: is an executable reachable on PATH
- run_command: run an external command to completion
- replace_process: exec into another program (never returns on success)
"""

import os
import shutil
import subprocess
import sys
from typing import Callable, Dict, List, NoReturn

from pydantic import BaseModel

from ..core.exceptions import ExecutableNotFoundError, ProcessReplacementError
from ..core.logging_config import get_logger

logger = get_logger(__name__)

# exec_process parameters of the launchers
ProcessReplacer = Callable[[str, List[str], Dict[str, str]], NoReturn]


class CommandResult(BaseModel):
    """Result of a non-replacing external command."""
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.exit_code == 0


def command_exists(name: str) -> bool:
    """Check if a command exists in PATH."""
    return shutil.which(name) is not None


def run_command(args: List[str], capture: bool = True) -> CommandResult:
    """
    Run a command and wait for it.

    Args:
        args: Argument vector, program first
        capture: Capture stdout/stderr; otherwise they stream to the terminal

    Returns:
        CommandResult (stdout/stderr empty when streamed)
    """
    logger.debug("Running %s", args)
    if capture:
        result = subprocess.run(args, capture_output=True, text=True)
        return CommandResult(
            exit_code=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )

    result = subprocess.run(args)
    return CommandResult(exit_code=result.returncode)


def replace_process(name: str, args: List[str], env: Dict[str, str]) -> NoReturn:
    """
    Replace the current process with `name args...`.

    argv[0] is `name` as given; the executable is resolved on PATH. On
    success the new program takes over this process id, stdio, and
    terminal, so nothing after this call runs. Failures raise and leave the
    current process intact.

    Raises:
        ExecutableNotFoundError: `name` is not on PATH
        ProcessReplacementError: execve failed
    """
    path = shutil.which(name)
    if path is None:
        raise ExecutableNotFoundError(name)

    argv = [name, *args]
    logger.debug("exec %s %s", path, argv[1:])

    # Buffered output would be lost with the old image
    sys.stdout.flush()
    sys.stderr.flush()

    try:
        os.execve(path, argv, env)
    except OSError as e:
        raise ProcessReplacementError(f"failed to exec command: {e}", backend=name) from e
