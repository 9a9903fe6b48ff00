"""
CLI Sandbox - relaunch a CLI coding agent inside an isolated environment

Before any prompt is sent or tool executed, decides whether the process
should re-execute itself inside:
- docker or podman (image probed, pulled once if missing)
- macOS sandbox-exec with a bundled seatbelt profile

and if so replaces the current process with the sandboxed invocation.
"""

__version__ = "0.1.0"
__author__ = "CLI Coding Agent Team"

# Core
from .core.config import CLIConfig, LaunchConfig, SandboxBackend, SandboxSettings, load_config
from .core.exceptions import SandboxError

# Sandbox
from .sandbox.detection import is_inside_sandbox
from .sandbox.policy import SandboxOption, load_launch_config, resolve_backend
from .sandbox.container import ContainerLauncher
from .sandbox.seatbelt import ProfileLauncher
from .sandbox.launcher import enter_sandbox, start_sandbox

# UI
from .ui.terminal import TerminalUI

__all__ = [
    # Version
    "__version__",
    # Core
    "CLIConfig",
    "LaunchConfig",
    "SandboxBackend",
    "SandboxSettings",
    "load_config",
    "SandboxError",
    # Sandbox
    "is_inside_sandbox",
    "SandboxOption",
    "load_launch_config",
    "resolve_backend",
    "ContainerLauncher",
    "ProfileLauncher",
    "enter_sandbox",
    "start_sandbox",
    # UI
    "TerminalUI",
]
