"""
Sandbox Module - Sandbox resolution and re-execution

Implements the start-up sandbox hop:
- Policy resolution across flag, config, and environment
- Container launch (docker / podman) with image pull
- Seatbelt profile launch (macOS sandbox-exec)
- In-place process replacement
"""

from .detection import is_inside_sandbox, SANDBOX_ENV
from .policy import SandboxOption, OptionKind, resolve_backend, resolve_image, load_launch_config
from .process import CommandResult, ProcessReplacer, command_exists, run_command, replace_process
from .container import ContainerLauncher
from .seatbelt import ProfileLauncher, load_profile, list_profiles
from .launcher import enter_sandbox, start_sandbox

__all__ = [
    "is_inside_sandbox",
    "SANDBOX_ENV",
    "SandboxOption",
    "OptionKind",
    "resolve_backend",
    "resolve_image",
    "load_launch_config",
    "CommandResult",
    "command_exists",
    "run_command",
    "replace_process",
    "ProcessReplacer",
    "ContainerLauncher",
    "ProfileLauncher",
    "load_profile",
    "list_profiles",
    "enter_sandbox",
    "start_sandbox",
]
