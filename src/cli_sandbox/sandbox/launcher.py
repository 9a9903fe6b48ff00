"""
Sandbox entry - decide, then relaunch.

Ties policy resolution to the container and seatbelt launchers. This runs
once at start-up, before any prompt is sent or tool executed.
"""

import sys
from typing import Any, Callable, List, Mapping, Optional

from ..core.config import LaunchConfig, SandboxBackend, SandboxSettings
from ..core.exceptions import SandboxError
from ..core.logging_config import get_logger
from ..ui.terminal import RichConsole
from .container import ContainerLauncher
from .detection import is_inside_sandbox
from .policy import SandboxOption, load_launch_config
from .seatbelt import ProfileLauncher

logger = get_logger(__name__)


def merge_sandbox_option(flag: Any, settings: Optional[SandboxSettings]) -> SandboxOption:
    """An explicitly passed --sandbox wins over the config file value."""
    if flag is not None:
        return SandboxOption.from_value(flag)
    if settings is not None and settings.sandbox is not None:
        return SandboxOption.from_value(settings.sandbox)
    return SandboxOption.unset()


def merge_image_option(flag: Optional[str], settings: Optional[SandboxSettings]) -> str:
    """An explicitly passed --sandbox-image wins over the config file value."""
    if flag:
        return flag
    if settings is not None and settings.sandbox_image:
        return settings.sandbox_image
    return ""


def start_sandbox(
    config: Optional[LaunchConfig],
    args: List[str],
    executable: Optional[str] = None,
    container_launcher: Optional[ContainerLauncher] = None,
    profile_launcher: Optional[ProfileLauncher] = None,
) -> None:
    """
    Relaunch under the configured sandbox.

    Args:
        config: Launch configuration; None means do nothing
        args: Original arguments, passed through unmodified
        executable: Program to run inside (defaults to sys.argv[0])
    """
    if config is None:
        return

    executable = executable or sys.argv[0]

    if config.backend.is_container:
        launcher = container_launcher or ContainerLauncher()
        launcher.launch(config, args, executable)
    elif config.backend == SandboxBackend.SANDBOX_EXEC:
        launcher = profile_launcher or ProfileLauncher()
        launcher.launch(args, executable)
    else:
        raise SandboxError(f"unknown sandbox command: {config.backend}")


def enter_sandbox(
    settings: Optional[SandboxSettings],
    sandbox_flag: Any = None,
    image_flag: Optional[str] = None,
    args: Optional[List[str]] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    platform: Optional[str] = None,
    command_exists: Optional[Callable[[str], bool]] = None,
    executable: Optional[str] = None,
    container_launcher: Optional[ContainerLauncher] = None,
    profile_launcher: Optional[ProfileLauncher] = None,
    console: Optional[RichConsole] = None,
) -> Optional[LaunchConfig]:
    """
    Enter a sandbox if one is requested.

    Returns None when no sandbox is needed. With the real process
    primitives a requested sandbox never returns here; errors raise
    SandboxError and must not fall back to running unsandboxed.
    """
    if is_inside_sandbox(environ):
        return None

    option = merge_sandbox_option(sandbox_flag, settings)
    image = merge_image_option(image_flag, settings)

    config = load_launch_config(
        option,
        image,
        environ=environ,
        platform=platform,
        command_exists=command_exists,
    )
    if config is None:
        return None

    if profile_launcher is None and config.backend == SandboxBackend.SANDBOX_EXEC:
        profile_launcher = ProfileLauncher(
            environ=environ,
            include_dirs=settings.include_directories if settings else None,
            console=console,
        )
    if container_launcher is None and config.backend.is_container:
        container_launcher = ContainerLauncher(environ=environ, console=console)

    args = sys.argv[1:] if args is None else args
    start_sandbox(
        config,
        args,
        executable=executable,
        container_launcher=container_launcher,
        profile_launcher=profile_launcher,
    )
    return config
