"""
Sandbox Policy Resolution

Decides which backend (if any) to relaunch under:
- GEMINI_SANDBOX overrides the --sandbox flag and config value
- explicit backend names are validated and never downgraded
- a generic "enabled" picks sandbox-exec on macOS, then docker, then podman

Then resolves the container image into an immutable LaunchConfig.
"""

import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from ..core.config import LaunchConfig, SandboxBackend
from ..core.exceptions import (
    InvalidBackendError,
    MissingExecutableError,
    MissingImageError,
    SandboxUnavailableError,
)
from ..core.logging_config import get_logger
from .detection import is_inside_sandbox
from .process import command_exists as default_command_exists

logger = get_logger(__name__)

SANDBOX_OVERRIDE_ENV = "GEMINI_SANDBOX"
SANDBOX_IMAGE_ENV = "GEMINI_SANDBOX_IMAGE"

DEFAULT_IMAGE = "us-docker.pkg.dev/gemini-code-dev/gemini-cli/sandbox:latest"

# Platform with a native access-control facility
SEATBELT_PLATFORM = "darwin"

_TRUTHY = ("1", "true")
_FALSY = ("0", "false", "")


class OptionKind(str, Enum):
    """Shape of the merged --sandbox value."""
    UNSET = "unset"
    ENABLED = "enabled"
    NAMED = "named"


@dataclass(frozen=True)
class SandboxOption:
    """
    The --sandbox value after the flag/config merge.

    UNSET: nothing given. ENABLED: a yes/no choice (`enabled`).
    NAMED: an explicit backend name (`name`), validated later.
    """
    kind: OptionKind = OptionKind.UNSET
    enabled: bool = False
    name: str = ""

    @classmethod
    def unset(cls) -> "SandboxOption":
        return cls()

    @classmethod
    def flag(cls, enabled: bool) -> "SandboxOption":
        return cls(kind=OptionKind.ENABLED, enabled=enabled)

    @classmethod
    def named(cls, name: str) -> "SandboxOption":
        return cls(kind=OptionKind.NAMED, name=name)

    @classmethod
    def parse(cls, value: str) -> "SandboxOption":
        """Interpret a string: "1"/"true", "0"/"false"/"", or a backend name."""
        val = value.strip().lower()
        if val in _TRUTHY:
            return cls.flag(True)
        if val in _FALSY:
            return cls.flag(False)
        return cls.named(val)

    @classmethod
    def from_value(cls, value: Any) -> "SandboxOption":
        """Build from a flag or config value (None, bool, or str)."""
        if value is None:
            return cls.unset()
        if isinstance(value, bool):
            return cls.flag(value)
        if isinstance(value, str):
            return cls.parse(value)
        # Anything else counts as disabled
        return cls.flag(False)


def resolve_backend(
    option: SandboxOption,
    environ: Optional[Mapping[str, str]] = None,
    platform: Optional[str] = None,
    command_exists: Optional[Callable[[str], bool]] = None,
) -> Optional[SandboxBackend]:
    """
    Resolve which sandbox backend to use.

    Args:
        option: Merged flag/config value
        environ: Environment snapshot (defaults to os.environ)
        platform: Host platform, as in sys.platform
        command_exists: Executable probe

    Returns:
        The backend, or None when no sandbox should be used

    Raises:
        InvalidBackendError: Unknown explicit backend name
        MissingExecutableError: Explicit backend is not installed
        SandboxUnavailableError: Sandbox enabled but no backend found
    """
    environ = os.environ if environ is None else environ
    platform = sys.platform if platform is None else platform
    exists = command_exists or default_command_exists

    if is_inside_sandbox(environ):
        logger.debug("Already inside a sandbox, not sandboxing again")
        return None

    env_value = environ.get(SANDBOX_OVERRIDE_ENV, "")
    if env_value:
        logger.debug("%s=%r overrides sandbox option", SANDBOX_OVERRIDE_ENV, env_value)
        option = SandboxOption.parse(env_value)

    if option.kind == OptionKind.NAMED:
        if option.name not in SandboxBackend.names():
            raise InvalidBackendError(option.name, SandboxBackend.names())
        if not exists(option.name):
            raise MissingExecutableError(option.name)
        return SandboxBackend(option.name)

    if not option.enabled:
        return None

    if platform == SEATBELT_PLATFORM and exists(SandboxBackend.SANDBOX_EXEC.value):
        return SandboxBackend.SANDBOX_EXEC
    for backend in (SandboxBackend.DOCKER, SandboxBackend.PODMAN):
        if exists(backend.value):
            logger.info("Using %s for sandbox", backend.value)
            return backend

    raise SandboxUnavailableError(
        f"{SANDBOX_OVERRIDE_ENV} is true but failed to determine command for sandbox; "
        f"install docker or podman or specify command in {SANDBOX_OVERRIDE_ENV}"
    )


def resolve_image(
    image_option: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    default: str = DEFAULT_IMAGE,
) -> str:
    """Pick the image: explicit option, then GEMINI_SANDBOX_IMAGE, then default."""
    environ = os.environ if environ is None else environ
    return image_option or environ.get(SANDBOX_IMAGE_ENV, "") or default


def load_launch_config(
    option: SandboxOption,
    image_option: Optional[str] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    platform: Optional[str] = None,
    command_exists: Optional[Callable[[str], bool]] = None,
    default_image: str = DEFAULT_IMAGE,
) -> Optional[LaunchConfig]:
    """
    Build the launch configuration.

    Returns:
        LaunchConfig, or None when sandboxing is not requested

    Raises:
        MissingImageError: A container backend has no image
        (plus anything resolve_backend raises)
    """
    environ = os.environ if environ is None else environ

    backend = resolve_backend(option, environ, platform, command_exists)
    if backend is None:
        return None

    image = resolve_image(image_option, environ, default_image)
    if not image and backend.is_container:
        raise MissingImageError("sandbox image is not specified", backend=backend.value)

    config = LaunchConfig(backend=backend, image=image)
    logger.debug("Sandbox launch config: %s", config)
    return config
