"""
Sandbox exception hierarchy.

Every failure on the way into a sandbox is a SandboxError subclass, so the
entry point can report it and exit non-zero without ever falling back to
unsandboxed execution.

Usage:
    from cli_sandbox.core.exceptions import SandboxError

    try:
        enter_sandbox(settings, flag, image, argv)
    except SandboxError as e:
        ui.console.print_error(str(e), "Sandbox Failed")
        sys.exit(1)
"""

from typing import Optional


class SandboxError(Exception):
    """Base exception for sandbox resolution and launch errors."""

    def __init__(self, message: str, *, backend: Optional[str] = None):
        self.backend = backend
        super().__init__(message)


# Policy resolution

class InvalidBackendError(SandboxError):
    """An explicitly named backend is not one of the supported ones."""

    def __init__(self, name: str, valid: list[str]):
        self.name = name
        self.valid = valid
        super().__init__(
            f"invalid sandbox command '{name}'. Must be one of {valid}",
        )


class MissingExecutableError(SandboxError):
    """An explicitly requested backend is not installed."""

    def __init__(self, backend: str):
        super().__init__(
            f"missing sandbox command '{backend}' (from GEMINI_SANDBOX)",
            backend=backend,
        )


class SandboxUnavailableError(SandboxError):
    """Sandboxing was requested generically but no backend is available."""

    pass


class MissingImageError(SandboxError):
    """A container backend was selected without a resolvable image."""

    pass


# Container images

class ImageProbeError(SandboxError):
    """The backend's image listing command failed (daemon down, etc.)."""

    def __init__(self, message: str, *, backend: str, image: str):
        self.image = image
        super().__init__(message, backend=backend)


class ImagePullError(SandboxError):
    """Pulling the sandbox image failed."""

    def __init__(self, message: str, *, backend: str, image: str):
        self.image = image
        super().__init__(message, backend=backend)


class ImageUnavailableError(SandboxError):
    """The image is still missing after the single pull attempt."""

    def __init__(self, message: str, *, backend: str, image: str):
        self.image = image
        super().__init__(message, backend=backend)


# Seatbelt profiles

class ProfileError(SandboxError):
    """Errors preparing a seatbelt profile."""

    def __init__(self, message: str, *, profile: Optional[str] = None):
        self.profile = profile
        super().__init__(message, backend="sandbox-exec")


class UnknownProfileError(ProfileError):
    """No bundled profile has the requested name."""

    def __init__(self, profile: str):
        super().__init__(f"missing macos seatbelt profile '{profile}'", profile=profile)


class ProfileFileError(ProfileError):
    """The transient profile file could not be created or written."""

    pass


# Process replacement

class ExecutableNotFoundError(SandboxError):
    """The executable to exec into is not on PATH."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"executable not found: {name}")


class ProcessReplacementError(SandboxError):
    """execve itself failed; the current process keeps running."""

    pass


# Host environment

class WorkingDirectoryError(SandboxError):
    """The current working directory could not be determined."""

    pass


class HomeDirectoryError(SandboxError):
    """The user home or cache directory could not be determined."""

    pass
