"""Core module - Configuration, errors, and logging."""

from .config import CLIConfig, LaunchConfig, SandboxBackend, SandboxSettings, load_config
from .exceptions import SandboxError

__all__ = [
    "CLIConfig",
    "LaunchConfig",
    "SandboxBackend",
    "SandboxSettings",
    "load_config",
    "SandboxError",
]
