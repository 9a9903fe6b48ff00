"""
Configuration for CLI Sandbox.

Holds the backend enum, the immutable launch configuration produced once per
process start, and the settings object the CLI reads from YAML or the
environment before deciding whether to re-execute inside a sandbox.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field


class SandboxBackend(str, Enum):
    """Supported isolation mechanisms."""
    DOCKER = "docker"
    PODMAN = "podman"
    SANDBOX_EXEC = "sandbox-exec"  # macOS seatbelt

    @property
    def is_container(self) -> bool:
        return self in (SandboxBackend.DOCKER, SandboxBackend.PODMAN)

    @classmethod
    def names(cls) -> list[str]:
        return [backend.value for backend in cls]


class LaunchConfig(BaseModel):
    """Resolved sandbox launch configuration. Never mutated once built."""
    model_config = ConfigDict(frozen=True)

    backend: SandboxBackend
    image: str = Field(default="", description="Container image, unused by sandbox-exec")


class SandboxSettings(BaseModel):
    """
    Sandbox settings from the `tools` section of the config file.

    `sandbox` mirrors the --sandbox flag: a boolean, or a string that is
    either "true"/"false"/"1"/"0" or a backend name.
    """
    sandbox: Optional[Union[bool, str]] = Field(default=None, description="Enable sandbox or name a backend")
    sandbox_image: Optional[str] = Field(default=None, description="Container image override")
    include_directories: list[str] = Field(
        default_factory=list,
        description="Extra writable directories for seatbelt profiles (max 5)",
    )


class ObservabilityConfig(BaseModel):
    """Logging configuration."""
    log_level: str = Field(default="WARNING")
    log_file: Optional[str] = Field(default=None)


class CLIConfig(BaseModel):
    """Master configuration for CLI Sandbox."""
    tools: SandboxSettings = Field(default_factory=SandboxSettings)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "CLIConfig":
        """Load configuration from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls(**(data or {}))

    @classmethod
    def from_env(cls) -> "CLIConfig":
        """Create configuration from environment variables."""
        config = cls()

        if log_level := os.getenv("CLI_SANDBOX_LOG_LEVEL"):
            config.observability.log_level = log_level.upper()
        if log_file := os.getenv("CLI_SANDBOX_LOG_FILE"):
            config.observability.log_file = log_file

        return config

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to YAML file."""
        with open(path, "w") as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False)


def load_config(path: Optional[str | Path] = None) -> CLIConfig:
    """
    Load configuration from file or environment.

    Args:
        path: Optional path to YAML config file. If None, loads from environment.

    Returns:
        CLIConfig instance
    """
    if path:
        return CLIConfig.from_yaml(path)
    return CLIConfig.from_env()
