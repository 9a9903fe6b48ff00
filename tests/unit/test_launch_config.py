"""Unit tests for image resolution and LaunchConfig building."""

import pytest
from pydantic import ValidationError

from cli_sandbox.core.config import LaunchConfig, SandboxBackend
from cli_sandbox.core.exceptions import MissingImageError
from cli_sandbox.sandbox.policy import (
    DEFAULT_IMAGE,
    SandboxOption,
    load_launch_config,
    resolve_image,
)
from tests.helpers import probe_for

DOCKER = probe_for("docker")


class TestResolveImage:
    @pytest.mark.parametrize(
        "option, env_image, expected",
        [
            ("", "", DEFAULT_IMAGE),
            ("my-image", "", "my-image"),
            ("", "env-image", "env-image"),
            ("img-flag", "img-env", "img-flag"),
            (None, "img-env", "img-env"),
        ],
    )
    def test_precedence(self, option, env_image, expected):
        environ = {"GEMINI_SANDBOX_IMAGE": env_image} if env_image else {}
        assert resolve_image(option, environ) == expected

    def test_custom_default(self):
        assert resolve_image("", {}, default="fallback:1") == "fallback:1"


class TestLoadLaunchConfig:
    def test_sandbox_true_uses_default_image(self):
        config = load_launch_config(
            SandboxOption.flag(True), "", environ={}, platform="linux", command_exists=DOCKER
        )
        assert config == LaunchConfig(backend=SandboxBackend.DOCKER, image=DEFAULT_IMAGE)

    def test_image_flag(self):
        config = load_launch_config(
            SandboxOption.flag(True), "my-image", environ={}, platform="linux", command_exists=DOCKER
        )
        assert config.image == "my-image"

    def test_image_env(self):
        config = load_launch_config(
            SandboxOption.flag(True),
            "",
            environ={"GEMINI_SANDBOX_IMAGE": "env-image"},
            platform="linux",
            command_exists=DOCKER,
        )
        assert config.image == "env-image"

    def test_image_flag_overrides_env(self):
        config = load_launch_config(
            SandboxOption.flag(True),
            "img-flag",
            environ={"GEMINI_SANDBOX_IMAGE": "img-env"},
            platform="linux",
            command_exists=DOCKER,
        )
        assert config.image == "img-flag"

    def test_sandbox_false_returns_none(self):
        config = load_launch_config(
            SandboxOption.flag(False), "img", environ={}, platform="linux", command_exists=DOCKER
        )
        assert config is None

    def test_container_backend_without_image(self):
        with pytest.raises(MissingImageError) as exc_info:
            load_launch_config(
                SandboxOption.named("podman"),
                "",
                environ={},
                platform="linux",
                command_exists=probe_for("podman"),
                default_image="",
            )
        assert exc_info.value.backend == "podman"

    def test_sandbox_exec_without_image(self):
        config = load_launch_config(
            SandboxOption.flag(True),
            "",
            environ={},
            platform="darwin",
            command_exists=probe_for("sandbox-exec"),
            default_image="",
        )
        assert config.backend == SandboxBackend.SANDBOX_EXEC
        assert config.image == ""

    def test_config_is_frozen(self):
        config = load_launch_config(
            SandboxOption.flag(True), "", environ={}, platform="linux", command_exists=DOCKER
        )
        with pytest.raises(ValidationError):
            config.image = "other"
