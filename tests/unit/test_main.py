"""Unit tests for the cli-sandbox entry point."""

from unittest.mock import patch

import pytest

from cli_sandbox.core.config import LaunchConfig, SandboxBackend
from cli_sandbox.core.exceptions import SandboxUnavailableError
from cli_sandbox.main import build_parser, main


class TestParser:
    def test_sandbox_flag_without_value(self):
        args = build_parser().parse_args(["--sandbox"])
        assert args.sandbox is True

    def test_sandbox_flag_takes_no_value(self):
        args = build_parser().parse_args(["-s", "fix", "the", "bug"])
        assert args.sandbox is True
        assert args.args == ["fix", "the", "bug"]

    def test_sandbox_backend(self):
        args = build_parser().parse_args(["--sandbox-backend", "podman", "--sandbox-image", "img"])
        assert args.sandbox is None
        assert args.sandbox_backend == "podman"
        assert args.sandbox_image == "img"

    def test_sandbox_backend_rejects_unknown(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--sandbox-backend", "lxc"])
        assert exc_info.value.code == 2
        assert "invalid choice" in capsys.readouterr().err

    def test_sandbox_flag_absent(self):
        args = build_parser().parse_args([])
        assert args.sandbox is None


class TestMain:
    def test_no_sandbox(self, clean_env, capsys):
        with patch("cli_sandbox.main.enter_sandbox", return_value=None):
            assert main([]) == 0
        assert "Running without sandbox" in capsys.readouterr().out

    def test_inside_sandbox(self, clean_env, monkeypatch, capsys):
        monkeypatch.setenv("SANDBOX", "docker")

        assert main(["--sandbox"]) == 0

        assert "Running inside sandbox" in capsys.readouterr().out

    def test_invalid_backend_exits_non_zero(self, clean_env, monkeypatch, capsys):
        monkeypatch.setenv("GEMINI_SANDBOX", "bogus")

        assert main(["--sandbox"]) == 1

        out = capsys.readouterr().out
        assert "failed to start sandbox" in out
        assert "bogus" in out

    def test_unavailable_backend_exits_non_zero(self, clean_env, capsys):
        error = SandboxUnavailableError("install docker or podman")
        with patch("cli_sandbox.main.enter_sandbox", side_effect=error):
            assert main(["--sandbox"]) == 1

    def test_passes_original_arguments(self, clean_env):
        config = LaunchConfig(backend=SandboxBackend.DOCKER, image="img")
        with patch("cli_sandbox.main.enter_sandbox", return_value=config) as mock_enter:
            assert main(["--sandbox", "--sandbox-image", "img", "fix", "the", "bug"]) == 0

        kwargs = mock_enter.call_args.kwargs
        assert kwargs["sandbox_flag"] is True
        assert kwargs["image_flag"] == "img"
        assert kwargs["args"] == ["--sandbox", "--sandbox-image", "img", "fix", "the", "bug"]

    def test_short_flag_keeps_prompt_words(self, clean_env):
        with patch("cli_sandbox.main.enter_sandbox", return_value=None) as mock_enter:
            assert main(["-s", "fix", "the", "bug"]) == 0

        kwargs = mock_enter.call_args.kwargs
        assert kwargs["sandbox_flag"] is True
        assert kwargs["args"][-3:] == ["fix", "the", "bug"]

    def test_sandbox_backend_passed_as_name(self, clean_env):
        with patch("cli_sandbox.main.enter_sandbox", return_value=None) as mock_enter:
            main(["--sandbox-backend", "podman", "hello"])

        assert mock_enter.call_args.kwargs["sandbox_flag"] == "podman"

    def test_no_flags_defer_to_config(self, clean_env):
        with patch("cli_sandbox.main.enter_sandbox", return_value=None) as mock_enter:
            main(["hello"])

        assert mock_enter.call_args.kwargs["sandbox_flag"] is None

    def test_config_file(self, clean_env, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("tools:\n  sandbox: docker\n  sandbox_image: cfg-image\n")
        with patch("cli_sandbox.main.enter_sandbox", return_value=None) as mock_enter:
            main(["--config", str(path)])

        settings = mock_enter.call_args.args[0]
        assert settings.sandbox == "docker"
        assert settings.sandbox_image == "cfg-image"

    def test_list_profiles(self, clean_env, capsys):
        assert main(["--list-profiles"]) == 0
        assert "permissive-open" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "0.1.0" in capsys.readouterr().out
