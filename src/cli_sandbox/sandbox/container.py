"""
Container Launcher - docker / podman

Makes sure the sandbox image is present locally (probe, pull once,
re-probe), then replaces this process with a `run --rm` of the image that
mounts the working directory at the same path and runs this CLI again.
"""

import os
import sys
from typing import Callable, List, Mapping, Optional

from ..core.config import LaunchConfig
from ..core.exceptions import (
    ImagePullError,
    ImageProbeError,
    ImageUnavailableError,
    WorkingDirectoryError,
)
from ..core.logging_config import get_logger
from ..ui.terminal import RichConsole
from .detection import SANDBOX_ENV
from .process import CommandResult, ProcessReplacer, replace_process, run_command

logger = get_logger(__name__)


class ContainerLauncher:
    """
    Launches the CLI inside a docker or podman container.

    All process interaction goes through the injected `run` and
    `exec_process` callables.
    """

    def __init__(
        self,
        run: Callable[..., CommandResult] = run_command,
        exec_process: ProcessReplacer = replace_process,
        environ: Optional[Mapping[str, str]] = None,
        cwd: Optional[str] = None,
        is_tty: Optional[Callable[[], bool]] = None,
        console: Optional[RichConsole] = None,
    ):
        self.run = run
        self.exec_process = exec_process
        self.environ = environ
        self.cwd = cwd
        self.is_tty = is_tty or sys.stdin.isatty
        self.console = console or RichConsole()

    def image_exists(self, backend: str, image: str) -> bool:
        """Check for the image with `<backend> images -q <image>`."""
        result = self.run([backend, "images", "-q", image], capture=True)
        if not result.success:
            # Usually the docker/podman daemon is not running
            raise ImageProbeError(
                f"'{backend} images' command failed: {result.stderr.strip() or f'exit status {result.exit_code}'}",
                backend=backend,
                image=image,
            )
        return bool(result.stdout.strip())

    def pull_image(self, backend: str, image: str) -> None:
        """Pull the image, streaming progress to the terminal."""
        self.console.print(f"Pulling image {image} using {backend}...")
        result = self.run([backend, "pull", image], capture=False)
        if not result.success:
            raise ImagePullError(
                f"failed to pull image {image}: exit status {result.exit_code}",
                backend=backend,
                image=image,
            )

    def ensure_image(self, backend: str, image: str) -> None:
        """
        Make sure `image` is available locally.

        Pulls at most once; a missing image after the pull is an error.
        """
        if self.image_exists(backend, image):
            logger.debug("Image %s present locally", image)
            return

        self.console.print(f"Image {image} not found locally, attempting to pull...")
        self.pull_image(backend, image)

        if not self.image_exists(backend, image):
            raise ImageUnavailableError(
                f"failed to obtain sandbox image {image} after pull attempt",
                backend=backend,
                image=image,
            )

    def build_args(
        self,
        config: LaunchConfig,
        args: List[str],
        executable: str,
        workdir: str,
    ) -> List[str]:
        """Build the `run` arguments (without the backend name)."""
        cmd_args = ["run", "-i", "--rm", "--init"]

        if self.is_tty():
            cmd_args.append("-t")

        # Same absolute path inside, so relative paths keep working
        cmd_args += ["--volume", f"{workdir}:{workdir}"]
        cmd_args += ["--workdir", workdir]

        cmd_args += ["--env", f"{SANDBOX_ENV}={config.backend.value}"]

        cmd_args.append(config.image)
        cmd_args.append(executable)
        cmd_args.extend(args)
        return cmd_args

    def launch(self, config: LaunchConfig, args: List[str], executable: str) -> None:
        """
        Enter the container sandbox.

        Only returns if `exec_process` returns; the default never does.
        """
        backend = config.backend.value
        self.ensure_image(backend, config.image)

        self.console.print(f"hopping into sandbox (command: {backend}, image: {config.image}) ...")

        workdir = self._workdir()
        cmd_args = self.build_args(config, args, executable, workdir)
        env = dict(os.environ if self.environ is None else self.environ)

        self.exec_process(backend, cmd_args, env)

    def _workdir(self) -> str:
        if self.cwd:
            return self.cwd
        try:
            return os.getcwd()
        except OSError as e:
            raise WorkingDirectoryError(f"failed to get current working directory: {e}") from e
