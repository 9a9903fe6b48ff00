"""
Seatbelt Profile Launcher - macOS sandbox-exec

Renders a bundled seatbelt profile into a temporary .sb file and replaces
this process with `sandbox-exec -f <profile> -D ... <cli> <args>`.

Profiles are parameterised by TARGET_DIR, TMP_DIR, HOME_DIR, CACHE_DIR and
INCLUDE_DIR_0..INCLUDE_DIR_4; unused include slots point at /dev/null.
"""

import os
import sys
import tempfile
from importlib import resources
from pathlib import Path
from typing import List, Mapping, Optional

from ..core.config import SandboxBackend
from ..core.exceptions import (
    HomeDirectoryError,
    ProfileError,
    ProfileFileError,
    UnknownProfileError,
    WorkingDirectoryError,
)
from ..core.logging_config import get_logger
from ..ui.terminal import RichConsole
from .detection import SANDBOX_ENV
from .process import ProcessReplacer, replace_process

logger = get_logger(__name__)

PROFILE_ENV = "SEATBELT_PROFILE"
DEFAULT_PROFILE = "permissive-open"
PROFILE_SUFFIX = ".sb"

MAX_INCLUDE_DIRS = 5
INCLUDE_DIR_PLACEHOLDER = "/dev/null"


def list_profiles() -> List[str]:
    """Names of the bundled seatbelt profiles."""
    base = resources.files(__package__).joinpath("profiles")
    return sorted(
        entry.name[: -len(PROFILE_SUFFIX)]
        for entry in base.iterdir()
        if entry.name.endswith(PROFILE_SUFFIX)
    )


def load_profile(name: str) -> bytes:
    """
    Read a bundled profile by name.

    Raises:
        UnknownProfileError: No profile with that name is bundled
    """
    # Names are looked up, never treated as paths
    if not name or "/" in name or "\\" in name or name.startswith("."):
        raise UnknownProfileError(name)

    resource = resources.files(__package__).joinpath("profiles").joinpath(name + PROFILE_SUFFIX)
    try:
        return resource.read_bytes()
    except (FileNotFoundError, IsADirectoryError) as e:
        raise UnknownProfileError(name) from e


def user_home_dir(environ: Optional[Mapping[str, str]] = None) -> str:
    """The user's home directory, from $HOME in `environ` when it is set."""
    environ = os.environ if environ is None else environ
    if environ.get("HOME"):
        return environ["HOME"]
    try:
        return str(Path.home())
    except (KeyError, RuntimeError) as e:
        raise HomeDirectoryError(f"failed to get home directory: {e}") from e


def user_cache_dir(
    environ: Optional[Mapping[str, str]] = None,
    platform: Optional[str] = None,
    home: Optional[str] = None,
) -> str:
    """The per-user cache directory (XDG on Linux, ~/Library/Caches on macOS)."""
    environ = os.environ if environ is None else environ
    platform = sys.platform if platform is None else platform

    if platform == "win32":
        cache = environ.get("LOCALAPPDATA", "")
        if not cache:
            raise HomeDirectoryError("failed to get cache directory: %LocalAppData% is not defined")
        return cache

    if platform == "darwin":
        return os.path.join(home or user_home_dir(environ), "Library", "Caches")

    cache = environ.get("XDG_CACHE_HOME", "")
    if cache:
        if not os.path.isabs(cache):
            raise HomeDirectoryError("failed to get cache directory: path in $XDG_CACHE_HOME is relative")
        return cache
    return os.path.join(home or user_home_dir(environ), ".cache")


class ProfileLauncher:
    """
    Launches the CLI under sandbox-exec with a bundled profile.

    `include_dirs` are bound to the INCLUDE_DIR_n profile parameters.
    """

    def __init__(
        self,
        exec_process: ProcessReplacer = replace_process,
        environ: Optional[Mapping[str, str]] = None,
        cwd: Optional[str] = None,
        home_dir: Optional[str] = None,
        cache_dir: Optional[str] = None,
        temp_dir: Optional[str] = None,
        include_dirs: Optional[List[str]] = None,
        console: Optional[RichConsole] = None,
    ):
        self.exec_process = exec_process
        self.environ = environ
        self.cwd = cwd
        self.home_dir = home_dir
        self.cache_dir = cache_dir
        self.temp_dir = temp_dir
        self.include_dirs = list(include_dirs or [])
        self.console = console or RichConsole()

    def profile_name(self) -> str:
        environ = os.environ if self.environ is None else self.environ
        return environ.get(PROFILE_ENV, "") or DEFAULT_PROFILE

    def include_params(self) -> List[str]:
        """`-D INCLUDE_DIR_n=...` pairs for every include slot."""
        if len(self.include_dirs) > MAX_INCLUDE_DIRS:
            raise ProfileError(
                f"at most {MAX_INCLUDE_DIRS} include directories are supported, "
                f"got {len(self.include_dirs)}"
            )

        params = []
        for i in range(MAX_INCLUDE_DIRS):
            if i < len(self.include_dirs):
                path = os.path.abspath(self.include_dirs[i])
            else:
                path = INCLUDE_DIR_PLACEHOLDER
            params += ["-D", f"INCLUDE_DIR_{i}={path}"]
        return params

    def build_args(
        self,
        profile_path: str,
        args: List[str],
        executable: str,
    ) -> List[str]:
        """Build the sandbox-exec arguments (without the program name)."""
        workdir = self._workdir()
        home = self.home_dir or user_home_dir(self.environ)
        cache = self.cache_dir or user_cache_dir(self.environ, home=home)
        tmp = self.temp_dir or tempfile.gettempdir()

        cmd_args = [
            "-f", profile_path,
            "-D", f"TARGET_DIR={workdir}",
            "-D", f"TMP_DIR={tmp}",
            "-D", f"HOME_DIR={home}",
            "-D", f"CACHE_DIR={cache}",
        ]
        cmd_args += self.include_params()

        cmd_args.append(executable)
        cmd_args.extend(args)
        return cmd_args

    def launch(self, args: List[str], executable: str) -> None:
        """
        Enter the seatbelt sandbox.

        The temporary profile is removed on every path that returns here.
        After a successful exec it is left in the temp dir for the OS.
        """
        name = self.profile_name()
        profile_data = load_profile(name)

        profile_path = self._write_profile(profile_data)
        try:
            self.console.print(f"hopping into sandbox (command: sandbox-exec, profile: {name}) ...")

            cmd_args = self.build_args(profile_path, args, executable)

            env = dict(os.environ if self.environ is None else self.environ)
            env[SANDBOX_ENV] = SandboxBackend.SANDBOX_EXEC.value

            self.exec_process(SandboxBackend.SANDBOX_EXEC.value, cmd_args, env)
        finally:
            _remove_quietly(profile_path)

    def _write_profile(self, data: bytes) -> str:
        try:
            fd, path = tempfile.mkstemp(prefix="sandbox-profile-", suffix=PROFILE_SUFFIX)
        except OSError as e:
            raise ProfileFileError(f"failed to create temp profile file: {e}") from e

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
        except OSError as e:
            _remove_quietly(path)
            raise ProfileFileError(f"failed to write to temp profile file: {e}") from e

        logger.debug("Wrote seatbelt profile to %s", path)
        return path

    def _workdir(self) -> str:
        if self.cwd:
            return self.cwd
        try:
            return os.getcwd()
        except OSError as e:
            raise WorkingDirectoryError(f"failed to get current working directory: {e}") from e


def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        # Must not mask the error that is already propagating
        logger.debug("Failed to remove seatbelt profile %s: %s", path, e)
