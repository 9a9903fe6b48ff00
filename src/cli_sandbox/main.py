"""
CLI Sandbox Entry Point

Runs the sandbox decision before anything else:
- already inside a sandbox: carry on
- sandbox requested: relaunch this CLI under docker, podman, or sandbox-exec
- launch failure: report and exit non-zero, never run unsandboxed
"""

import argparse
import os
import sys
from typing import List, Optional

from . import __version__
from .core.config import SandboxBackend, load_config
from .core.exceptions import SandboxError
from .core.logging_config import configure_logging, get_logger
from .sandbox.detection import SANDBOX_ENV
from .sandbox.launcher import enter_sandbox
from .sandbox.seatbelt import DEFAULT_PROFILE, list_profiles
from .ui.terminal import TerminalUI

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cli-sandbox",
        description="Run the CLI inside a docker, podman, or sandbox-exec sandbox",
    )
    parser.add_argument("--config", default=None, help="Config file path")
    parser.add_argument(
        "-s", "--sandbox",
        action="store_true",
        default=None,
        help="Run in a sandbox",
    )
    parser.add_argument(
        "--sandbox-backend",
        default=None,
        choices=SandboxBackend.names(),
        help="Sandbox backend to use (implies --sandbox)",
    )
    parser.add_argument("--sandbox-image", default=None, help="The sandbox image to use")
    parser.add_argument("--list-profiles", action="store_true", help="List bundled seatbelt profiles")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="Arguments for the agent")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit status."""
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else argv
    args = parser.parse_args(argv)

    config = load_config(args.config)
    configure_logging(config.observability.log_level, config.observability.log_file)

    ui = TerminalUI()

    if args.list_profiles:
        ui.show_profiles(list_profiles(), DEFAULT_PROFILE)
        return 0

    try:
        launched = enter_sandbox(
            config.tools,
            sandbox_flag=args.sandbox_backend or args.sandbox,
            image_flag=args.sandbox_image,
            args=argv,
        )
    except SandboxError as e:
        logger.debug("Sandbox launch failed", exc_info=True)
        ui.show_error(f"failed to start sandbox: {e}")
        return 1

    if launched is not None:
        return 0

    ui.show_sandbox_status(os.environ.get(SANDBOX_ENV, ""))
    return 0


def run():
    """Synchronous entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
