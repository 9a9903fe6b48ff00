"""Detect whether this process already runs inside a sandbox."""

import os
from typing import Mapping, Optional

# Set by both launchers for the relaunched process
SANDBOX_ENV = "SANDBOX"


def is_inside_sandbox(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Return True if the sandbox marker variable is set and non-empty."""
    if environ is None:
        environ = os.environ
    return bool(environ.get(SANDBOX_ENV, ""))
