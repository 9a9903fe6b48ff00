"""
UI Module - CLI Interface with Rich Terminal

Progress lines, error panels, and profile listings.
"""

from .terminal import TerminalUI, RichConsole

__all__ = [
    "TerminalUI",
    "RichConsole",
]
